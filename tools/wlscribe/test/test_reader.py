"""Tests for the protocol XML reader."""

import pytest
from tools.wlscribe.errors import (
    MalformedDocument,
    MissingProtocolName,
    ScribeError,
    XmlSyntaxError,
)
from tools.wlscribe.model import Argument, new_id_argument
from tools.wlscribe.reader import read_protocol


class TestProtocol:
    def test_protocol_name(self, greeter):
        assert greeter.name == "greeter"

    def test_single_interface(self, greeter):
        assert [i.name for i in greeter.interfaces] == ["greeter"]

    def test_interface_version(self, shelf):
        versions = {i.name: i.version for i in shelf.interfaces}
        assert versions["wl_shelf"] == 3
        assert versions["wl_item"] == 1

    def test_interface_order(self, shelf):
        names = [i.name for i in shelf.interfaces]
        assert names == ["wl_display", "wl_registry", "wl_shelf", "wl_item"]

    def test_bytes_input(self):
        proto = read_protocol(b'<protocol name="p"><interface name="x"/></protocol>')
        assert proto.name == "p"
        assert proto.interfaces[0].name == "x"

    def test_version_defaults_to_one(self):
        proto = read_protocol('<protocol name="p"><interface name="x"/></protocol>')
        assert proto.interfaces[0].version == 1

    def test_non_numeric_version(self):
        proto = read_protocol('<protocol name="p"><interface name="x" version="two"/></protocol>')
        assert proto.interfaces[0].version == 1

    def test_unknown_elements_skipped(self):
        xml = """\
<protocol name="p">
  <copyright>text</copyright>
  <interface name="x">
    <description summary="d"/>
    <request name="r"><description/><arg name="a" type="int"/></request>
  </interface>
  <bogus/>
</protocol>
"""
        proto = read_protocol(xml)
        assert len(proto.interfaces) == 1
        assert [a.name for a in proto.interfaces[0].requests[0].arguments] == ["a"]


class TestMessages:
    def test_request_and_event(self, greeter):
        iface = greeter.interfaces[0]
        assert [r.name for r in iface.requests] == ["say_hello"]
        assert [e.name for e in iface.events] == ["hello"]
        assert iface.requests[0].request
        assert not iface.events[0].request

    def test_argument_fields(self, greeter):
        arg = greeter.interfaces[0].requests[0].arguments[0]
        assert arg == Argument(name="name", type="string")

    def test_declaration_order(self, shelf):
        iface = shelf.interfaces[2]
        assert [r.name for r in iface.requests] == ["get_item", "bind_any", "upload", "destroy"]
        assert [e.name for e in iface.events] == ["announce", "moved"]

    def test_destructor(self, shelf):
        destroy = shelf.interfaces[2].requests[3]
        assert destroy.type == "destructor"
        assert destroy.is_destructor
        assert not shelf.interfaces[2].requests[0].is_destructor

    def test_object_interface(self, shelf):
        item = shelf.interfaces[2].events[1].arguments[0]
        assert item.type == "object"
        assert item.interface == "wl_item"

    def test_allow_null_dashed(self, shelf):
        label = shelf.interfaces[2].requests[2].arguments[1]
        assert label.allow_null

    def test_allow_null_camel(self):
        xml = """\
<protocol name="p"><interface name="x">
  <request name="r"><arg name="s" type="string" allowNull="true"/></request>
</interface></protocol>
"""
        arg = read_protocol(xml).interfaces[0].requests[0].arguments[0]
        assert arg.allow_null

    def test_allow_null_default(self, greeter):
        assert not greeter.interfaces[0].requests[0].arguments[0].allow_null


class TestEnums:
    def test_entries_in_order(self, shelf):
        enum = shelf.interfaces[2].enums[0]
        assert enum.name == "error"
        assert [e.name for e in enum.entries] == ["invalid_role", "busy"]

    def test_value_kept_as_text(self, shelf):
        entry = shelf.interfaces[2].enums[0].entries[0]
        assert entry.value == "0x04"

    def test_summary(self, shelf):
        entries = shelf.interfaces[2].enums[0].entries
        assert entries[0].summary == "bad role"
        assert entries[1].summary is None


class TestNewId:
    def test_first_new_id(self, shelf):
        get_item = shelf.interfaces[2].requests[0]
        assert new_id_argument(get_item.arguments).interface == "wl_item"

    def test_no_new_id(self, greeter):
        assert new_id_argument(greeter.interfaces[0].requests[0].arguments) is None

    def test_two_new_ids_first_wins(self):
        """Returns the first match; the second is ignored by downstream rendering."""
        args = [
            Argument(name="a", type="new_id", interface="first"),
            Argument(name="b", type="new_id", interface="second"),
        ]
        assert new_id_argument(args).name == "a"


class TestErrors:
    def test_malformed_xml(self):
        with pytest.raises(XmlSyntaxError) as exc:
            read_protocol('<protocol name="p">\n<interface name="x">\n</protocol>')
        assert exc.value.line == 3
        assert exc.value.column >= 0

    @pytest.mark.parametrize("text", [
        "",
        "   \n",
        '<?xml version="1.0"?>\n',
        "<!-- only a comment -->",
        b'<?xml version="1.0" encoding="UTF-8"?>\n<!-- nothing else -->\n',
    ])
    def test_missing_root(self, text):
        with pytest.raises(MalformedDocument):
            read_protocol(text)

    def test_unclosed_root_is_syntax_error(self):
        with pytest.raises(XmlSyntaxError):
            read_protocol('<?xml version="1.0"?>\n<protocol name="p"')

    def test_wrong_root(self):
        with pytest.raises(MalformedDocument):
            read_protocol('<interface name="x"/>')

    def test_missing_name(self):
        with pytest.raises(MissingProtocolName):
            read_protocol("<protocol><interface name='x'/></protocol>")

    def test_empty_name(self):
        with pytest.raises(MissingProtocolName):
            read_protocol('<protocol name=""/>')

    def test_common_base(self):
        with pytest.raises(ScribeError):
            read_protocol("<foo/>")
