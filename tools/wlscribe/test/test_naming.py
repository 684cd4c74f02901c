"""Tests for identifier case conversion and interface prefix handling."""

import pytest
from tools.wlscribe.naming import (
    is_ignored_interface,
    strip_interface_prefix,
    to_identifier_case,
)


class TestIdentifierCase:
    @pytest.mark.parametrize("name, capitalize, expected", [
        ("say_hello", False, "sayHello"),
        ("say_hello", True, "SayHello"),
        ("wl_shelf", True, "WlShelf"),
        ("zwp_thing_v1", True, "ZwpThingV1"),
        ("hello", False, "hello"),
        ("hello", True, "Hello"),
        ("", True, ""),
    ])
    def test_conversion(self, name, capitalize, expected):
        assert to_identifier_case(name, capitalize) == expected

    def test_already_camel_unchanged(self):
        assert to_identifier_case("sayHello", False) == "sayHello"
        assert to_identifier_case("SayHello", True) == "SayHello"

    def test_first_letter_follows_capitalize(self):
        assert to_identifier_case("SayHello", False) == "sayHello"
        assert to_identifier_case("sayHello", True) == "SayHello"

    def test_repeated_underscores(self):
        assert to_identifier_case("a__b", False) == "aB"

    def test_leading_and_trailing_underscore(self):
        assert to_identifier_case("_foo_", False) == "foo"

    def test_digits_untouched(self):
        assert to_identifier_case("v_2", False) == "v2"

    def test_idempotent(self):
        once = to_identifier_case("get_toplevel_state", True)
        assert to_identifier_case(once, True) == once


class TestPrefix:
    def test_default_wl_prefix(self):
        assert strip_interface_prefix("wl_shelf", False) == "shelf"

    def test_default_qt_prefix(self):
        assert strip_interface_prefix("qt_surface_extension", True) == "SurfaceExtension"

    def test_no_prefix(self):
        assert strip_interface_prefix("greeter", False) == "greeter"

    def test_configured_prefix(self):
        assert strip_interface_prefix("zwp_thing_v1", False, "zwp_") == "thingV1"

    def test_configured_prefix_wins(self):
        assert strip_interface_prefix("wl_zz_thing", False, "wl_zz_") == "thing"

    def test_configured_prefix_not_matching(self):
        assert strip_interface_prefix("xdg_surface", True, "zwp_") == "XdgSurface"

    def test_round_trip(self):
        stripped = strip_interface_prefix("zwp_foo_bar", False, "zwp_")
        again = strip_interface_prefix("zwp_" + "foo_bar", False, "zwp_")
        assert stripped == again == "fooBar"


class TestIgnoredInterfaces:
    def test_display_always_ignored(self):
        assert is_ignored_interface("wl_display", server=True)
        assert is_ignored_interface("wl_display", server=False)

    def test_registry_ignored_on_server_only(self):
        assert is_ignored_interface("wl_registry", server=True)
        assert not is_ignored_interface("wl_registry", server=False)

    def test_custom_kept(self):
        assert not is_ignored_interface("custom", server=True)
        assert not is_ignored_interface("custom", server=False)
