"""Shared fixtures for wlscribe tests."""

import pytest
import sys
import os

# Add the project root to sys.path so 'tools.wlscribe' is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", ".."))

from tools.wlscribe.options import GeneratorOptions
from tools.wlscribe.reader import read_protocol


GREETER_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<protocol name="greeter">
  <copyright>Public domain.</copyright>
  <interface name="greeter" version="1">
    <description summary="says hello">Exchange of greetings.</description>
    <request name="say_hello">
      <arg name="name" type="string"/>
    </request>
    <event name="hello">
      <arg name="greeting" type="string"/>
    </event>
  </interface>
</protocol>
"""


SHELF_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<protocol name="shelf_test">
  <interface name="wl_display" version="1">
    <request name="sync">
      <arg name="callback" type="new_id" interface="wl_callback"/>
    </request>
  </interface>

  <interface name="wl_registry" version="1">
    <event name="global">
      <arg name="name" type="uint"/>
      <arg name="interface" type="string"/>
      <arg name="version" type="uint"/>
    </event>
  </interface>

  <interface name="wl_shelf" version="3">
    <enum name="error">
      <entry name="invalid_role" value="0x04" summary="bad role"/>
      <entry name="busy" value="1"/>
    </enum>

    <request name="get_item">
      <arg name="id" type="new_id" interface="wl_item"/>
      <arg name="slot" type="int"/>
    </request>
    <request name="bind_any">
      <arg name="id" type="new_id"/>
    </request>
    <request name="upload">
      <arg name="data" type="array"/>
      <arg name="label" type="string" allow-null="true"/>
    </request>
    <request name="destroy" type="destructor"/>

    <event name="announce">
      <arg name="id" type="new_id"/>
      <arg name="tag" type="string"/>
    </event>
    <event name="moved">
      <arg name="item" type="object" interface="wl_item"/>
      <arg name="x" type="fixed"/>
    </event>
  </interface>

  <interface name="wl_item" version="1">
    <request name="release" type="destructor"/>
    <event name="payload">
      <arg name="bytes" type="array"/>
    </event>
  </interface>
</protocol>
"""


@pytest.fixture
def greeter():
    """Parsed greeter protocol."""
    return read_protocol(GREETER_XML)


@pytest.fixture
def shelf():
    """Parsed protocol using wl_ names, enums, new_ids, arrays and destructors."""
    return read_protocol(SHELF_XML)


@pytest.fixture
def options():
    return GeneratorOptions(source_path="protocols/test.xml")


@pytest.fixture
def greeter_file(tmp_path):
    """greeter.xml written to a temporary directory."""
    path = tmp_path / "greeter.xml"
    path.write_text(GREETER_XML)
    return path
