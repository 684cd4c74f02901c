"""
Reader: builds the protocol model from a Wayland protocol XML document.
"""

import re
import xml.etree.ElementTree as ET
from typing import Optional, Union

from .errors import MalformedDocument, MissingProtocolName, XmlSyntaxError
from .model import Argument, Enum, EnumEntry, Event, Interface, Protocol

_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")

# Markup allowed before the root element.
_PROLOG_RE = re.compile(r"<\?.*?\?>|<!--.*?-->|<!DOCTYPE[^>]*>", re.S)
_START_TAG_RE = re.compile(r"<[A-Za-z_:]")


# ── Attribute helpers ────────────────────────────────────────────────

def _str_value(node: ET.Element, name: str) -> str:
    return node.get(name, "")


def _opt_value(node: ET.Element, name: str) -> Optional[str]:
    return node.get(name)


def _int_value(node: ET.Element, name: str, default: int = 0) -> int:
    """Integer attribute, falling back to ``default`` if absent or non-numeric."""
    text = node.get(name, "")
    if not _INT_RE.match(text):
        return default
    return int(text)


def _bool_value(node: ET.Element, name: str) -> bool:
    return node.get(name) == "true"


def _has_element(source: Union[str, bytes]) -> bool:
    """True if anything besides prolog markup could start an element."""
    if isinstance(source, bytes):
        source = source.decode("utf-8", "replace")
    return _START_TAG_RE.search(_PROLOG_RE.sub("", source)) is not None


# ── Elements ─────────────────────────────────────────────────────────

def _read_argument(node: ET.Element) -> Argument:
    allow_null = node.get("allowNull")
    if allow_null is None:
        allow_null = node.get("allow-null")

    return Argument(
        name=_str_value(node, "name"),
        type=_str_value(node, "type"),
        interface=_str_value(node, "interface"),
        summary=_opt_value(node, "summary"),
        allow_null=(allow_null == "true"),
    )


def _read_event(node: ET.Element, request: bool) -> Event:
    event = Event(
        request=request,
        name=_str_value(node, "name"),
        type=_str_value(node, "type"),
    )
    for child in node:
        if child.tag == "arg":
            event.arguments.append(_read_argument(child))
    return event


def _read_enum(node: ET.Element) -> Enum:
    result = Enum(name=_str_value(node, "name"))
    for child in node:
        if child.tag == "entry":
            result.entries.append(EnumEntry(
                name=_str_value(child, "name"),
                value=_str_value(child, "value"),
                summary=_opt_value(child, "summary"),
            ))
    return result


def _read_interface(node: ET.Element) -> Interface:
    interface = Interface(
        name=_str_value(node, "name"),
        version=_int_value(node, "version", 1),
    )
    for child in node:
        if child.tag == "event":
            interface.events.append(_read_event(child, request=False))
        elif child.tag == "request":
            interface.requests.append(_read_event(child, request=True))
        elif child.tag == "enum":
            interface.enums.append(_read_enum(child))
        # Anything else (description, copyright, ...) is skipped.
    return interface


# ── Top-level ────────────────────────────────────────────────────────

def read_protocol(source: Union[str, bytes]) -> Protocol:
    """
    Parse protocol XML text into a ``Protocol``.

    Interfaces, and the enums/events/requests inside each, keep document
    order. Unknown elements are ignored at every level.

    Raises:
        XmlSyntaxError: The text is not well-formed XML.
        MalformedDocument: There is no root element, or it is not <protocol>.
        MissingProtocolName: <protocol> has an empty or missing name.
    """
    try:
        root = ET.fromstring(source)
    except ET.ParseError as e:
        if not _has_element(source):
            raise MalformedDocument("The file is not a wayland protocol file.") from e
        line, column = getattr(e, "position", (0, 0))
        raise XmlSyntaxError(str(e), line, column) from e

    if root.tag != "protocol":
        raise MalformedDocument("The file is not a wayland protocol file.")

    name = _str_value(root, "name")
    if not name:
        raise MissingProtocolName("Missing protocol name.")

    protocol = Protocol(name=name)
    for child in root:
        if child.tag == "interface":
            protocol.interfaces.append(_read_interface(child))

    return protocol
