"""
Rendering helpers shared by the server and client emitters: preamble,
enum blocks, method signatures and argument marshaling.
"""

from typing import Iterator, List

from . import SCANNER_NAME, __version__
from .model import Argument, Enum, Event, Interface
from .naming import is_ignored_interface, to_identifier_case
from .options import GeneratorOptions, Role, include_directive
from .types import c_type, cpp_type, declare
from .writer import CodeWriter

STANDARD_INCLUDES = ("string", "vector", "cstdint")


# ── Artifact framing ─────────────────────────────────────────────────

def write_preamble(w: CodeWriter, options: GeneratorOptions, header: bool):
    """Provenance comment, optional include guard and common includes."""
    w.line(f"// This file was generated by {SCANNER_NAME} v{__version__}")
    w.line(f"// Source: {options.source_path}")
    w.line()

    if header and options.include_guard:
        w.line("#pragma once")
        w.line()

    for include in options.includes:
        w.line(f"#include {include_directive(include)}")
    for include in STANDARD_INCLUDES:
        w.line(f"#include <{include}>")


def protocol_file_stem(protocol_name: str) -> str:
    return protocol_name.replace("_", "-")


def local_include(file_name: str, options: GeneratorOptions) -> str:
    """``#include "x"``, or ``#include <header_path/x>`` if a path is set."""
    if options.header_path:
        return f"#include <{options.header_path}/{file_name}>"
    return f'#include "{file_name}"'


def emitted_interfaces(interfaces: List[Interface], role: Role) -> Iterator[Interface]:
    """Interfaces to wrap, in document order."""
    for interface in interfaces:
        if not is_ignored_interface(interface.name, role.is_server):
            yield interface


def write_enums(w: CodeWriter, enums: List[Enum], indent: str = "        "):
    for e in enums:
        w.line()
        w.line(f"{indent}enum class {e.name} {{")
        for entry in e.entries:
            text = f"{indent}    {e.name}_{entry.name} = {entry.value},"
            if entry.summary is not None:
                text += f" // {entry.summary}"
            w.line(text)
        w.line(f"{indent}}};")


# ── Signatures ───────────────────────────────────────────────────────

def _params(params: List[str]) -> str:
    if not params:
        return "()"
    return f"( {', '.join(params)} )"


def is_hidden_new_id(arg: Argument, event: Event, role: Role) -> bool:
    """
    Client-side new_id arguments that do not appear in the C++ signature.

    A typed new_id in a request becomes the return value; an untyped one in
    an event carries nothing the hook could use.
    """
    return arg.type == "new_id" and not role.is_server and (not arg.interface) != event.request


def event_signature(event: Event, role: Role, omit_names: bool = False,
                    with_resource: bool = False, capitalize: bool = False) -> str:
    """
    ``name( params )`` for a hook, send method or request wrapper.

    On the server, requests take the bound ``Resource *`` first; the
    explicit-resource ``send`` overload takes a raw ``wl_resource *``.
    """
    server = role.is_server
    params = []

    if server:
        if event.request:
            params.append(declare("Resource *", "" if omit_names else "resource"))
        elif with_resource:
            params.append(declare("struct ::wl_resource *", "" if omit_names else "resource"))

    for arg in event.arguments:
        if is_hidden_new_id(arg, event, role):
            continue

        if arg.type == "new_id" and event.request:
            if server:
                params.append(declare("uint32_t", "" if omit_names else arg.name))
            elif omit_names:
                params.append("const struct ::wl_interface *, uint32_t")
            else:
                params.append("const struct ::wl_interface *interface, uint32_t version")
            continue

        # Arrays stay wl_array on the receiving side only.
        native = cpp_type(arg.type, arg.interface, server,
                          c_style_array=(event.request == server))
        params.append(declare(native, "" if omit_names else arg.name))

    return to_identifier_case(event.name, capitalize) + _params(params)


def handler_signature(event: Event, role: Role, interface_name: str) -> str:
    """
    ``handleName( ... )`` matching the libwayland C callback layout.

    Server handlers sit in the ``<iface>_interface`` table, client handlers
    in the ``<iface>_listener`` table.
    """
    server = role.is_server
    if server:
        params = ["::wl_client *", "struct wl_resource *resource"]
    else:
        params = ["void *data", f"struct ::{interface_name} *"]

    for arg in event.arguments:
        arg_name = to_identifier_case(arg.name, False)
        if server and arg.type == "new_id":
            params.append(f"uint32_t {arg_name}")
        else:
            params.append(declare(c_type(arg.type, arg.interface, server), arg_name))

    return f"handle{to_identifier_case(event.name, True)}" + _params(params)


def call_args(args: List[str]) -> str:
    """Argument list for a generated call; ``( a, b )`` or ``()``."""
    return _params(args)


# ── Marshaling ───────────────────────────────────────────────────────

def inbound_value(arg: Argument) -> str:
    """C handler argument -> value passed on to the C++ hook."""
    name = to_identifier_case(arg.name, False)
    if arg.type == "string":
        if arg.allow_null:
            return f"({name} ? std::string({name}) : std::string())"
        return f"std::string({name})"
    return name


def outbound_value(arg: Argument) -> str:
    """C++ parameter -> value passed to the libwayland C function."""
    if arg.type == "string":
        return f"{arg.name}.c_str()"
    if arg.type == "array":
        return f"&{arg.name}_data"
    return arg.name


def array_marshaling(arguments: List[Argument]) -> List[str]:
    """Transient ``wl_array`` views over outbound byte vectors."""
    body = []
    for arg in arguments:
        if arg.type != "array":
            continue
        data = f"{arg.name}_data"
        body.extend([
            f"struct wl_array {data};",
            f"{data}.size = {arg.name}.size();",
            f"{data}.data = static_cast<void *>(const_cast<uint8_t *>({arg.name}.data()));",
            f"{data}.alloc = 0;",
            "",
        ])
    return body
