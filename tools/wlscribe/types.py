"""
Type system: Wayland wire types to C and C++ parameter types.
"""

# Wire type -> C type for tags that do not depend on role or interface.
TYPE_MAP = {
    "string": "const char *",
    "int":    "int32_t",
    "uint":   "uint32_t",
    "fixed":  "wl_fixed_t",
    "fd":     "int32_t",
    "array":  "wl_array *",
}

OBJECT_TYPES = ("object", "new_id")

STRING_TYPE = "const std::string &"
BYTES_TYPE = "const std::vector<uint8_t> &"


def c_type(wire_type: str, interface: str, server: bool) -> str:
    """
    Map a wire type to the C type libwayland uses in handler signatures.

    Objects are always ``wl_resource`` on the server; on the client they are
    the named proxy struct, or ``wl_object`` when no interface is given.
    Unknown tags are returned unchanged.
    """
    if wire_type in TYPE_MAP:
        return TYPE_MAP[wire_type]

    if wire_type in OBJECT_TYPES:
        if server:
            return "struct ::wl_resource *"
        if not interface:
            return "struct ::wl_object *"
        return f"struct ::{interface} *"

    return wire_type


def cpp_type(wire_type: str, interface: str, server: bool,
             c_style_array: bool = True) -> str:
    """
    Map a wire type to the C++ type used in the generated public API.

    Identical to ``c_type`` except strings become ``std::string`` and, when
    ``c_style_array`` is false, arrays become a byte vector.
    """
    if wire_type == "string":
        return STRING_TYPE
    if wire_type == "array" and not c_style_array:
        return BYTES_TYPE
    return c_type(wire_type, interface, server)


def declare(type_name: str, name: str = "") -> str:
    """Render ``type name`` without a space after ``*`` or ``&``."""
    if not name:
        return type_name
    if type_name.endswith(("*", "&")):
        return f"{type_name}{name}"
    return f"{type_name} {name}"
