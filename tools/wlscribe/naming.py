"""
Naming rules: wire identifiers (snake_case) to C++ identifiers (camelCase).
"""

# Prefixes stripped from interface names when no explicit prefix is given.
DEFAULT_PREFIXES = ("qt_", "wl_")

# Provided by libwayland itself; never wrapped.
DISPLAY_INTERFACE = "wl_display"
REGISTRY_INTERFACE = "wl_registry"


def _ascii_upper(ch: str) -> str:
    return chr(ord(ch) - 32) if "a" <= ch <= "z" else ch


def _ascii_lower(ch: str) -> str:
    return chr(ord(ch) + 32) if "A" <= ch <= "Z" else ch


def to_identifier_case(name: str, capitalize: bool) -> str:
    """
    Convert ``snake_case`` to ``camelCase`` (or ``CamelCase`` if capitalize).

    Underscores are dropped and the letter after each one is upper-cased.
    The first character is upper-cased or lower-cased according to
    ``capitalize``. Only ASCII letters change case.
    """
    out = []
    next_upper = False
    for ch in name:
        if ch == "_":
            next_upper = True
            continue
        if not out:
            ch = _ascii_upper(ch) if capitalize else _ascii_lower(ch)
        elif next_upper:
            ch = _ascii_upper(ch)
        out.append(ch)
        next_upper = False
    return "".join(out)


def strip_interface_prefix(name: str, capitalize: bool, prefix: str = "") -> str:
    """
    Drop the interface prefix, then convert with ``to_identifier_case``.

    A configured ``prefix`` takes precedence over the built-in ``qt_``/``wl_``.
    """
    if prefix and name.startswith(prefix):
        return to_identifier_case(name[len(prefix):], capitalize)

    if name.startswith(DEFAULT_PREFIXES):
        return to_identifier_case(name[3:], capitalize)

    return to_identifier_case(name, capitalize)


def is_ignored_interface(name: str, server: bool) -> bool:
    """True for the bootstrap interfaces libwayland already implements."""
    return name == DISPLAY_INTERFACE or (server and name == REGISTRY_INTERFACE)
