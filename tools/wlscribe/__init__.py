"""
wlscribe: Wayland protocol XML to C++ binding generator.

Reads a protocol description and emits a header/implementation pair of
C++ wrapper classes for either the server or the client side of libwayland.
"""

__version__ = "1.0.0"

SCANNER_NAME = "wayland-scribe"
