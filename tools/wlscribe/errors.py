"""
Errors raised while reading a protocol description.
"""


class ScribeError(Exception):
    """Base class for all generator failures."""
    pass


class UnopenableInput(ScribeError):
    """Raised when the protocol file cannot be opened for reading."""
    pass


class MalformedDocument(ScribeError):
    """Raised when the document has no root element or the wrong one."""
    pass


class MissingProtocolName(ScribeError):
    """Raised when the <protocol> element has no name."""
    pass


class XmlSyntaxError(ScribeError):
    """Raised when the XML itself is not well-formed."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.line = line
        self.column = column
