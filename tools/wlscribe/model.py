"""
Protocol model: plain records built by the reader and consumed by the emitters.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class EnumEntry:
    name: str
    value: str                      # literal text, e.g. "0x04"
    summary: Optional[str] = None


@dataclass
class Enum:
    name: str
    entries: List[EnumEntry] = field(default_factory=list)


@dataclass
class Argument:
    name: str
    type: str                       # wire type tag: int, uint, fixed, string, ...
    interface: str = ""             # "" means any object
    summary: Optional[str] = None
    allow_null: bool = False


@dataclass
class Event:
    """A request (request=True) or an event (request=False)."""
    request: bool
    name: str
    type: str = ""                  # "destructor" or ""
    arguments: List[Argument] = field(default_factory=list)

    @property
    def is_destructor(self) -> bool:
        return self.type == "destructor"


@dataclass
class Interface:
    name: str
    version: int = 1
    enums: List[Enum] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    requests: List[Event] = field(default_factory=list)


@dataclass
class Protocol:
    name: str
    interfaces: List[Interface] = field(default_factory=list)


def new_id_argument(arguments: List[Argument]) -> Optional[Argument]:
    """Return the first new_id argument, or None. Later ones are ignored."""
    for arg in arguments:
        if arg.type == "new_id":
            return arg
    return None
