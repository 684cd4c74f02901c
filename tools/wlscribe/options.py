"""
Run configuration: role, artifact selection, generator options and
output path derivation.
"""

import enum
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

HEADER_SUFFIXES = (".h", ".hh", ".hpp")
SOURCE_SUFFIXES = (".cc", ".cpp")
SPEC_SUFFIX = ".xml"


class Role(enum.Enum):
    SERVER = "server"
    CLIENT = "client"

    @property
    def is_server(self) -> bool:
        return self is Role.SERVER


class FileSelector(enum.IntEnum):
    BOTH = 0
    SOURCE = 1
    HEADER = 2


@dataclass
class GeneratorOptions:
    """Everything the emitters need besides the protocol itself."""
    source_path: str = ""               # protocol file, echoed in the provenance line
    header_path: str = ""               # directory of the protocol's C header
    prefix: str = ""                    # interface prefix to strip
    includes: List[str] = field(default_factory=list)
    header_name: Optional[str] = None   # file name of the generated header
    include_guard: bool = True


def include_directive(include: str) -> str:
    """Wrap an extra include in <...> unless it is already delimited."""
    if include.startswith(("<", '"')):
        return include
    return f"<{include}>"


def _strip_suffix(path: str, suffixes) -> str:
    for suffix in suffixes:
        if path.endswith(suffix):
            return path[:-len(suffix)]
    return path


def default_output_base(spec_file: str, role: Role) -> str:
    """``foo.xml`` -> ``foo-server`` / ``foo-client``."""
    base = spec_file[:-len(SPEC_SUFFIX)] if spec_file.endswith(SPEC_SUFFIX) else spec_file
    return f"{base}-{role.value}"


def output_paths(spec_file: str, role: Role,
                 selector: FileSelector = FileSelector.BOTH,
                 output: str = "") -> Tuple[Optional[str], Optional[str]]:
    """
    Work out where the artifacts go.

    Returns (header_path, source_path); the one not selected is None.
    """
    base = output or default_output_base(spec_file, role)

    if selector == FileSelector.SOURCE:
        source = base if base.endswith(SOURCE_SUFFIXES) else base + ".cpp"
        return None, source

    if selector == FileSelector.HEADER:
        header = base if base.endswith(HEADER_SUFFIXES) else base + ".hpp"
        return header, None

    base = _strip_suffix(base, HEADER_SUFFIXES + SOURCE_SUFFIXES)
    return base + ".hpp", base + ".cpp"


def default_header_name(protocol_name: str, role: Role) -> str:
    return f"{protocol_name.replace('_', '-')}-{role.value}.hpp"


def header_name_for(header_path: Optional[str]) -> Optional[str]:
    return os.path.basename(header_path) if header_path else None
