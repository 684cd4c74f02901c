"""
Scribe: the driver tying reader, emitters and output files together.

Typical use:

    scribe = Scribe()
    scribe.set_run_mode("greeter.xml", server=True)
    scribe.set_args(header_path="protocols")
    if not scribe.process():
        scribe.print_errors()
"""

import sys
from typing import List, Optional, Sequence, Tuple

from .client_emitter import emit_client_cpp, emit_client_h
from .errors import ScribeError, UnopenableInput, XmlSyntaxError
from .model import Protocol
from .options import (
    FileSelector,
    GeneratorOptions,
    Role,
    header_name_for,
    output_paths,
)
from .reader import read_protocol
from .server_emitter import emit_server_cpp, emit_server_h

EMITTERS = {
    Role.SERVER: (emit_server_h, emit_server_cpp),
    Role.CLIENT: (emit_client_h, emit_client_cpp),
}


def read_protocol_file(path: str) -> Protocol:
    """Read and parse a protocol file.

    Raises:
        UnopenableInput: The file cannot be opened.
        ScribeError: Any of the reader's document errors.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise UnopenableInput(f"Cannot open {path}: {e.strerror}")
    return read_protocol(data)


def generate(protocol: Protocol, role: Role,
             options: GeneratorOptions) -> Tuple[str, str]:
    """Render (header, implementation) for one role."""
    emit_h, emit_cpp = EMITTERS[role]
    return emit_h(protocol, options), emit_cpp(protocol, options)


class Scribe:
    """One generator run: configure with set_run_mode/set_args, then process()."""

    def __init__(self):
        self.spec_file = ""
        self.role = Role.CLIENT
        self.file = FileSelector.BOTH
        self.header_out: Optional[str] = None
        self.source_out: Optional[str] = None
        self.header_path = ""
        self.prefix = ""
        self.includes: List[str] = []
        self.written: List[str] = []
        self.error: Optional[Exception] = None

    def set_run_mode(self, spec_file: str, server: bool,
                     file: FileSelector = FileSelector.BOTH, output: str = ""):
        self.spec_file = spec_file
        self.role = Role.SERVER if server else Role.CLIENT
        self.file = FileSelector(file)
        self.header_out, self.source_out = output_paths(
            spec_file, self.role, self.file, output)

    def set_args(self, header_path: str = "", prefix: str = "",
                 includes: Sequence[str] = ()):
        self.header_path = header_path
        self.prefix = prefix
        self.includes = list(includes)

    def options(self) -> GeneratorOptions:
        return GeneratorOptions(
            source_path=self.spec_file,
            header_path=self.header_path,
            prefix=self.prefix,
            includes=list(self.includes),
            header_name=header_name_for(self.header_out),
        )

    def process(self) -> bool:
        """
        Parse the protocol and write the selected artifacts.

        The whole document is parsed before any output file is opened.
        Returns False on failure; the cause is kept for print_errors().
        """
        self.error = None
        self.written = []

        try:
            protocol = read_protocol_file(self.spec_file)
        except ScribeError as e:
            self.error = e
            return False

        emit_h, emit_cpp = EMITTERS[self.role]
        options = self.options()

        outputs = []
        if self.header_out is not None:
            outputs.append((self.header_out, emit_h(protocol, options)))
        if self.source_out is not None:
            outputs.append((self.source_out, emit_cpp(protocol, options)))

        try:
            for path, content in outputs:
                with open(path, "w") as f:
                    f.write(content)
                self.written.append(path)
        except OSError as e:
            self.error = e
            return False

        return True

    def print_errors(self):
        if self.error is None:
            return

        if isinstance(self.error, XmlSyntaxError):
            print(f"XML error: {self.error}", file=sys.stderr)
            print(f"Line {self.error.line}, column {self.error.column}", file=sys.stderr)
        elif isinstance(self.error, OSError):
            print(f"[Error]: Cannot write {self.error.filename}: {self.error.strerror}",
                  file=sys.stderr)
        else:
            print(f"[Error]: {self.error}", file=sys.stderr)
