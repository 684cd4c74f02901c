"""
CLI entry point for wlscribe.

Usage:
    python3 -m tools.wlscribe --server protocols/greeter.xml
    python3 -m tools.wlscribe --client greeter.xml --header include/greeter.hpp
    python3 -m tools.wlscribe --server greeter.xml --config scribe.yaml gen/greeter
"""

import argparse
import os
import sys

from . import __version__
from .config import ScribeConfig, ValidationError, load_config
from .options import FileSelector
from .scribe import Scribe


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wayland-scribe",
        description="Wayland protocol XML to C++ wrapper code generator",
    )

    role = parser.add_mutually_exclusive_group(required=True)
    role.add_argument("--server", metavar="SPEC",
                      help="Generate the server-side wrapper code for the given protocol")
    role.add_argument("--client", metavar="SPEC",
                      help="Generate the client-side wrapper code for the given protocol")

    parser.add_argument("--source", action="store_true",
                        help="Generate only the implementation file")
    parser.add_argument("--header", action="store_true",
                        help="Generate only the header file")
    parser.add_argument("--header-path", metavar="PATH",
                        help="Path to the C header of this protocol")
    parser.add_argument("--prefix",
                        help="Interface prefix to strip")
    parser.add_argument("--add-include", metavar="INCLUDE", action="append",
                        help="Extra include for the generated files (repeatable)")
    parser.add_argument("--config", metavar="FILE",
                        help="YAML file with header-path, prefix and includes")
    parser.add_argument("-v", "--version", action="version",
                        version=f"Wayland::Scribe {__version__}")
    parser.add_argument("output", nargs="*",
                        help="Name of the output file to be generated")
    return parser


def file_selector(source: bool, header: bool) -> FileSelector:
    if source and not header:
        return FileSelector.SOURCE
    if header and not source:
        return FileSelector.HEADER
    return FileSelector.BOTH


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if len(args.output) > 1:
        extra = " ".join(args.output[1:])
        print(f"[Warning]: Ignoring the extra argument(s): ({extra})", file=sys.stderr)

    config = ScribeConfig()
    if args.config:
        try:
            config = load_config(args.config)
        except ValidationError as e:
            print(f"[Error]: {args.config}: {e}", file=sys.stderr)
            return 1

    spec_file = args.server or args.client
    if not os.path.isfile(spec_file):
        print(f"[Error]: Unable to locate the file {spec_file}", file=sys.stderr)
        return 1

    scribe = Scribe()
    scribe.set_run_mode(
        spec_file,
        server=args.server is not None,
        file=file_selector(args.source, args.header),
        output=args.output[0] if args.output else "",
    )
    scribe.set_args(
        header_path=args.header_path if args.header_path is not None else config.header_path,
        prefix=args.prefix if args.prefix is not None else config.prefix,
        includes=args.add_include if args.add_include else config.includes,
    )

    if not scribe.process():
        scribe.print_errors()
        return 1

    for path in scribe.written:
        print(f"  wrote {path}")

    print(f"\nGenerated {len(scribe.written)} files for {scribe.role.value} "
          f"from '{spec_file}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
