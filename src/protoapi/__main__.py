from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .errors import ProtoapiError
from .generator import generate
from .loader import load_descriptor_set, read_descriptor_set
from .logs import configure_logging
from .options import parse_options


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="protoapi",
        description="Generate TypeScript/JavaScript API wrappers from a protobuf descriptor set.",
    )
    parser.add_argument(
        "descriptor_set",
        type=Path,
        help="FileDescriptorSet written by protoc --include_imports --descriptor_set_out",
    )
    parser.add_argument("-p", "--options", default="", help="Option string, e.g. output_paths=src/api")
    parser.add_argument(
        "-f",
        "--file",
        dest="files",
        action="append",
        help="Schema file whose services are generated (repeatable; default: all)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every reset directory and written file")

    args = parser.parse_args(argv)
    configure_logging(logging.INFO if args.verbose else logging.WARNING)

    try:
        config = parse_options(args.options)
        descriptor_set = read_descriptor_set(args.descriptor_set)
        files = load_descriptor_set(descriptor_set, args.files)
        generate(files, config)
    except ProtoapiError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
