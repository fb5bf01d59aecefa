#!/usr/bin/env python3
"""
Rebuild a target sequence from a HiRGC-compressed file and its reference.

Example:
  ./decompress_hirgc.py -r reference.fa -t compressed_target.txt

Writes reconstructed_sequence.txt in the current directory.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from hirgc import decompress, load_reference
from hirgc.formats import wrapped

OUTPUT_FILENAME = "reconstructed_sequence.txt"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="decompress_hirgc",
        description="Decompress a HiRGC target file against its reference.",
        add_help=False,
    )
    p.add_argument("-r", dest="reference", required=True, metavar="<reference_file_name>",
                   help="Reference FASTA used at compression time.")
    p.add_argument("-t", dest="target", required=True, metavar="<target_file_name>",
                   help="Compressed target file.")
    return p


def show_help_message(parser: argparse.ArgumentParser, reason: str) -> None:
    print(f"Error: {reason}")
    parser.print_usage(sys.stdout)


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = build_parser()
    # flags are positional in practice: exactly "-r REF -t TARGET"
    if len(argv) != 4:
        show_help_message(parser, "Invalid number of arguments.")
        raise SystemExit(1)
    if argv[0] != "-r" or argv[2] != "-t":
        show_help_message(parser, "Invalid arguments.")
        raise SystemExit(1)
    # taken as given so that names starting with "-" still work
    return argparse.Namespace(reference=argv[1], target=argv[3])


def main(argv: Optional[List[str]] = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)

    for p in (ns.reference, ns.target):
        if not os.path.isfile(p):
            print(f"error: file not found: {p}", file=sys.stderr)
            return 2

    try:
        reference = load_reference(ns.reference)
        result = decompress(reference, ns.target)
        wrapped.encode(result.header, result.sequence, result.line_plan, sink=OUTPUT_FILENAME)
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
