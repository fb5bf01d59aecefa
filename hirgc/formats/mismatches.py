# hirgc/formats/mismatches.py
from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from hirgc.errors import MalformedMetadata, MalformedMismatchEntry, TruncatedMismatchStream
from hirgc.models.compressed_record import BASE_CODES, MismatchEntry
from ._lines import Source, as_lines
from .metadata import METADATA_LINES

__all__ = ["decode", "decode_entries", "parse_bases", "parse_offsets"]


def parse_bases(text: str, lineno: int = 0) -> Tuple[int, ...]:
    """Dense run of base codes, one digit per substituted base; may be empty."""
    codes = []
    for c in text:
        code = ord(c) - 48
        if not 0 <= code < len(BASE_CODES):
            raise MalformedMismatchEntry(f"line {lineno}: bad base code {c!r} in {text!r}")
        codes.append(code)
    return tuple(codes)


def parse_offsets(text: str, lineno: int = 0) -> Tuple[int, int]:
    """
    Parse "<offset_from_prev> <continue_for>", each optionally prefixed by '-'.

    The sign is line-scoped: once a '-' is seen the multiplier stays -1 for
    every later digit, the first value is taken as accumulated and the
    second is multiplied by the multiplier once more when flushed. So a
    '-' anywhere leaves continue_for non-negative:

        "-5 3"  -> (-5, 3)
        "5 -3"  -> (5, 3)
        "-5 -3" -> (-5, 3)
    """
    if text.count(" ") != 1:
        raise MalformedMismatchEntry(
            f"line {lineno}: expected '<offset> <continue_for>', got {text!r}"
        )
    first_text, second_text = text.split(" ")
    for part in (first_text, second_text):
        digits = part[1:] if part.startswith("-") else part
        if not digits or not digits.isdigit() or not digits.isascii():
            raise MalformedMismatchEntry(
                f"line {lineno}: expected '<offset> <continue_for>', got {text!r}"
            )

    mult = 1
    value = 0
    offset = 0
    for c in text:
        if c == "-":
            mult = -1
            continue
        if c == " ":
            offset = value
            value = 0
            continue
        value = value * 10 + mult * (ord(c) - 48)
    return offset, value * mult


def decode_entries(lines: Iterable[str], *, first_lineno: int = METADATA_LINES + 1) -> Iterator[MismatchEntry]:
    """
    Read (bases, offsets) line pairs until the lines run out.
    ``first_lineno`` only feeds error messages.
    """
    it = iter(lines)
    lineno = first_lineno
    for bases_line in it:
        offsets_line = next(it, None)
        if offsets_line is None:
            raise TruncatedMismatchStream(
                f"line {lineno}: mismatch bases without an offset line at end of stream"
            )
        bases = parse_bases(bases_line, lineno)
        offset, continue_for = parse_offsets(offsets_line, lineno + 1)
        yield MismatchEntry(bases, offset, continue_for)
        lineno += 2


def decode(source: Source) -> Iterator[MismatchEntry]:
    """Skip the metadata block of a compressed target and decode its mismatch entries."""
    it = as_lines(source)
    for n in range(METADATA_LINES):
        if next(it, None) is None:
            raise MalformedMetadata(f"stream ended after {n} lines, inside the metadata block")
    return decode_entries(it)
