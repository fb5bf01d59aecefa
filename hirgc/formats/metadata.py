# hirgc/formats/metadata.py
from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

from hirgc.errors import MalformedMetadata
from hirgc.models.compressed_record import (
    CompressedRecord, LinePlan, RangeList, SpecialCharCatalog,
)
from ._lines import Source, as_lines, parse_digit_run, parse_int_run

__all__ = ["METADATA_LINES", "decode", "decode_metadata", "parse_special_characters"]

# header, blank, line layout, lowercase ranges, N ranges, special characters, cursor state
METADATA_LINES = 7

_LINE_NAMES = (
    "header",
    "separator",
    "line layout",
    "lowercase ranges",
    "N ranges",
    "special characters",
    "cursor state",
)


def _ints(text: str, lineno: int) -> List[int]:
    try:
        return parse_int_run(text)
    except ValueError as e:
        raise MalformedMetadata(f"line {lineno} ({_LINE_NAMES[lineno - 1]}): {e}") from e


def _need(values: Sequence[int], n: int, lineno: int) -> None:
    if len(values) < n:
        raise MalformedMetadata(
            f"line {lineno} ({_LINE_NAMES[lineno - 1]}): expected {n} integers, found {len(values)}"
        )


def _parse_line_plan(text: str, lineno: int) -> LinePlan:
    # first value counts the integers that follow, not the pairs
    values = _ints(text, lineno)
    n = values[0]
    if n % 2:
        raise MalformedMetadata(f"line {lineno} (line layout): odd value count {n}")
    _need(values, n + 1, lineno)
    body = values[1:n + 1]
    return LinePlan(tuple(zip(body[0::2], body[1::2])))


def _parse_ranges(text: str, lineno: int) -> RangeList:
    values = _ints(text, lineno)
    n = values[0]
    _need(values, 2 * n + 1, lineno)
    body = values[1:2 * n + 1]
    return RangeList(tuple(zip(body[0::2], body[1::2])))


def parse_special_characters(text: str, lineno: int = 6) -> SpecialCharCatalog:
    """
    special_char_num, deltas..., unique_special_chars_num, offsets..., ORDER

    ORDER is everything after the last space: one digit per occurrence,
    each a direct alphabet index, so at most 10 distinct characters can be
    addressed. A line without a space only carries the (zero) count.
    """
    cut = text.rfind(" ")
    if cut < 0:
        values, order_text = _ints(text, lineno), ""
    else:
        values, order_text = _ints(text[:cut], lineno), text[cut + 1:]

    n = values[0]
    if n == 0:
        return SpecialCharCatalog()

    _need(values, n + 2, lineno)
    deltas = values[1:n + 1]
    u = values[n + 1]
    _need(values, n + 2 + u, lineno)
    offsets = values[n + 2:n + 2 + u]

    try:
        order = parse_digit_run(order_text)
        return SpecialCharCatalog(tuple(deltas), tuple(offsets), tuple(order))
    except ValueError as e:
        raise MalformedMetadata(f"line {lineno} (special characters): {e}") from e


def _parse_cursor_state(text: str, lineno: int) -> Tuple[int, int]:
    values = _ints(text, lineno)
    if len(values) == 1:
        # no separator: only the first run length was written
        return 0, values[0]
    if len(values) != 2:
        raise MalformedMetadata(
            f"line {lineno} (cursor state): expected 2 integers, found {len(values)}"
        )
    return values[0], values[1]


def decode_metadata(lines: Iterator[str]) -> CompressedRecord:
    """
    Consume exactly METADATA_LINES lines from ``lines`` and build the record.
    Lines after the metadata block are left unread in the iterator.
    """
    got: List[str] = []
    for ln in lines:
        got.append(ln)
        if len(got) == METADATA_LINES:
            break
    if len(got) < METADATA_LINES:
        raise MalformedMetadata(
            f"stream ended after {len(got)} lines; missing {_LINE_NAMES[len(got)]} line"
        )

    header = got[0]
    line_plan = _parse_line_plan(got[2], 3)
    lowercase = _parse_ranges(got[3], 4)
    ambiguous = _parse_ranges(got[4], 5)
    special = parse_special_characters(got[5], 6)
    cursor, run = _parse_cursor_state(got[6], 7)

    return CompressedRecord(
        header=header,
        line_plan=line_plan,
        lowercase=lowercase,
        ambiguous=ambiguous,
        special=special,
        initial_cursor=cursor,
        initial_run_length=run,
    )


def decode(source: Source) -> CompressedRecord:
    """Decode only the metadata block of a compressed target."""
    return decode_metadata(as_lines(source))
