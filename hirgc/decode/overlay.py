# hirgc/decode/overlay.py
from __future__ import annotations

from typing import Iterable, List, Tuple

from hirgc.errors import MalformedMetadata
from hirgc.models.compressed_record import CompressedRecord, RangeList, SpecialCharCatalog

__all__ = [
    "AMBIGUOUS_BASE",
    "apply_overlays",
    "insert_special_characters",
    "insert_ambiguous_runs",
    "apply_lowercase",
]

AMBIGUOUS_BASE = b"N"


def _merge(seq: bytearray, inserts: Iterable[Tuple[int, bytes]], what: str) -> bytearray:
    """
    Interleave ``seq`` with inserted runs in one linear pass.

    ``inserts`` yields (gap, run): copy ``gap`` characters of ``seq``, then
    write ``run``. Because every gap is measured from the end of the
    previous insertion, this matches inserting each run in turn at its
    absolute final position, in ascending order.
    """
    plan: List[Tuple[int, bytes]] = list(inserts)
    out = bytearray(len(seq) + sum(len(run) for _, run in plan))
    src = memoryview(seq)
    r = w = 0
    for i, (gap, run) in enumerate(plan):
        if r + gap > len(seq):
            raise MalformedMetadata(
                f"{what} {i}: starts {r + gap - len(seq)} past the end of a "
                f"{len(seq) + w - r}-base sequence"
            )
        out[w:w + gap] = src[r:r + gap]
        w += gap
        r += gap
        out[w:w + len(run)] = run
        w += len(run)
    out[w:] = src[r:]
    return out


def insert_special_characters(seq: bytearray, catalog: SpecialCharCatalog) -> bytearray:
    """
    Put the catalogued non-ACGT characters back, one per start delta.
    Returns a new buffer; ``seq`` is left untouched.
    """
    if catalog.count == 0:
        return seq
    chars = [c.encode("ascii") for c in catalog.characters()]
    return _merge(seq, zip(catalog.deltas, chars), "special character")


def insert_ambiguous_runs(seq: bytearray, ranges: RangeList) -> bytearray:
    """Insert a run of N for every (start_delta, length) pair."""
    if ranges.count == 0:
        return seq
    return _merge(
        seq,
        ((start, AMBIGUOUS_BASE * length) for start, length in ranges),
        "N range",
    )


def apply_lowercase(seq: bytearray, ranges: RangeList) -> bytearray:
    """Lower-case every range in place; the length does not change."""
    for i, (start, length) in enumerate(ranges.absolute()):
        end = start + length
        if end > len(seq):
            raise MalformedMetadata(
                f"lowercase range {i}: [{start}, {end}) is outside a {len(seq)}-base sequence"
            )
        seq[start:end] = seq[start:end].lower()
    return seq


def apply_overlays(seq: bytearray, record: CompressedRecord) -> bytearray:
    """
    Apply the three overlay passes in their fixed order: special characters,
    then N runs, then lowercase. Each pass works in the coordinates left by
    the previous one.
    """
    seq = insert_special_characters(seq, record.special)
    seq = insert_ambiguous_runs(seq, record.ambiguous)
    return apply_lowercase(seq, record.lowercase)
