# hirgc/decode/reconstruct.py
from __future__ import annotations

from typing import Sequence

from hirgc.errors import MalformedMismatchEntry, ReferenceOutOfBounds
from hirgc.models.compressed_record import MismatchEntry
from hirgc.sequences.base import MAX_SEQ_LENGTH, SequenceSource

__all__ = ["KMER_LENGTH", "reconstruct", "reconstructed_length"]

# Copy-run floor: the matcher anchors on k-mers of this length, so every
# copy run is at least this long and stored lengths exclude it.
KMER_LENGTH = 20


def reconstructed_length(
    initial_run_length: int,
    entries: Sequence[MismatchEntry],
    *,
    kmer_length: int = KMER_LENGTH,
) -> int:
    """Exact length of the ACGT sequence ``reconstruct`` will produce."""
    total = max(0, initial_run_length + kmer_length)
    for e in entries:
        total += len(e.bases) + max(0, e.continue_for + kmer_length)
    return total


def reconstruct(
    reference: SequenceSource,
    initial_cursor: int,
    initial_run_length: int,
    entries: Sequence[MismatchEntry],
    *,
    kmer_length: int = KMER_LENGTH,
) -> bytearray:
    """
    Rebuild the upper-case ACGT target from reference copy runs and
    substituted bases.

      1. copy ``initial_run_length + kmer_length`` bases from ``initial_cursor``
      2. per entry: write its substituted bases (reference cursor unchanged),
         move the cursor by ``offset_from_prev`` (may be negative), then copy
         ``continue_for + kmer_length`` bases

    Runs of non-positive length copy nothing. Any run reaching outside the
    reference raises ReferenceOutOfBounds.
    """
    total = reconstructed_length(initial_run_length, entries, kmer_length=kmer_length)
    if total > MAX_SEQ_LENGTH:
        raise MalformedMismatchEntry(
            f"target would be {total} bases long; at most {MAX_SEQ_LENGTH} are supported"
        )

    ref_len = reference.length()
    out = bytearray(total)
    w = 0
    cursor = initial_cursor

    def _copy(n: int, step: int) -> None:
        nonlocal w, cursor
        if n <= 0:
            return
        if cursor < 0 or cursor + n > ref_len:
            where = "initial run" if step < 0 else f"mismatch entry {step}"
            raise ReferenceOutOfBounds(
                f"{where}: copy of {n} bases from reference position {cursor} "
                f"is outside the reference (length {ref_len})"
            )
        out[w:w + n] = reference.get(cursor, cursor + n)
        w += n
        cursor += n

    _copy(initial_run_length + kmer_length, -1)

    for i, e in enumerate(entries):
        if e.bases:
            sub = e.decoded_bases()
            out[w:w + len(sub)] = sub
            w += len(sub)
        cursor += e.offset_from_prev
        _copy(e.continue_for + kmer_length, i)

    return out
