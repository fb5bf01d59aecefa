# hirgc/formats/compressed.py
from __future__ import annotations

from typing import List, Tuple

from hirgc.models.compressed_record import CompressedRecord, MismatchEntry
from ._lines import Source, as_lines
from .metadata import decode_metadata
from .mismatches import decode_entries

__all__ = ["decode"]


def decode(source: Source) -> Tuple[CompressedRecord, List[MismatchEntry]]:
    """
    Decode a whole compressed target: the 7-line metadata block followed by
    the mismatch line pairs. Both parts are read from a single pass over
    ``source``.
    """
    it = as_lines(source)
    record = decode_metadata(it)
    entries = list(decode_entries(it))
    return record, entries
