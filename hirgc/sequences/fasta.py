# hirgc/sequences/fasta.py
from __future__ import annotations

import os
from typing import Union

from .base import MAX_SEQ_LENGTH, ReferenceSequence, clean_sequence

__all__ = ["load_reference"]


def load_reference(path: Union[str, "os.PathLike[str]"]) -> ReferenceSequence:
    """
    Load a reference from a FASTA-like text file.

    Lines starting with '>' and empty lines are skipped; all remaining
    lines are reduced to upper-case ACGT and concatenated in file order,
    so multi-record files yield one joined sequence.
    """
    path = os.fspath(path)
    if not os.path.isfile(path):
        raise FileNotFoundError(f"reference not found: {path!r}")

    buf = bytearray()
    with open(path, "rb") as f:
        for ln in f:
            if ln.startswith(b">"):
                continue
            ln = ln.rstrip(b"\r\n")
            if not ln:
                continue
            buf += clean_sequence(ln)
            if len(buf) > MAX_SEQ_LENGTH:
                raise ValueError(
                    f"reference {path!r} exceeds {MAX_SEQ_LENGTH} bases"
                )
    return ReferenceSequence(bytes(buf))
