# hirgc/sequences/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Union

__all__ = [
    "MAX_SEQ_LENGTH",
    "SequenceSource",
    "ReferenceSequence",
    "clean_sequence",
]

# Upper bound for both the reference and the reconstructed target.
MAX_SEQ_LENGTH = 1 << 28

# every byte that is not a/c/g/t (either case) is dropped by clean_sequence
_DROP = bytes(b for b in range(256) if b not in b"ACGTacgt")
_UPPER = bytes.maketrans(b"acgt", b"ACGT")


class SequenceSource(Protocol):
    def length(self) -> int: ...
    def get(self, start: int, end: int) -> bytes: ...


def clean_sequence(text: Union[str, bytes]) -> bytes:
    """Keep only A/C/G/T (case-insensitive), upper-cased, in order."""
    if isinstance(text, str):
        text = text.encode("ascii", errors="ignore")
    return text.translate(_UPPER, _DROP)


@dataclass(slots=True, frozen=True)
class ReferenceSequence:
    """
    Cleaned reference: upper-case ACGT bytes, read-only.
    Coordinates: 0-based, half-open [start, end). Out-of-range reads raise
    IndexError instead of being clipped.
    """
    seq: bytes

    def __post_init__(self) -> None:
        if len(self.seq) > MAX_SEQ_LENGTH:
            raise ValueError(
                f"reference has {len(self.seq)} bases; at most {MAX_SEQ_LENGTH} are supported"
            )

    @classmethod
    def from_text(cls, text: Union[str, bytes, Iterable[str]]) -> "ReferenceSequence":
        """Build from raw sequence text (or lines of it), applying clean_sequence."""
        if isinstance(text, (str, bytes)):
            return cls(clean_sequence(text))
        return cls(b"".join(clean_sequence(t) for t in text))

    def __len__(self) -> int:
        return len(self.seq)

    def __str__(self) -> str:
        return self.seq.decode("ascii")

    def length(self) -> int:
        return len(self.seq)

    def get(self, start: int, end: int) -> bytes:
        if start < 0 or end < start or end > len(self.seq):
            raise IndexError(f"invalid range [{start}, {end}) for reference of length {len(self.seq)}")
        return self.seq[start:end]
