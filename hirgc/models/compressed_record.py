# hirgc/models/compressed_record.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple

__all__ = [
    "BASE_CODES",
    "LinePlan",
    "RangeList",
    "SpecialCharCatalog",
    "MismatchEntry",
    "CompressedRecord",
]

# Mismatch base codes 0..3, in this fixed order.
BASE_CODES = b"ACGT"

Pair = Tuple[int, int]


def _as_pairs(pairs: Iterable[Sequence[int]], what: str) -> Tuple[Pair, ...]:
    out: List[Pair] = []
    for p in pairs:
        if len(p) != 2:
            raise ValueError(f"{what}: expected (a, b) pairs, got {tuple(p)!r}")
        a, b = int(p[0]), int(p[1])
        if a < 0 or b < 0:
            raise ValueError(f"{what}: values must be non-negative, got {(a, b)!r}")
        out.append((a, b))
    return tuple(out)


@dataclass(slots=True)
class LinePlan:
    """
    Output line layout: (line_length, repeat_count) pairs, consumed in order.

    The plan is expected to cover the final sequence exactly, i.e.
    ``total() == len(sequence)``; the writer enforces that.
    """
    pairs: Tuple[Pair, ...] = ()

    def __post_init__(self) -> None:
        self.pairs = _as_pairs(self.pairs, "line plan")

    @property
    def count(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def total(self) -> int:
        return sum(length * repeat for length, repeat in self.pairs)


@dataclass(slots=True)
class RangeList:
    """
    Cumulative-offset range list: (start_delta, length) pairs.

    Each start_delta counts from the END of the previous range (0 for the
    first one), so the absolute start of range i is

        start_delta_i + (absolute_start_(i-1) + length_(i-1))

    Used for both lowercase ranges and ambiguous-base (N) runs.
    """
    pairs: Tuple[Pair, ...] = ()

    def __post_init__(self) -> None:
        self.pairs = _as_pairs(self.pairs, "range list")

    @property
    def count(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def absolute(self) -> Iterator[Pair]:
        """Yield (absolute_start, length) for every range, in list order."""
        prev_end = 0
        for start, length in self.pairs:
            yield prev_end + start, length
            prev_end += start + length


@dataclass(slots=True)
class SpecialCharCatalog:
    """
    Non-ACGT characters that were cut out of the target.

      deltas           : one start delta per occurrence; each occurrence is a
                         single character, so the delta counts from the slot
                         right after the previous occurrence
      alphabet_offsets : distinct characters, stored as ``ord(c) - ord('A')``
      order            : alphabet index of each occurrence, in position order
    """
    deltas: Tuple[int, ...] = ()
    alphabet_offsets: Tuple[int, ...] = ()
    order: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        self.deltas = tuple(int(d) for d in self.deltas)
        self.alphabet_offsets = tuple(int(o) for o in self.alphabet_offsets)
        self.order = tuple(int(i) for i in self.order)
        if any(d < 0 for d in self.deltas):
            raise ValueError("special character deltas must be non-negative")
        for o in self.alphabet_offsets:
            if not 0 <= o + ord("A") < 128:
                raise ValueError(f"alphabet offset {o} is not an ASCII character")
        if len(self.order) != len(self.deltas):
            raise ValueError(
                f"{len(self.deltas)} special characters but {len(self.order)} order entries"
            )
        for i in self.order:
            if not 0 <= i < len(self.alphabet_offsets):
                raise ValueError(
                    f"order index {i} outside alphabet of {len(self.alphabet_offsets)}"
                )

    @classmethod
    def from_alphabet(cls, deltas: Iterable[int], alphabet: Iterable[str],
                      order: Iterable[int]) -> "SpecialCharCatalog":
        return cls(
            deltas=tuple(deltas),
            alphabet_offsets=tuple(ord(c) - ord("A") for c in alphabet),
            order=tuple(order),
        )

    @property
    def count(self) -> int:
        return len(self.deltas)

    @property
    def alphabet(self) -> Tuple[str, ...]:
        return tuple(chr(o + ord("A")) for o in self.alphabet_offsets)

    def characters(self) -> List[str]:
        """One decoded character per occurrence, in position order."""
        alphabet = self.alphabet
        return [alphabet[i] for i in self.order]

    def positions(self) -> List[int]:
        """Absolute positions of every occurrence in the final sequence."""
        out: List[int] = []
        pos = 0
        for d in self.deltas:
            pos += d
            out.append(pos)
            pos += 1
        return out


@dataclass(slots=True)
class MismatchEntry:
    """
    One decode step after the initial run.

      bases            : base codes 0..3 substituted at the write position
                         (they do not consume reference positions)
      offset_from_prev : signed jump applied to the reference cursor
      continue_for     : copy-run length, before the k-mer floor is added
    """
    bases: Tuple[int, ...] = ()
    offset_from_prev: int = 0
    continue_for: int = 0

    def __post_init__(self) -> None:
        self.bases = tuple(int(b) for b in self.bases)
        for b in self.bases:
            if not 0 <= b < len(BASE_CODES):
                raise ValueError(f"base code {b} outside 0..{len(BASE_CODES) - 1}")

    def decoded_bases(self) -> bytes:
        return bytes(BASE_CODES[b] for b in self.bases)


@dataclass(slots=True)
class CompressedRecord:
    """
    Everything the 7 metadata lines of a compressed target carry.
    The mismatch entries that follow are kept separately.
    """
    header: str
    line_plan: LinePlan = field(default_factory=LinePlan)
    lowercase: RangeList = field(default_factory=RangeList)
    ambiguous: RangeList = field(default_factory=RangeList)
    special: SpecialCharCatalog = field(default_factory=SpecialCharCatalog)
    initial_cursor: int = 0
    initial_run_length: int = 0

    def has_overlays(self) -> bool:
        return bool(self.special.count or self.ambiguous.count or self.lowercase.count)
