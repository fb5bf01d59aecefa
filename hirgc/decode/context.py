# hirgc/decode/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from hirgc.formats import compressed
from hirgc.formats._lines import Source
from hirgc.models.compressed_record import CompressedRecord, LinePlan, MismatchEntry
from hirgc.sequences.base import SequenceSource
from .overlay import apply_overlays
from .reconstruct import KMER_LENGTH, reconstruct

__all__ = ["DecodeContext", "DecodeResult", "decompress"]


@dataclass(slots=True)
class DecodeResult:
    header: str
    line_plan: LinePlan
    sequence: str


@dataclass(slots=True)
class DecodeContext:
    """
    State of one decode: the shared read-only reference, the parsed
    compressed target, and the target buffer being built.

    Steps must run in order: ``reconstruct()`` then ``apply_overlays()``;
    ``run()`` does both and returns the finished sequence.
    """
    reference: SequenceSource
    record: CompressedRecord
    entries: List[MismatchEntry] = field(default_factory=list)
    kmer_length: int = KMER_LENGTH
    target: Optional[bytearray] = None
    overlaid: bool = False

    @classmethod
    def from_source(cls, reference: SequenceSource, source: Source, *,
                    kmer_length: int = KMER_LENGTH) -> "DecodeContext":
        record, entries = compressed.decode(source)
        return cls(reference, record, entries, kmer_length=kmer_length)

    def reconstruct(self) -> bytearray:
        self.target = reconstruct(
            self.reference,
            self.record.initial_cursor,
            self.record.initial_run_length,
            self.entries,
            kmer_length=self.kmer_length,
        )
        self.overlaid = False
        return self.target

    def apply_overlays(self) -> bytearray:
        if self.target is None:
            raise RuntimeError("reconstruct() must run before apply_overlays()")
        if self.overlaid:
            raise RuntimeError("overlays were already applied to this target")
        self.target = apply_overlays(self.target, self.record)
        self.overlaid = True
        return self.target

    def run(self) -> DecodeResult:
        self.reconstruct()
        self.apply_overlays()
        return DecodeResult(
            header=self.record.header,
            line_plan=self.record.line_plan,
            sequence=self.target.decode("ascii"),  # type: ignore[union-attr]
        )


def decompress(reference: SequenceSource, source: Source, *,
               kmer_length: int = KMER_LENGTH) -> DecodeResult:
    """Decode one compressed target against ``reference``."""
    return DecodeContext.from_source(reference, source, kmer_length=kmer_length).run()
