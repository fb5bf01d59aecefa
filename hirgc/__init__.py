# hirgc/__init__.py
from .errors import (
    DecodeError, MalformedMetadata, MalformedMismatchEntry,
    TruncatedMismatchStream, ReferenceOutOfBounds,
)
from .models.compressed_record import (
    CompressedRecord, LinePlan, MismatchEntry, RangeList, SpecialCharCatalog,
)
from .sequences.base import ReferenceSequence
from .sequences.fasta import load_reference

# Convenience re-exports for direct functional use
from .decode.reconstruct import KMER_LENGTH, reconstruct
from .decode.overlay import apply_overlays
from .decode.context import DecodeContext, DecodeResult, decompress
