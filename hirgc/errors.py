# hirgc/errors.py
from __future__ import annotations

__all__ = [
    "DecodeError",
    "MalformedMetadata",
    "MalformedMismatchEntry",
    "TruncatedMismatchStream",
    "ReferenceOutOfBounds",
]


class DecodeError(ValueError):
    """Base class for everything that can go wrong while decoding a compressed target."""


class MalformedMetadata(DecodeError):
    """One of the seven metadata lines is missing, short, or not in its micro-format."""


class MalformedMismatchEntry(DecodeError):
    """A mismatch line pair is present but does not follow the digit/offset grammar."""


class TruncatedMismatchStream(DecodeError):
    """The stream ended between the two lines of a mismatch entry."""


class ReferenceOutOfBounds(DecodeError, IndexError):
    """A copy-run would read outside the reference sequence."""
