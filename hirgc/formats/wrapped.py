# hirgc/formats/wrapped.py
from __future__ import annotations

import io
import os
import tempfile
from typing import Union

from hirgc.errors import MalformedMetadata
from hirgc.models.compressed_record import LinePlan
from ._lines import Sink

__all__ = ["encode", "write_atomic"]


def write_atomic(path: Union[str, "os.PathLike[str]"], text: str) -> None:
    """Write ``text`` next to ``path`` first and rename it into place."""
    path = os.fspath(path)
    out_dir = os.path.dirname(os.path.abspath(path))
    fd, tmp = tempfile.mkstemp(prefix=".hirgc_", suffix=".tmp", dir=out_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as fp:
            fp.write(text)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def encode(
    header: str,
    sequence: Union[str, bytes, bytearray],
    line_plan: LinePlan,
    *,
    sink: Sink = None,
) -> str:
    """
    Render the reconstructed target: header line, one blank line, then the
    sequence cut into lines following ``line_plan``. For every
    (length, repeat) pair, ``repeat`` lines of exactly ``length``
    characters are written, each ending in a newline.

    The plan must cover the sequence exactly.
    """
    if isinstance(sequence, (bytes, bytearray)):
        sequence = sequence.decode("ascii")

    covered = line_plan.total()
    if covered != len(sequence):
        raise MalformedMetadata(
            f"line layout covers {covered} characters but the sequence has {len(sequence)}"
        )

    buf = io.StringIO()
    buf.write(header)
    buf.write("\n\n")
    pos = 0
    for length, repeat in line_plan:
        for _ in range(repeat):
            buf.write(sequence[pos:pos + length])
            buf.write("\n")
            pos += length
    text = buf.getvalue()

    if sink is None:
        return text
    if isinstance(sink, (str, os.PathLike)):
        write_atomic(sink, text)
        return text
    if not hasattr(sink, "write"):
        raise TypeError("sink must be a path, a file-like with .write, or None")
    sink.write(text)  # type: ignore[union-attr]
    return text
