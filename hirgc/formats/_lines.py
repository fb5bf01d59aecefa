# hirgc/formats/_lines.py
from __future__ import annotations

import io
import os
from typing import Iterator, List, Optional, Sequence, TextIO, Union

__all__ = ["Source", "Sink", "as_lines", "parse_int_run", "parse_digit_run"]

Source = Union[str, "os.PathLike[str]", TextIO, Sequence[str]]   # path | text blob | file-like | sequence of lines
Sink   = Optional[Union[str, "os.PathLike[str]", TextIO]]        # path | file-like | None (return string)


def as_lines(source: Source) -> Iterator[str]:
    """
    Yield lines (line terminators stripped) from:
      - path (str or PathLike naming an existing file),
      - text blob (str that is not an existing path),
      - file-like (TextIO),
      - sequence[str]

    A path that does not exist is treated as a text blob only when it
    contains a newline; otherwise FileNotFoundError is raised.
    """
    if isinstance(source, os.PathLike):
        source = os.fspath(source)
        if not os.path.isfile(source):
            raise FileNotFoundError(f"compressed target not found: {source!r}")
    if isinstance(source, str):
        if os.path.isfile(source):
            # newline="" keeps blank lines and lets us strip \r\n ourselves
            with open(source, "r", encoding="utf-8", errors="surrogateescape", newline="") as fh:
                for ln in fh:
                    yield ln.rstrip("\r\n")
        elif "\n" in source:
            for ln in io.StringIO(source, newline=""):
                yield ln.rstrip("\r\n")
        else:
            raise FileNotFoundError(f"compressed target not found: {source!r}")
    elif hasattr(source, "read"):
        for ln in source:  # type: ignore[union-attr]
            yield ln.rstrip("\r\n")
    else:
        for ln in source:
            yield ln.rstrip("\r\n")


def parse_int_run(text: str) -> List[int]:
    """
    Parse the space-delimited integer micro-format: ASCII digits, a single
    space between consecutive integers, no sign, no trailing space.

        "3 60 2 17" -> [3, 60, 2, 17]

    Raises ValueError on anything else (empty text, other characters,
    doubled or trailing spaces).
    """
    if not text:
        raise ValueError("empty integer run")
    values: List[int] = []
    curr = 0
    digits = 0
    for c in text:
        if c == " ":
            if not digits:
                raise ValueError(f"misplaced space in {text!r}")
            values.append(curr)
            curr = 0
            digits = 0
        elif "0" <= c <= "9":
            curr = curr * 10 + (ord(c) - 48)
            digits += 1
        else:
            raise ValueError(f"unexpected character {c!r} in {text!r}")
    if not digits:
        raise ValueError(f"trailing space in {text!r}")
    values.append(curr)
    return values


def parse_digit_run(text: str) -> List[int]:
    """Dense digit run, one value per character: "0312" -> [0, 3, 1, 2]."""
    out: List[int] = []
    for c in text:
        if not "0" <= c <= "9":
            raise ValueError(f"unexpected character {c!r} in digit run {text!r}")
        out.append(ord(c) - 48)
    return out
