"""Opening dump files, compressed or plain."""

from __future__ import annotations

import gzip
import io
from pathlib import Path
from typing import IO

_GZIP_MAGIC = b"\x1f\x8b"


def _is_gzip(path: Path) -> bool:
    with open(path, "rb") as f:
        return f.read(2) == _GZIP_MAGIC


def open_lines(path: Path | str) -> IO[str]:
    """Open a dump for text reading, decompressing gzip transparently.

    Undecodable bytes are kept as lone surrogates; the decoders reject them
    with the offending line number.
    """
    path = Path(path)
    if _is_gzip(path):
        return io.TextIOWrapper(
            gzip.open(path, "rb"), encoding="utf-8", errors="surrogateescape"
        )
    return open(path, encoding="utf-8", errors="surrogateescape")


def open_output(path: Path | str) -> IO[str]:
    """Open a text output; ``.gz`` paths are gzip-compressed."""
    path = Path(path)
    if path.suffix == ".gz":
        return gzip.open(path, "wt", encoding="utf-8", newline="\n")
    return open(path, "w", encoding="utf-8", newline="\n")
