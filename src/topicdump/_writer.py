"""Streaming document-topic writer: one document's counts in memory at a time."""

from __future__ import annotations

import logging
from typing import IO

import numpy as np

from ._errors import PreconditionViolationError

logger = logging.getLogger(__name__)


class DocumentTopicWriter:
    """Write per-document topic counts as lines of space-separated integers.

    Records must arrive grouped by non-decreasing document index; a decrease
    raises PreconditionViolationError. Documents with no records (gaps, or
    indices past the last record) are written as all-zero rows, so the output
    always has exactly ``document_count`` lines and line ``i`` is document
    ``i``.
    """

    __slots__ = (
        "_stream", "_topic_count", "_document_count", "_buffer",
        "_current", "_written", "_closed",
    )

    def __init__(
        self, stream: IO[str], topic_count: int, document_count: int
    ) -> None:
        self._stream = stream
        self._topic_count = topic_count
        self._document_count = document_count
        self._buffer = np.zeros(topic_count, dtype=np.int64)
        self._current = 0
        self._written = 0
        self._closed = False

    @property
    def lines_written(self) -> int:
        return self._written

    def _emit(self, row: np.ndarray) -> None:
        self._stream.write(" ".join(map(str, row.tolist())))
        self._stream.write("\n")
        self._written += 1

    def _advance_to(self, document_index: int) -> None:
        self._emit(self._buffer)
        self._buffer[:] = 0
        zeros = self._buffer
        for _ in range(self._current + 1, document_index):
            self._emit(zeros)
        self._current = document_index

    def add(self, document_index: int, topic_index: int) -> None:
        if self._closed:
            raise ValueError("writer is closed")
        if document_index < self._current:
            raise PreconditionViolationError(
                f"document index went backwards ({self._current} -> "
                f"{document_index}); records must be grouped by ascending "
                f"document index for streaming output"
            )
        if document_index != self._current:
            self._advance_to(document_index)
        self._buffer[topic_index] += 1

    def close(self) -> None:
        """Flush the last document and any trailing empty documents."""
        if self._closed:
            return
        self._closed = True
        self._emit(self._buffer)
        self._buffer[:] = 0
        while self._written < self._document_count:
            self._emit(self._buffer)
        logger.debug("wrote %d document rows", self._written)

    def __enter__(self) -> DocumentTopicWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # On error the partial output is abandoned, not padded.
        if exc_type is None:
            self.close()
