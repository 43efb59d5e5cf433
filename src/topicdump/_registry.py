"""Index-addressed label registry with occurrence counts."""

from __future__ import annotations

import numpy as np


class Registry:
    """Pre-sized labels and counts, one slot per integer id.

    Used for the vocabulary (term id -> text, frequency) and for documents
    (doc id -> name, token count). Each ``add`` overwrites the slot's label
    and bumps its count; slots never seen keep ``""`` and 0.
    """

    __slots__ = ("labels", "counts")

    def __init__(self, size: int) -> None:
        self.labels: list[str] = [""] * size
        self.counts = np.zeros(size, dtype=np.int64)

    def __len__(self) -> int:
        return len(self.labels)

    def add(self, index: int, label: str) -> None:
        self.labels[index] = label
        self.counts[index] += 1
