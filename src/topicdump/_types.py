"""Data structures for topicdump."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np


@dataclass(slots=True, frozen=True)
class AssignmentRecord:
    document_index: int
    document_name: str   # source label column
    position: int        # token offset within the document
    term_index: int
    term_text: str
    topic_index: int


@dataclass(slots=True, frozen=True)
class CountsRecord:
    term_text: str
    pairs: list[tuple[int, int]]   # (topic_index, count)


@dataclass(slots=True, frozen=True)
class CorpusDimensions:
    topic_count: int
    term_count: int
    document_count: int


@dataclass(slots=True, frozen=True)
class ParseOptions:
    """Which structures a state parse builds.

    Every flag independently toggles one output so callers can bound memory.
    Set ``doc_topics_path`` to stream the document-topic counts to disk one
    document at a time; this works with ``extract_doc_topics`` on or off.
    """

    extract_terms: bool = True
    extract_documents: bool = True
    extract_topic_terms: bool = True
    extract_doc_topics: bool = True
    doc_topics_path: Path | str | None = None
    progress_interval: int = 100_000

    def __post_init__(self) -> None:
        if self.progress_interval < 1:
            raise ValueError(
                f"progress_interval must be >= 1, got {self.progress_interval}"
            )


@dataclass(slots=True)
class StateParseResult:
    """Output of a state parse. Structures that were not requested are None."""

    dimensions: CorpusDimensions
    terms: list[str] | None = None
    term_frequencies: np.ndarray | None = None   # (term_count,)
    documents: list[str] | None = None
    document_lengths: np.ndarray | None = None   # (document_count,)
    topic_terms: np.ndarray | None = None        # (topic_count, term_count)
    doc_topics: np.ndarray | None = None         # (document_count, topic_count)
    doc_topics_path: str = ""


@dataclass(slots=True)
class WordTopicCounts:
    """Dense topic x term matrix with one labelled column per term."""

    terms: list[str]
    matrix: np.ndarray   # (topic_count, term_count)
    _columns: dict[str, int] = field(default_factory=dict, repr=False)

    @property
    def topic_count(self) -> int:
        return int(self.matrix.shape[0])

    @property
    def term_count(self) -> int:
        return int(self.matrix.shape[1])

    def column(self, term: str) -> np.ndarray:
        """Return the topic-count column for ``term`` (first occurrence)."""
        if not self._columns:
            for i, t in enumerate(self.terms):
                self._columns.setdefault(t, i)
        try:
            return self.matrix[:, self._columns[term]]
        except KeyError:
            raise KeyError(f"unknown term {term!r}") from None
