"""Word-topic-counts parser: one line per term, sparse topic:count pairs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from ._decoder import decode_counts
from ._errors import MalformedRecordError
from ._io import open_lines
from ._progress import DEFAULT_INTERVAL, Progress
from ._types import WordTopicCounts

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._progress import ProgressCallback

logger = logging.getLogger(__name__)


def count_lines(lines: Iterable[str]) -> int:
    return sum(1 for _ in lines)


def fill_counts(
    lines: Iterable[str],
    term_count: int,
    topic_count: int,
    *,
    progress: ProgressCallback | None = None,
    progress_interval: int = DEFAULT_INTERVAL,
) -> WordTopicCounts:
    """Decode ``term_count`` lines into a ``topic_count x term_count`` matrix.

    Column ``i`` belongs to line ``i``. Pair counts overwrite rather than
    accumulate; a topic repeated within one line keeps its last count.
    """
    if topic_count < 1:
        raise ValueError(f"topic_count must be >= 1, got {topic_count}")
    ticker = Progress(progress, progress_interval)
    matrix = np.zeros((topic_count, term_count), dtype=np.int64)
    terms = [""] * term_count

    for i, line in enumerate(lines):
        line_number = i + 1
        ticker.tick(line_number)
        rec = decode_counts(line, line_number)
        for topic, _ in rec.pairs:
            if topic >= topic_count:
                raise MalformedRecordError(
                    line_number, line,
                    f"topic index {topic} out of range for {topic_count} topics",
                )
        terms[i] = rec.term_text
        for topic, count in rec.pairs:
            matrix[topic, i] = count

    return WordTopicCounts(terms=terms, matrix=matrix)


def parse_word_topic_counts(
    path: Path | str,
    topic_count: int,
    *,
    progress: ProgressCallback | None = None,
    progress_interval: int = DEFAULT_INTERVAL,
) -> WordTopicCounts:
    """Parse a (possibly gzipped) word-topic-counts file.

    The number of topics is not recorded in the format and must be supplied.
    The file is read twice: once to count terms, once to fill the matrix.
    """
    path = Path(path)
    with open_lines(path) as f:
        term_count = count_lines(f)
    logger.info("%s: %d terms", path, term_count)

    with open_lines(path) as f:
        return fill_counts(
            f, term_count, topic_count,
            progress=progress, progress_interval=progress_interval,
        )
