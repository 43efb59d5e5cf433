"""First pass over a state file: discover the corpus dimensions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._decoder import decode_assignment
from ._progress import DEFAULT_INTERVAL, Progress
from ._types import CorpusDimensions

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._progress import ProgressCallback

logger = logging.getLogger(__name__)

# The state file opens with three comment lines
# (column names, alpha, beta); they are skipped unconditionally.
HEADER_LINES = 3


def scan_dimensions(
    lines: Iterable[str],
    *,
    progress: ProgressCallback | None = None,
    progress_interval: int = DEFAULT_INTERVAL,
) -> CorpusDimensions:
    """Return (max index + 1) for topics, terms and documents.

    Maxima start at 0 and only move on a strictly greater value, so a
    dimension whose indices are all 0 (or a file with no data lines)
    still comes out as size 1.
    """
    ticker = Progress(progress, progress_interval)
    max_topic = max_term = max_doc = 0
    for line_number, line in enumerate(lines, start=1):
        if line_number <= HEADER_LINES:
            continue
        ticker.tick(line_number)
        rec = decode_assignment(line, line_number)
        if rec.topic_index > max_topic:
            max_topic = rec.topic_index
        if rec.document_index > max_doc:
            max_doc = rec.document_index
        if rec.term_index > max_term:
            max_term = rec.term_index

    dims = CorpusDimensions(
        topic_count=max_topic + 1,
        term_count=max_term + 1,
        document_count=max_doc + 1,
    )
    logger.debug("scanned dimensions: %s", dims)
    return dims
