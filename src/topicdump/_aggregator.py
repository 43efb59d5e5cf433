"""Second pass over a state file: registries, count matrices, streamed rows."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from ._decoder import decode_assignment
from ._io import open_lines, open_output
from ._progress import Progress
from ._registry import Registry
from ._scanner import HEADER_LINES, scan_dimensions
from ._types import ParseOptions, StateParseResult
from ._writer import DocumentTopicWriter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._progress import ProgressCallback
    from ._types import CorpusDimensions

logger = logging.getLogger(__name__)


def aggregate(
    lines: Iterable[str],
    dimensions: CorpusDimensions,
    options: ParseOptions | None = None,
    *,
    progress: ProgressCallback | None = None,
) -> StateParseResult:
    """Consume assignment lines into the structures ``options`` asks for.

    ``dimensions`` must come from a scan of the same content; an index past
    them surfaces as IndexError.
    """
    if options is None:
        options = ParseOptions()
    ticker = Progress(progress, options.progress_interval)

    terms = Registry(dimensions.term_count) if options.extract_terms else None
    docs = (
        Registry(dimensions.document_count)
        if options.extract_documents else None
    )
    topic_terms = (
        np.zeros((dimensions.topic_count, dimensions.term_count), dtype=np.int64)
        if options.extract_topic_terms else None
    )
    doc_topics = (
        np.zeros(
            (dimensions.document_count, dimensions.topic_count), dtype=np.int64
        )
        if options.extract_doc_topics else None
    )

    writer = None
    try:
        with ExitStack() as stack:
            if options.doc_topics_path is not None:
                out = stack.enter_context(open_output(options.doc_topics_path))
                writer = stack.enter_context(DocumentTopicWriter(
                    out, dimensions.topic_count, dimensions.document_count,
                ))

            for line_number, line in enumerate(lines, start=1):
                if line_number <= HEADER_LINES:
                    continue
                ticker.tick(line_number)
                rec = decode_assignment(line, line_number)

                if terms is not None:
                    terms.add(rec.term_index, rec.term_text)
                if docs is not None:
                    docs.add(rec.document_index, rec.document_name)
                if topic_terms is not None:
                    topic_terms[rec.topic_index, rec.term_index] += 1
                if doc_topics is not None:
                    doc_topics[rec.document_index, rec.topic_index] += 1
                if writer is not None:
                    writer.add(rec.document_index, rec.topic_index)
    except BaseException:
        # A failed pass leaves no partial streamed output behind.
        if writer is not None:
            Path(options.doc_topics_path).unlink(missing_ok=True)
        raise

    result = StateParseResult(
        dimensions=dimensions,
        topic_terms=topic_terms,
        doc_topics=doc_topics,
        doc_topics_path=(
            str(options.doc_topics_path)
            if options.doc_topics_path is not None else ""
        ),
    )
    if terms is not None:
        result.terms = terms.labels
        result.term_frequencies = terms.counts
    if docs is not None:
        result.documents = docs.labels
        result.document_lengths = docs.counts
    return result


def parse_state(
    path: Path | str,
    options: ParseOptions | None = None,
    *,
    progress: ProgressCallback | None = None,
) -> StateParseResult:
    """Parse a (possibly gzipped) state file in two passes.

    The first pass sizes every container; the second fills them. Growable
    containers would allow a single pass at the cost of reallocation, which
    is the wrong trade for dumps of hundreds of millions of lines.

    Args:
        path: State file, plain or gzip-compressed.
        options: What to extract. Defaults to everything, no streaming.
        progress: Called with the line number every
            ``options.progress_interval`` lines.
    """
    if options is None:
        options = ParseOptions()
    path = Path(path)

    logger.info("scanning %s", path)
    with open_lines(path) as f:
        dims = scan_dimensions(
            f, progress=progress, progress_interval=options.progress_interval
        )
    logger.info(
        "%d topics, %d terms, %d documents",
        dims.topic_count, dims.term_count, dims.document_count,
    )

    with open_lines(path) as f:
        result = aggregate(f, dims, options, progress=progress)
    logger.info("parsed %s", path)
    return result
