"""topicdump: turn topic-model trainer dumps into count matrices."""

from __future__ import annotations

import logging

from ._aggregator import aggregate, parse_state
from ._counts import parse_word_topic_counts
from ._decoder import decode_assignment, decode_counts
from ._errors import (
    MalformedRecordError,
    PreconditionViolationError,
    TopicDumpChecksumError,
    TopicDumpError,
    TopicDumpVersionError,
)
from ._progress import log_progress
from ._scanner import scan_dimensions
from ._store import load_counts, load_result, save_counts, save_result
from ._types import (
    AssignmentRecord,
    CorpusDimensions,
    CountsRecord,
    ParseOptions,
    StateParseResult,
    WordTopicCounts,
)
from ._writer import DocumentTopicWriter

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "aggregate",
    "decode_assignment",
    "decode_counts",
    "load_counts",
    "load_result",
    "log_progress",
    "parse_state",
    "parse_word_topic_counts",
    "save_counts",
    "save_result",
    "scan_dimensions",
    "AssignmentRecord",
    "CorpusDimensions",
    "CountsRecord",
    "DocumentTopicWriter",
    "MalformedRecordError",
    "ParseOptions",
    "PreconditionViolationError",
    "StateParseResult",
    "TopicDumpChecksumError",
    "TopicDumpError",
    "TopicDumpVersionError",
    "WordTopicCounts",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
