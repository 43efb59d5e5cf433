"""topicdump error types."""

from __future__ import annotations


class TopicDumpError(Exception):
    """Base error for all topicdump failures."""


class MalformedRecordError(TopicDumpError, ValueError):
    """A dump line does not have the expected shape."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line.rstrip()!r}")


class PreconditionViolationError(TopicDumpError):
    """Input violates an ordering precondition of the streaming writer."""


class TopicDumpVersionError(TopicDumpError):
    """Bundle manifest version mismatch."""


class TopicDumpChecksumError(TopicDumpError):
    """Bundle file checksum verification failed."""
