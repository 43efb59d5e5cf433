"""Line decoders for the assignment (state) and word-topic-counts formats."""

from __future__ import annotations

from ._errors import MalformedRecordError
from ._types import AssignmentRecord, CountsRecord

_ASSIGNMENT_FIELDS = 6


def _to_int(
    value: str, name: str, line_number: int, line: str, *, non_negative: bool
) -> int:
    # Plain ASCII digits only: int() would also take "1_0", "+5" or "٣".
    digits = value[1:] if value.startswith("-") else value
    if not (digits.isascii() and digits.isdigit()):
        raise MalformedRecordError(
            line_number, line, f"{name} is not an integer ({value!r})"
        )
    n = int(value)
    if non_negative and n < 0:
        raise MalformedRecordError(
            line_number, line, f"{name} must be >= 0, got {n}"
        )
    return n


def _check_text(line: str, line_number: int) -> None:
    # Streams are decoded with surrogateescape, so invalid UTF-8 shows up
    # here as lone surrogates rather than failing inside the line iterator.
    if line.isascii():
        return
    try:
        line.encode("utf-8")
    except UnicodeEncodeError as e:
        raise MalformedRecordError(
            line_number, line, f"invalid UTF-8 at column {e.start}"
        ) from None


def decode_assignment(line: str, line_number: int) -> AssignmentRecord:
    """Decode one token assignment line.

    Layout: ``doc source pos typeindex type topic``, whitespace-delimited.
    """
    _check_text(line, line_number)
    fields = line.split()
    if len(fields) != _ASSIGNMENT_FIELDS:
        raise MalformedRecordError(
            line_number, line,
            f"expected {_ASSIGNMENT_FIELDS} fields, got {len(fields)}",
        )
    doc, source, pos, typeindex, term, topic = fields
    return AssignmentRecord(
        document_index=_to_int(doc, "document index", line_number, line,
                               non_negative=True),
        document_name=source,
        position=_to_int(pos, "position", line_number, line,
                         non_negative=False),
        term_index=_to_int(typeindex, "term index", line_number, line,
                           non_negative=True),
        term_text=term,
        topic_index=_to_int(topic, "topic index", line_number, line,
                            non_negative=True),
    )


def decode_pair(token: str, line_number: int, line: str) -> tuple[int, int]:
    """Decode one ``topic:count`` pair."""
    parts = token.split(":", 1)
    if len(parts) < 2:
        raise MalformedRecordError(
            line_number, line, f"pair {token!r} is not of the form topic:count"
        )
    topic = _to_int(parts[0], "topic index", line_number, line,
                    non_negative=True)
    count = _to_int(parts[1], "count", line_number, line, non_negative=True)
    return topic, count


def decode_counts(line: str, line_number: int) -> CountsRecord:
    """Decode one word-topic-counts line.

    Layout: ``index term topic:count topic:count ...``. The leading index is
    not interpreted; terms are placed by line position.
    """
    _check_text(line, line_number)
    fields = line.split()
    if len(fields) < 2:
        raise MalformedRecordError(
            line_number, line, f"expected index and term, got {len(fields)} fields"
        )
    pairs = [decode_pair(tok, line_number, line) for tok in fields[2:]]
    return CountsRecord(term_text=fields[1], pairs=pairs)
