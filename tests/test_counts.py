"""Tests for the word-topic-counts parser."""

import numpy as np
import pytest

from topicdump import parse_word_topic_counts
from topicdump._counts import count_lines, fill_counts
from topicdump._errors import MalformedRecordError

from conftest import COUNTS_TEXT


def test_single_line_scenario():
    counts = fill_counts(["0 apple 0:3 1:5\n"], 1, 2)
    assert counts.terms == ["apple"]
    assert counts.matrix[:, 0].tolist() == [3, 5]
    assert counts.column("apple").tolist() == [3, 5]


def test_parse_file(counts_file):
    counts = parse_word_topic_counts(counts_file, 3)
    assert counts.terms == ["apple", "pear", "plum", "fig"]
    assert counts.topic_count == 3
    assert counts.term_count == 4
    np.testing.assert_array_equal(
        counts.matrix,
        [[3, 0, 0, 4],
         [5, 0, 0, 1],
         [0, 7, 0, 2]],
    )
    assert counts.column("plum").tolist() == [0, 0, 0]


def test_parse_gzip(write_dump):
    path = write_dump(COUNTS_TEXT, name="counts.gz")
    assert parse_word_topic_counts(path, 3).column("pear").tolist() == [0, 0, 7]


def test_columns_follow_line_order_not_index_field():
    counts = fill_counts(["5 b 0:1", "2 a 0:2"], 2, 1)
    assert counts.terms == ["b", "a"]
    assert counts.matrix.tolist() == [[1, 2]]


def test_repeated_pair_overwrites():
    counts = fill_counts(["0 a 0:1 0:9"], 1, 1)
    assert counts.matrix[0, 0] == 9


def test_topic_out_of_range(counts_file):
    with pytest.raises(MalformedRecordError, match="out of range") as exc:
        parse_word_topic_counts(counts_file, 2)
    assert exc.value.line_number == 2


def test_bad_pair_fails_line():
    with pytest.raises(MalformedRecordError) as exc:
        fill_counts(["0 a 0:1", "1 b 0:2 1"], 2, 2)
    assert exc.value.line_number == 2


def test_unknown_term():
    counts = fill_counts(["0 a 0:1"], 1, 1)
    with pytest.raises(KeyError, match="zebra"):
        counts.column("zebra")


def test_invalid_topic_count(counts_file):
    with pytest.raises(ValueError, match="topic_count"):
        parse_word_topic_counts(counts_file, 0)


def test_count_lines():
    assert count_lines(COUNTS_TEXT.splitlines(keepends=True)) == 4
    assert count_lines([]) == 0


def test_progress(counts_file):
    seen = []
    parse_word_topic_counts(counts_file, 3, progress=seen.append, progress_interval=2)
    assert seen == [2, 4]


def test_invalid_utf8_plain_file(tmp_path):
    path = tmp_path / "counts.txt"
    path.write_bytes(b"0 apple 0:1\n1 \xffpear 0:2\n")
    with pytest.raises(MalformedRecordError) as exc:
        parse_word_topic_counts(path, 1)
    assert exc.value.line_number == 2


def test_invalid_topic_count_direct():
    with pytest.raises(ValueError, match="topic_count"):
        fill_counts([], 0, 0)
