"""Shared fixtures for topicdump tests."""

import gzip

import pytest

HEADER = (
    "#doc source pos typeindex type topic\n"
    "#alpha : 0.5 0.5\n"
    "#beta : 0.01\n"
)

SCENARIO_BODY = (
    "0 docA 0 5 apple 1\n"
    "0 docA 1 6 pear 0\n"
    "1 docB 0 5 apple 1\n"
)

# Three documents, doc 2 has no tokens, four topics.
GAPPED_BODY = (
    "0 a.txt 0 0 river 2\n"
    "0 a.txt 1 1 bank 2\n"
    "0 a.txt 2 2 money 0\n"
    "1 b.txt 0 1 bank 3\n"
    "1 b.txt 1 2 money 3\n"
    "3 d.txt 0 0 river 1\n"
    "3 d.txt 1 0 river 1\n"
    "3 d.txt 2 3 loan 0\n"
)

COUNTS_TEXT = (
    "0 apple 0:3 1:5\n"
    "1 pear 2:7\n"
    "2 plum\n"
    "3 fig 1:1 0:4 2:2\n"
)


def _write(path, text, compress):
    if compress:
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write(text)
    else:
        path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write_dump(tmp_path):
    """Return a helper that writes text to a (optionally gzipped) file."""
    def write(text, name="state.gz", compress=True):
        return _write(tmp_path / name, text, compress)
    return write


@pytest.fixture
def scenario_state(write_dump):
    return write_dump(HEADER + SCENARIO_BODY)


@pytest.fixture
def gapped_state(write_dump):
    return write_dump(HEADER + GAPPED_BODY, name="gapped.gz")


@pytest.fixture
def counts_file(write_dump):
    return write_dump(COUNTS_TEXT, name="counts.txt", compress=False)
