"""Benchmark suite for the dump parsers.

Run:  pytest tests/test_benchmarks.py --benchmark-enable
Skip: pytest tests/ -m "not benchmark"
"""

from __future__ import annotations

import random

import pytest

from topicdump import ParseOptions, aggregate, parse_state, scan_dimensions
from topicdump._counts import fill_counts
from topicdump._decoder import decode_assignment, decode_counts

from conftest import HEADER

pytestmark = pytest.mark.benchmark

N_DOCS = 200
TOKENS_PER_DOC = 250
N_TERMS = 2000
N_TOPICS = 50


def _synthetic_state() -> list[str]:
    rng = random.Random(7)
    lines = HEADER.splitlines(keepends=True)
    for doc in range(N_DOCS):
        for pos in range(TOKENS_PER_DOC):
            term = rng.randrange(N_TERMS)
            lines.append(
                f"{doc} doc{doc}.txt {pos} {term} w{term} "
                f"{rng.randrange(N_TOPICS)}\n"
            )
    return lines


def _synthetic_counts() -> list[str]:
    rng = random.Random(11)
    lines = []
    for term in range(N_TERMS):
        topics = rng.sample(range(N_TOPICS), 5)
        pairs = " ".join(f"{t}:{rng.randrange(1, 500)}" for t in topics)
        lines.append(f"{term} w{term} {pairs}\n")
    return lines


STATE_LINES = _synthetic_state()
COUNTS_LINES = _synthetic_counts()


def test_bench_decode_assignment(benchmark):
    benchmark(decode_assignment, "12 docs/a.txt 3 40 apple 7\n", 4)


def test_bench_decode_counts(benchmark):
    benchmark(decode_counts, COUNTS_LINES[0], 1)


def test_bench_scan(benchmark):
    benchmark.extra_info["n_lines"] = len(STATE_LINES)
    dims = benchmark(scan_dimensions, STATE_LINES)
    assert dims.document_count == N_DOCS


@pytest.mark.parametrize("matrices", [True, False])
def test_bench_aggregate(benchmark, matrices):
    dims = scan_dimensions(STATE_LINES)
    options = ParseOptions(
        extract_topic_terms=matrices, extract_doc_topics=matrices,
    )
    benchmark.extra_info["matrices"] = matrices
    result = benchmark(aggregate, STATE_LINES, dims, options)
    assert result.document_lengths.sum() == N_DOCS * TOKENS_PER_DOC


def test_bench_parse_state_streaming(benchmark, write_dump, tmp_path):
    path = write_dump("".join(STATE_LINES))
    options = ParseOptions(
        extract_doc_topics=False, doc_topics_path=tmp_path / "dt.gz",
    )
    result = benchmark.pedantic(
        parse_state, args=(path, options), rounds=3, iterations=1,
    )
    assert result.doc_topics is None


def test_bench_fill_counts(benchmark):
    counts = benchmark(fill_counts, COUNTS_LINES, len(COUNTS_LINES), N_TOPICS)
    assert counts.term_count == N_TERMS
