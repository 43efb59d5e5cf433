"""Result bundles: msgpack files plus a manifest with SHA-256 checksums."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import msgpack
import numpy as np

from ._errors import TopicDumpChecksumError, TopicDumpError, TopicDumpVersionError
from ._types import CorpusDimensions, StateParseResult, WordTopicCounts

BUNDLE_VERSION = "1.0"

_STATE_LISTS = ("terms", "documents")
_STATE_ARRAYS = ("term_frequencies", "document_lengths", "topic_terms", "doc_topics")


def _file_digest(path: Path) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(1 << 16):
            digest.update(chunk)
    return digest.hexdigest()


def _pack_array(a: np.ndarray) -> dict[str, Any]:
    a = np.ascontiguousarray(a)
    return {"shape": list(a.shape), "dtype": a.dtype.str, "data": a.tobytes()}


def _unpack_array(d: dict[str, Any]) -> np.ndarray:
    a = np.frombuffer(d["data"], dtype=np.dtype(d["dtype"]))
    # frombuffer is read-only; hand back an owned, writable array
    return a.reshape(d["shape"]).copy()


def _dump_msgpack(path: Path, obj: Any) -> None:
    with open(path, "wb") as f:
        f.write(msgpack.packb(obj, use_bin_type=True))


def _load_msgpack(path: Path) -> Any:
    with open(path, "rb") as f:
        return msgpack.unpackb(f.read(), raw=False)


def _write_bundle(
    out_dir: Path, kind: str, files: dict[str, Any], extra: dict[str, Any]
) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    # Stale files from an earlier bundle would fail the unlisted-file check.
    for stale in out_dir.glob("*.bin"):
        if stale.stem not in files:
            stale.unlink()
    checksums: dict[str, str] = {}
    for name, obj in files.items():
        filename = f"{name}.bin"
        _dump_msgpack(out_dir / filename, obj)
        checksums[filename] = _file_digest(out_dir / filename)
    manifest = {
        "version": BUNDLE_VERSION,
        "kind": kind,
        "files": checksums,
        **extra,
    }
    manifest_path = out_dir / "manifest.json"
    with open(manifest_path, "w") as f:
        json.dump(manifest, f, indent=2)
    return manifest_path


def _read_bundle(data_dir: Path, kind: str) -> tuple[dict[str, Any], dict[str, Any]]:
    manifest_path = data_dir / "manifest.json"
    if not manifest_path.exists():
        raise TopicDumpError(f"manifest.json not found in {data_dir}")
    with open(manifest_path) as f:
        manifest = json.load(f)

    version = manifest.get("version")
    if version != BUNDLE_VERSION:
        raise TopicDumpVersionError(
            f"Expected bundle version {BUNDLE_VERSION!r}, got {version!r}"
        )
    if manifest.get("kind") != kind:
        raise TopicDumpError(
            f"{data_dir} holds a {manifest.get('kind')!r} bundle, not {kind!r}"
        )

    listed: dict[str, str] = manifest.get("files", {})
    unlisted = sorted(
        p.name for p in data_dir.glob("*.bin") if p.name not in listed
    )
    if unlisted:
        raise TopicDumpChecksumError(
            f"Bundle files not covered by the manifest: {', '.join(unlisted)}"
        )

    loaded: dict[str, Any] = {}
    for filename, expected in listed.items():
        filepath = data_dir / filename
        if not filepath.exists():
            raise TopicDumpError(f"Missing bundle file: {filepath}")
        actual = _file_digest(filepath)
        if actual != expected:
            raise TopicDumpChecksumError(
                f"{filename} does not match its manifest digest "
                f"(sha256 {actual[:12]}, manifest says {expected[:12]})"
            )
        loaded[filename.removesuffix(".bin")] = _load_msgpack(filepath)
    return manifest, loaded


def save_result(result: StateParseResult, out_dir: Path | str) -> Path:
    """Write a state parse result; fields that were not extracted are skipped.

    Returns the manifest path.
    """
    dims = result.dimensions
    files: dict[str, Any] = {
        "dimensions": [dims.topic_count, dims.term_count, dims.document_count],
    }
    for name in _STATE_LISTS:
        value = getattr(result, name)
        if value is not None:
            files[name] = list(value)
    for name in _STATE_ARRAYS:
        value = getattr(result, name)
        if value is not None:
            files[name] = _pack_array(value)
    return _write_bundle(
        Path(out_dir), "state", files,
        {"doc_topics_path": result.doc_topics_path},
    )


def load_result(data_dir: Path | str) -> StateParseResult:
    """Load and verify a bundle written by save_result."""
    manifest, loaded = _read_bundle(Path(data_dir), "state")
    if "dimensions" not in loaded:
        raise TopicDumpError(f"No dimensions in bundle {data_dir}")
    topics, terms, docs = loaded["dimensions"]
    result = StateParseResult(
        dimensions=CorpusDimensions(
            topic_count=topics, term_count=terms, document_count=docs,
        ),
        doc_topics_path=manifest.get("doc_topics_path", ""),
    )
    for name in _STATE_LISTS:
        if name in loaded:
            setattr(result, name, loaded[name])
    for name in _STATE_ARRAYS:
        if name in loaded:
            setattr(result, name, _unpack_array(loaded[name]))
    return result


def save_counts(counts: WordTopicCounts, out_dir: Path | str) -> Path:
    """Write a word-topic-counts matrix and its term labels."""
    return _write_bundle(
        Path(out_dir), "counts",
        {"terms": counts.terms, "matrix": _pack_array(counts.matrix)},
        {},
    )


def load_counts(data_dir: Path | str) -> WordTopicCounts:
    """Load and verify a bundle written by save_counts."""
    _, loaded = _read_bundle(Path(data_dir), "counts")
    for name in ("terms", "matrix"):
        if name not in loaded:
            raise TopicDumpError(f"No {name} in bundle {data_dir}")
    return WordTopicCounts(
        terms=loaded["terms"], matrix=_unpack_array(loaded["matrix"]),
    )
