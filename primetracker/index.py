"""The compressed index that maps export manifest names to their hashed file names."""

from __future__ import annotations

import lzma
import os
from pathlib import Path

HASH_SUFFIX_LENGTH = 26


class ManifestIndexError(ValueError):
    """The manifest index could not be decompressed or understood."""


def _lines(text: str) -> list[str]:
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def parse_index(data: bytes) -> dict[str, str]:
    """Decompress an index and map each manifest name to its hashed file name."""
    try:
        raw = lzma.decompress(data, format=lzma.FORMAT_ALONE)
    except lzma.LZMAError as error:
        raise ManifestIndexError(f"Decompressing manifest file: {error}") from error
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as error:
        raise ManifestIndexError(f"Parsing decompressed manifest file: {error}") from error

    index: dict[str, str] = {}
    for line in _lines(text):
        if len(line) < HASH_SUFFIX_LENGTH:
            raise ManifestIndexError(f"Index line too short for a hashed name: {line!r}")
        index[line[:-HASH_SUFFIX_LENGTH]] = line
    return index


def load_index(path: str | os.PathLike[str]) -> dict[str, str]:
    """Read and parse a compressed index file from disk."""
    return parse_index(Path(path).read_bytes())