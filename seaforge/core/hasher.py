"""Streaming file digests for change detection.

The digest only has to tell "same bytes" from "different bytes" between two
builds, so a fast hash is fine; collision resistance is not relied upon.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

DEFAULT_ALGORITHM = "md5"
CHUNK_SIZE = 64 * 1024


def file_digest(
    path: Path | str,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = CHUNK_SIZE,
) -> str:
    """Return the lowercase hex digest of a file's contents.

    The file is read in *chunk_size* pieces so large blobs never sit in
    memory whole. Raises ``OSError`` if the file cannot be read.
    """
    h = hashlib.new(algorithm, usedforsecurity=False)
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def optional_file_digest(path: Path, **kwargs) -> str | None:
    """Digest of *path* if it is a regular file, else None."""
    if not path.is_file():
        return None
    return file_digest(path, **kwargs)
