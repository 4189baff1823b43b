from __future__ import annotations

import hashlib
from pathlib import Path

from exiftree.config import CONTENT_ID_LENGTH, HASH_CHUNK_SIZE


def sha256_file(path: Path, *, chunk_size: int = HASH_CHUNK_SIZE) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(chunk_size), b""):
            digest.update(chunk)
    return digest.hexdigest()


def content_id(path: Path, *, length: int = CONTENT_ID_LENGTH, chunk_size: int = HASH_CHUNK_SIZE) -> str:
    """Short content identifier used to keep renamed files apart.

    Only the first `length` hex characters of the SHA-256 are kept, so two
    different files can in principle share an identifier.
    """
    return sha256_file(path, chunk_size=chunk_size)[:length]
