from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

CATCH_ALL_DIR_NAME = "Uncategorized"
JPEG_SUFFIXES = {".jpg", ".jpeg"}

# Field names as exiftool reports them without group prefixes.
HIERARCHICAL_SUBJECT_FIELD = "HierarchicalSubject"
SUBJECT_FIELD = "Subject"
HIERARCHY_SEPARATOR = "|"

CONTENT_ID_LENGTH = 8
HASH_CHUNK_SIZE = 64 * 1024

SEPARATOR_LINE = "-------------------------------------------------"


def _env_exiftool() -> str | None:
    value = os.getenv("EXIFTREE_EXIFTOOL", "").strip()
    return value or None


@dataclass
class RunConfig:
    target_dir: Path
    dry_run: bool = False

    catch_all_name: str = CATCH_ALL_DIR_NAME

    # Metadata source (None: look up `exiftool` on PATH)
    exiftool_path: str | None = None

    # Content hasher
    hash_length: int = CONTENT_ID_LENGTH
    chunk_size: int = HASH_CHUNK_SIZE

    @classmethod
    def from_env(cls, target_dir: Path, *, dry_run: bool = False) -> "RunConfig":
        return cls(target_dir=target_dir, dry_run=dry_run, exiftool_path=_env_exiftool())

    @property
    def catch_all_dir(self) -> Path:
        return self.target_dir / self.catch_all_name
