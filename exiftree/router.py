from __future__ import annotations

import logging
import sys
from pathlib import Path

from exiftree.config import RunConfig
from exiftree.hashing import content_id
from exiftree.models import Categorize, MetadataRecord, RouteDecision, Uncategorized
from exiftree.naming import build_filename, derive_names
from exiftree.subjects import resolve_subject

LOGGER = logging.getLogger(__name__)

CATEGORIZED = "CATEGORIZED"
METADATA_FAILED = "METADATA_FAILED"
SUBJECT_MISSING = "SUBJECT_MISSING"
CATEGORIZE_DIR_FAILED = "CATEGORIZE_DIR_FAILED"
HASH_FAILED = "HASH_FAILED"
MOVE_FAILED = "MOVE_FAILED"

REASONS = [CATEGORIZED, METADATA_FAILED, SUBJECT_MISSING, CATEGORIZE_DIR_FAILED, HASH_FAILED, MOVE_FAILED]


def _err(message: str) -> None:
    print(message, file=sys.stderr)


def destination_taken(src: Path, final: Path) -> bool:
    return final.exists() and not final.samefile(src)


def move_file(src: Path, dest_dir: Path, new_name: str | None = None) -> Path:
    """Move `src` into `dest_dir`, keeping its name unless `new_name` is given.

    An existing destination is never overwritten.
    """
    final = dest_dir / (new_name or src.name)
    if destination_taken(src, final):
        raise FileExistsError(f"failed to move/rename '{src}' to '{final}': destination exists")
    try:
        src.rename(final)
    except OSError as exc:
        raise OSError(f"failed to move/rename '{src}' to '{final}': {exc}") from exc
    print(f"  Moved '{src}' to '{final}'")
    return final


class FileRouter:
    """Decides where each file goes and, unless dry-running, moves it there."""

    def __init__(self, config: RunConfig) -> None:
        self.config = config

    @property
    def catch_all_dir(self) -> Path:
        return self.config.catch_all_dir

    def plan(self, path: Path, record: MetadataRecord) -> RouteDecision:
        """Compute the route for one file. Raises OSError if hashing fails."""
        if record.failed:
            return Uncategorized(METADATA_FAILED)

        subject = resolve_subject(record)
        if subject is None:
            return Uncategorized(SUBJECT_MISSING)

        dir_name, stem = derive_names(subject)
        # An empty top segment ("|Owls") leaves the file in target_dir itself, renamed.
        digest = content_id(path, length=self.config.hash_length, chunk_size=self.config.chunk_size)
        return Categorize(
            destination_dir=self.config.target_dir / dir_name,
            new_name=build_filename(stem, digest),
            stem=stem,
            subject=subject,
        )

    def process(self, path: Path, record: MetadataRecord) -> str:
        if record.failed:
            _err(f"Error extracting metadata for {path}: {record.error}")

        try:
            decision = self.plan(path, record)
        except OSError as exc:
            _err(f"Error generating hash for {path}: {exc}")
            print("  Leaving file in place.")
            LOGGER.debug("hash failure", exc_info=True)
            return HASH_FAILED

        if isinstance(decision, Uncategorized):
            if decision.reason == SUBJECT_MISSING:
                print("  No Hierarchical Subject or Subject found. Moving to Uncategorized.")
            else:
                print("  Moving to Uncategorized.")
            return self._to_catch_all(path, decision.reason)

        return self._categorize(path, decision)

    def _categorize(self, path: Path, decision: Categorize) -> str:
        dest_dir = decision.destination_dir
        print(f"  Found subject: '{decision.subject}'")
        print(f"  Found top-level category: '{dest_dir.name}'")
        print(f"  Found deepest category: '{decision.stem}'")
        print(f"  Destination Directory: '{dest_dir}'")
        print(f"  New filename will be: '{decision.new_name}'")

        if self.config.dry_run:
            if dest_dir.exists() and not dest_dir.is_dir():
                _err(f"Error creating destination directory '{dest_dir}': not a directory")
                print(f"  Moving '{path}' to Uncategorized due to directory creation error.")
                return self._to_catch_all(path, CATEGORIZE_DIR_FAILED)
            final = dest_dir / decision.new_name
            if destination_taken(path, final):
                _err(f"Error moving and renaming file: '{final}' already exists")
                return MOVE_FAILED
            print(f"  (Dry Run) Would create directory '{dest_dir}' and rename/move '{path}' to '{final}'")
            return CATEGORIZED

        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            _err(f"Error creating destination directory '{dest_dir}': {exc}")
            print(f"  Moving '{path}' to Uncategorized due to directory creation error.")
            return self._to_catch_all(path, CATEGORIZE_DIR_FAILED)

        try:
            move_file(path, dest_dir, decision.new_name)
        except OSError as exc:
            _err(f"Error moving and renaming file: {exc}")
            return MOVE_FAILED
        return CATEGORIZED

    def _to_catch_all(self, path: Path, reason: str) -> str:
        if self.config.dry_run:
            final = self.catch_all_dir / path.name
            if destination_taken(path, final):
                _err(f"Error moving file to Uncategorized: '{final}' already exists")
                return MOVE_FAILED
            print(f"  (Dry Run) Would move '{path}' to '{final}'")
            return reason
        try:
            move_file(path, self.catch_all_dir)
        except OSError as exc:
            _err(f"Error moving file to Uncategorized: {exc}")
            return MOVE_FAILED
        return reason
