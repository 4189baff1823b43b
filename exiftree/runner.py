from __future__ import annotations

import logging
import sys
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from exiftree.config import JPEG_SUFFIXES, SEPARATOR_LINE, RunConfig
from exiftree.metadata import ExifToolSource, MetadataSource, MetadataSourceError
from exiftree.router import REASONS, FileRouter

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1

SourceFactory = Callable[[RunConfig], MetadataSource]


class FatalSetupError(RuntimeError):
    pass


@dataclass
class RunReport:
    target_dir: Path
    dry_run: bool
    processed: int = 0
    counts: Counter = field(default_factory=Counter)


def default_source(config: RunConfig) -> MetadataSource:
    return ExifToolSource(executable=config.exiftool_path)


def is_eligible(entry: Path) -> bool:
    return entry.is_file() and entry.suffix.lower() in JPEG_SUFFIXES


def _ensure_catch_all(config: RunConfig) -> None:
    catch_all = config.catch_all_dir
    if catch_all.is_dir():
        return
    print(f"Creating Uncategorized directory: {catch_all}")
    if config.dry_run:
        return
    try:
        catch_all.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FatalSetupError(f"Error creating Uncategorized directory: {exc}") from exc


def _list_entries(target: Path) -> list[Path]:
    try:
        return sorted(target.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise FatalSetupError(f"Error reading directory '{target}': {exc}") from exc


def _print_banner(config: RunConfig) -> None:
    print("--- Starting Image Categorization and Renaming ---")
    print(f"Target Directory: {config.target_dir}")
    if config.dry_run:
        print("DRY RUN MODE: No files will be moved or renamed.")
    else:
        print("Actual run: Files will be moved and renamed.")
    print(SEPARATOR_LINE)


def _build_summary(report: RunReport) -> list[str]:
    lines = [
        "--- Run Summary ---",
        f"dry_run: {report.dry_run}",
        f"target: {report.target_dir}",
        f"processed: {report.processed}",
    ]
    for reason in REASONS:
        lines.append(f"{reason}: {report.counts[reason]}")
    return lines


def run_batch(config: RunConfig, source_factory: SourceFactory | None = None) -> RunReport:
    source_factory = source_factory or default_source
    target = config.target_dir
    if not target.is_dir():
        raise FatalSetupError(f"Target directory '{target}' not found.")

    _ensure_catch_all(config)
    _print_banner(config)
    entries = _list_entries(target)

    report = RunReport(target_dir=target, dry_run=config.dry_run)
    router = FileRouter(config)

    try:
        source = source_factory(config)
        with source:
            for entry in entries:
                if not is_eligible(entry):
                    LOGGER.debug("skipping %s", entry.name)
                    continue

                print(f"Processing: {entry}")
                record = source.extract(entry)
                reason = router.process(entry, record)
                report.processed += 1
                report.counts[reason] += 1
                print(SEPARATOR_LINE)
    except MetadataSourceError as exc:
        raise FatalSetupError(f"Error initializing exiftool: {exc}") from exc

    print("--- Renaming and Categorization Complete ---")
    print("\n".join(_build_summary(report)))
    return report


def run_sync(config: RunConfig, source_factory: SourceFactory | None = None) -> int:
    """Run one batch and map its outcome to a process exit code."""
    try:
        run_batch(config, source_factory)
    except FatalSetupError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    return EXIT_OK
