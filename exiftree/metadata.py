from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from exiftool import ExifToolHelper
from exiftool.exceptions import ExifToolException

from exiftree.models import MetadataRecord

LOGGER = logging.getLogger(__name__)

# exiftool puts a per-file failure in the output instead of a field value.
ERROR_FIELD = "Error"
SOURCE_FILE_FIELD = "SourceFile"


class MetadataSourceError(RuntimeError):
    pass


class MetadataSource(Protocol):
    def extract(self, path: Path) -> MetadataRecord: ...

    def __enter__(self) -> "MetadataSource": ...

    def __exit__(self, *exc_info: Any) -> None: ...


def record_from_block(block: dict[str, Any]) -> MetadataRecord:
    """Build a record from one exiftool JSON object."""
    error = block.get(ERROR_FIELD)
    if error:
        return MetadataRecord.failure(str(error))
    fields = {key: value for key, value in block.items() if key != SOURCE_FILE_FIELD}
    return MetadataRecord(fields=fields)


class ExifToolSource:
    """Long-lived exiftool process used for a whole batch.

    Use it as a context manager so the process is terminated on every
    exit path.
    """

    def __init__(self, executable: str | None = None) -> None:
        self.executable = executable
        self._helper: ExifToolHelper | None = None

    def __enter__(self) -> "ExifToolSource":
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def open(self) -> None:
        kwargs: dict[str, Any] = {"common_args": []}
        if self.executable:
            kwargs["executable"] = self.executable
        try:
            helper = ExifToolHelper(**kwargs)
            helper.run()
        except (OSError, ExifToolException) as exc:
            raise MetadataSourceError(f"{type(exc).__name__}: {exc}") from exc
        LOGGER.debug("exiftool %s started", helper.version)
        self._helper = helper

    def close(self) -> None:
        helper, self._helper = self._helper, None
        if helper is not None and helper.running:
            helper.terminate()

    def extract(self, path: Path) -> MetadataRecord:
        if self._helper is None:
            raise MetadataSourceError("exiftool is not running")
        try:
            blocks = self._helper.get_metadata([str(path)])
        except (ExifToolException, OSError, ValueError, TypeError) as exc:
            LOGGER.debug("exiftool failed on %s", path, exc_info=True)
            return MetadataRecord.failure(f"{type(exc).__name__}: {exc}")
        if not blocks:
            return MetadataRecord.failure("exiftool returned no metadata")
        LOGGER.debug("fields for %s: %s", path.name, sorted(blocks[0]))
        return record_from_block(blocks[0])
