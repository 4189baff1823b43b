from __future__ import annotations

from pathlib import Path

from PIL import Image

from exiftree.models import MetadataRecord


class FakeSource:
    """Stands in for exiftool: records keyed by file name."""

    def __init__(self, records: dict[str, MetadataRecord] | None = None) -> None:
        self.records = records or {}
        self.entered = 0
        self.exited = 0
        self.seen: list[str] = []

    def __enter__(self) -> "FakeSource":
        self.entered += 1
        return self

    def __exit__(self, *exc_info) -> None:
        self.exited += 1

    def extract(self, path: Path) -> MetadataRecord:
        self.seen.append(path.name)
        return self.records.get(path.name, MetadataRecord())


def write_jpeg(path: Path, color: tuple[int, int, int] = (200, 30, 30)) -> Path:
    Image.new("RGB", (16, 16), color).save(path, "JPEG")
    return path


def snapshot(root: Path) -> dict[str, bytes | None]:
    return {
        str(p.relative_to(root)): (p.read_bytes() if p.is_file() else None)
        for p in sorted(root.rglob("*"))
    }
