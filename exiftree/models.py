from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Union

from exiftree.config import HIERARCHY_SEPARATOR


@dataclass(frozen=True)
class MetadataRecord:
    """Metadata for one file, as reported by the metadata source.

    Values are loosely typed (exiftool emits strings, numbers or lists), so
    callers go through `text`/`texts` instead of inspecting values directly.
    """

    fields: Mapping[str, Any] = field(default_factory=dict)
    error: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def failure(cls, error: str) -> "MetadataRecord":
        return cls(fields={}, error=error)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def text(self, name: str) -> str | None:
        value = self.fields.get(name)
        if isinstance(value, str):
            return value or None
        if isinstance(value, (list, tuple)):
            for item in value:
                if isinstance(item, str) and item:
                    return item
        return None

    def texts(self, name: str) -> tuple[str, ...]:
        value = self.fields.get(name)
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)):
            return tuple(item for item in value if isinstance(item, str))
        return ()


@dataclass(frozen=True, slots=True)
class SubjectPath:
    segments: tuple[str, ...]

    @classmethod
    def parse(cls, raw: str) -> "SubjectPath":
        return cls(tuple(raw.split(HIERARCHY_SEPARATOR)))

    @property
    def depth(self) -> int:
        return max(len(self.segments) - 1, 0)

    @property
    def is_valid(self) -> bool:
        return any(self.segments)

    @property
    def top(self) -> str:
        return self.segments[0]

    @property
    def deepest(self) -> str:
        return self.segments[-1]

    def __str__(self) -> str:
        return HIERARCHY_SEPARATOR.join(self.segments)


@dataclass(frozen=True, slots=True)
class Categorize:
    destination_dir: Path
    new_name: str
    stem: str
    subject: SubjectPath


@dataclass(frozen=True, slots=True)
class Uncategorized:
    reason: str


RouteDecision = Union[Categorize, Uncategorized]
