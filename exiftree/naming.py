from __future__ import annotations

from exiftree.models import SubjectPath

REPLACEMENT_CHAR = "_"
_KEEP = {" ", "-", "_"}


def _is_safe(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or ch in _KEEP


def sanitize_component(component: str) -> str:
    """Replace every unsafe character with an underscore, one for one.

    Letters, decimal digits, space, hyphen and underscore survive; path
    separators, punctuation and symbols do not. The result always has the
    same length as the input.
    """
    return "".join(ch if _is_safe(ch) else REPLACEMENT_CHAR for ch in component)


def derive_names(subject: SubjectPath) -> tuple[str, str]:
    """Return (category directory name, deepest category name)."""
    return sanitize_component(subject.top), sanitize_component(subject.deepest)


def build_filename(stem: str, content_id: str) -> str:
    return f"{stem}_{content_id}.jpg"
