from __future__ import annotations

import logging
from typing import Iterable

from exiftree.config import HIERARCHICAL_SUBJECT_FIELD, SUBJECT_FIELD
from exiftree.models import MetadataRecord, SubjectPath

LOGGER = logging.getLogger(__name__)


def pick_deepest(tags: Iterable[str]) -> SubjectPath | None:
    """Return the tag with the most hierarchy levels.

    Equal depths keep the first tag in source order. exiftool reports the
    order stored in the file, so the winner among equally deep tags is not
    guaranteed to survive tools that rewrite the tag list.
    """
    best: SubjectPath | None = None
    for tag in tags:
        path = SubjectPath.parse(tag)
        if not path.is_valid:
            continue
        if best is None or path.depth > best.depth:
            best = path
    return best


def resolve_subject(record: MetadataRecord) -> SubjectPath | None:
    hierarchical = record.texts(HIERARCHICAL_SUBJECT_FIELD)
    if hierarchical:
        best = pick_deepest(hierarchical)
        if best is not None:
            LOGGER.debug("%s picked %r from %d tag(s)", HIERARCHICAL_SUBJECT_FIELD, str(best), len(hierarchical))
            return best

    flat = record.text(SUBJECT_FIELD)
    if flat:
        path = SubjectPath.parse(flat)
        if path.is_valid:
            LOGGER.debug("falling back to %s=%r", SUBJECT_FIELD, flat)
            return path

    return None
