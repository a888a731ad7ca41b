"""Helpers to read ``<tag:value>`` annotations out of free-text item notes."""

from __future__ import annotations

import re
from typing import Mapping, Optional

from utils.logger import get_logger

logger = get_logger(__name__)

# <key:value> stores the text after the colon, <key> stores True
_NOTE_TAG_PATTERN = re.compile(r"<([^<>:]+)(:?)([^>]*)>")

NoteTags = dict[str, "str | bool"]


def parse_note_tags(note: Optional[str]) -> NoteTags:
    """Return every tag found in ``note``; later duplicates overwrite earlier ones."""
    tags: NoteTags = {}
    if not note:
        return tags
    for match in _NOTE_TAG_PATTERN.finditer(note):
        key, colon, value = match.groups()
        tags[key] = value if colon == ":" else True
    return tags


def parse_event_id(tags: Mapping[str, "str | bool"], key: str) -> Optional[int]:
    """Read a common event id stored under ``key``.

    Absent tag gives ``None``.  A value that is not a non-negative integer is
    reported and treated as absent as well.
    """
    if key not in tags:
        return None
    raw = tags[key]
    if isinstance(raw, str):
        text = raw.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    logger.warning("Ignoring malformed <%s> note tag value %r", key, raw)
    return None
