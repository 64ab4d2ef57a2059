"""
Document type detection: classify an MRZ by its shape alone.

No content is inspected here: two lines of 36 characters are an ID card,
two lines of 44 are a passport, anything else is UNKNOWN.
"""

from __future__ import annotations

import logging

from .formats import ID_PROFILE, PASSPORT_PROFILE
from .models import DocumentType

logger = logging.getLogger(__name__)

ID_LINE_LENGTH = ID_PROFILE.line_length
PASSPORT_LINE_LENGTH = PASSPORT_PROFILE.line_length
MRZ_LINE_COUNT = 2

# Only ASCII padding is trimmed; any other whitespace stays in the line
# and changes its length.
_PADDING = " \t\r"


def normalize_lines(raw: str) -> list[str]:
    """Split raw text on '\\n', strip padding from each line, drop blanks, uppercase."""
    stripped = (line.strip(_PADDING) for line in raw.split("\n"))
    return [line.upper() for line in stripped if line]


def detect_type(lines: list[str]) -> DocumentType:
    """Classify already-split MRZ lines by count and length."""
    lines = [line.strip(_PADDING).upper() for line in lines if line.strip(_PADDING)]

    if len(lines) != MRZ_LINE_COUNT:
        logger.debug("Expected %d MRZ lines, got %d", MRZ_LINE_COUNT, len(lines))
        return DocumentType.UNKNOWN

    lengths = {len(line) for line in lines}
    for profile in (ID_PROFILE, PASSPORT_PROFILE):
        if lengths == {profile.line_length}:
            return profile.document_type

    logger.debug("No MRZ format matches line lengths %s", [len(line) for line in lines])
    return DocumentType.UNKNOWN
