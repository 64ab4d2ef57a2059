"""
Fixed-offset field extraction from a classified MRZ.

Philosophy: a short or garbled line yields empty fields, never an exception.
Python slicing already degrades gracefully past the end of a string, so
every field is read through a slice from the FormatProfile.
"""

from __future__ import annotations

import logging
import string
from datetime import date

from .checksum import FILLER
from .exceptions import UnsupportedFormatError
from .formats import get_profile
from .models import DocumentType, ExtractedFields

logger = logging.getLogger(__name__)

NAME_SEPARATOR = FILLER * 2

# Expiry dates may lie this many years ahead; birth dates never lie ahead.
EXPIRY_YEARS_AHEAD = 10
BIRTH_YEARS_AHEAD = 0


def extract_fields(
    document_type: DocumentType, lines: list[str], today: date | None = None
) -> ExtractedFields:
    """Slice the named identity fields out of two normalized MRZ lines.

    Args:
        document_type: Result of detect_type().
        lines: The normalized MRZ lines (uppercase, stripped).
        today: Reference date for two-digit year expansion.

    Returns:
        ExtractedFields; empty for UNKNOWN input.
    """
    try:
        profile = get_profile(document_type)
    except UnsupportedFormatError as e:
        logger.debug("Skipping extraction: %s", e)
        return ExtractedFields()

    today = today or date.today()
    line1 = lines[0] if len(lines) > 0 else ""
    line2 = lines[1] if len(lines) > 1 else ""

    last_name, given_names = split_name(line1[profile.name])
    birth_date = line2[profile.birth_date]
    expiry_date = line2[profile.expiry_date]

    return ExtractedFields(
        document_code=line1[profile.document_code],
        issuing_country=_strip_filler(line1[profile.issuing_country]),
        last_name=last_name,
        first_name=" ".join(given_names),
        given_names=given_names,
        document_number=_strip_filler(line2[profile.document_number]),
        nationality=_strip_filler(line2[profile.nationality]),
        birth_date=birth_date,
        birth_date_iso=parse_mrz_date(birth_date, today, BIRTH_YEARS_AHEAD),
        sex=_normalize_sex(line2[profile.sex]),
        expiry_date=expiry_date,
        expiry_date_iso=parse_mrz_date(expiry_date, today, EXPIRY_YEARS_AHEAD),
        optional_data=_strip_filler(line2[profile.optional_data]),
    )


def split_name(field: str) -> tuple[str, tuple[str, ...]]:
    """Split an MRZ name field into surname and given names.

    Example:
        "DUPONT<<JEAN<MARIE<<<<<" → ("DUPONT", ("JEAN", "MARIE"))
        "DE<LA<CRUZ<<ANA<<<<<<<"  → ("DE LA CRUZ", ("ANA",))
    """
    surname, _, given = field.partition(NAME_SEPARATOR)
    last_name = " ".join(part for part in surname.split(FILLER) if part)
    given_names = tuple(part for part in given.rstrip(FILLER).split(FILLER) if part)
    return last_name, given_names


def parse_mrz_date(value: str, today: date, max_years_ahead: int) -> date | None:
    """Expand a YYMMDD value to a date.

    The century is chosen so that the year lies no more than
    ``max_years_ahead`` years after ``today``. Returns None for anything
    that is not six digits or not a real calendar date.
    """
    if len(value) != 6 or any(char not in string.digits for char in value):
        return None

    yy, month, day = int(value[:2]), int(value[2:4]), int(value[4:])
    year = (today.year // 100) * 100 + yy
    if year > today.year + max_years_ahead:
        year -= 100

    try:
        return date(year, month, day)
    except ValueError:
        return None


# ─── Internal Helpers ────────────────────────────────────────────────


def _strip_filler(value: str) -> str:
    return value.replace(FILLER, "").strip()


def _normalize_sex(marker: str) -> str:
    """'<' means unspecified, reported as 'X'. Other markers pass through."""
    return "X" if marker == FILLER else marker
