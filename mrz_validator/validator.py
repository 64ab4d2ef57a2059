"""
MRZ validation orchestrator.

Flow:
    raw text → normalize → classify → extract → checksum → aggregate

Design principles:
  - Every path returns a well-formed ValidationResult; nothing is raised.
  - A checksum mismatch is recorded and the remaining checks still run.
  - Warnings (expired document, odd document code) never affect `valid`.
"""

from __future__ import annotations

import logging
from datetime import date

from .checksum import FILLER, compute_checksum, parse_check_digit
from .detector import (
    ID_LINE_LENGTH,
    MRZ_LINE_COUNT,
    PASSPORT_LINE_LENGTH,
    detect_type,
    normalize_lines,
)
from .exceptions import CheckDigitFormatError
from .extractor import extract_fields
from .formats import CheckedField, FormatProfile, get_profile
from .models import ChecksumResult, DocumentType, ExtractedFields, ValidationResult

logger = logging.getLogger(__name__)

VALID_SEX_MARKERS: frozenset[str] = frozenset({"M", "F", "X"})


def validate_mrz(raw: str, today: date | None = None) -> ValidationResult:
    """Validate a raw MRZ text blob.

    Args:
        raw: MRZ lines separated by newlines, as produced by OCR.
        today: Reference date for expiry checks and year expansion.
            Defaults to date.today().

    Returns:
        ValidationResult with extracted fields, per-field checksums,
        errors, warnings and a confidence score.
    """
    lines = normalize_lines(raw)

    if len(lines) < MRZ_LINE_COUNT:
        logger.info("Rejected MRZ with %d non-empty line(s)", len(lines))
        return _unknown_result(
            f"MRZ must contain at least {MRZ_LINE_COUNT} non-empty lines, "
            f"got {len(lines)}."
        )

    document_type = detect_type(lines)
    if document_type == DocumentType.UNKNOWN:
        lengths = ", ".join(str(len(line)) for line in lines)
        logger.info("Unrecognized MRZ shape: %d line(s), lengths %s", len(lines), lengths)
        return _unknown_result(
            f"Unrecognized MRZ format: {len(lines)} line(s), lengths: {lengths}. "
            f"Expected {MRZ_LINE_COUNT} lines of {ID_LINE_LENGTH} (ID) or "
            f"{PASSPORT_LINE_LENGTH} (PASSPORT) characters."
        )

    today = today or date.today()
    profile = get_profile(document_type)
    fields = extract_fields(document_type, lines, today)

    errors: list[str] = []
    warnings = _check_warnings(profile, fields, today)
    checksums: dict[str, ChecksumResult] = {}
    mandatory_ok = True

    for check in profile.checks:
        result = _run_check(check, lines[1])
        if result is None:
            continue
        checksums[check.name] = result
        if result.match:
            continue

        message = _mismatch_message(check, lines[1], result)
        if check.mandatory:
            mandatory_ok = False
            errors.append(message)
        else:
            warnings.append(message)

    performed = len(checksums)
    matched = sum(1 for c in checksums.values() if c.match)
    confidence = min(1.0, max(0.0, matched / performed)) if performed else 0.0

    logger.debug(
        "%s MRZ: %d/%d checksums matched", document_type.value, matched, performed
    )

    return ValidationResult(
        valid=mandatory_ok,
        document_type=document_type,
        extracted_data=fields,
        errors=errors,
        warnings=warnings,
        checksums=checksums,
        confidence=confidence,
    )


# ─── Checksums ──────────────────────────────────────────────────────


def _run_check(check: CheckedField, line: str) -> ChecksumResult | None:
    """Compare one field against its embedded check digit.

    Returns None when the check is skipped (optional field left blank).
    """
    data = check.data(line)
    if check.skip_if_filler and data.strip(FILLER) == "":
        return None

    computed = compute_checksum(data)
    try:
        expected: int | None = parse_check_digit(check.check_char(line))
    except CheckDigitFormatError:
        expected = None

    return ChecksumResult(computed=computed, expected=expected, match=computed == expected)


def _mismatch_message(check: CheckedField, line: str, result: ChecksumResult) -> str:
    if result.expected is None:
        return (
            f"Invalid {check.label} check digit: {check.check_char(line)!r} is not "
            f"a digit (computed {result.computed})."
        )
    return (
        f"Checksum mismatch for {check.label}: expected {result.expected}, "
        f"computed {result.computed}."
    )


# ─── Warnings ───────────────────────────────────────────────────────


def _check_warnings(
    profile: FormatProfile, fields: ExtractedFields, today: date
) -> list[str]:
    """Observations that are worth reporting but never invalidate the MRZ."""
    warnings: list[str] = []

    if not fields.document_code.startswith(profile.document_codes):
        warnings.append(
            f"Unusual document code {fields.document_code!r} for "
            f"{profile.document_type.value} (expected one of: "
            f"{', '.join(profile.document_codes)})."
        )

    if fields.sex not in VALID_SEX_MARKERS:
        warnings.append(f"Unrecognized sex marker {fields.sex!r}.")

    if fields.expiry_date_iso is not None and fields.expiry_date_iso < today:
        warnings.append(f"Document expired on {fields.expiry_date_iso.isoformat()}.")

    return warnings


def _unknown_result(error: str) -> ValidationResult:
    return ValidationResult(
        valid=False,
        document_type=DocumentType.UNKNOWN,
        errors=[error],
        confidence=0.0,
    )
