"""
Heuristic fraud scoring for MRZ text.

Each rule function:
  - Takes the raw text, the ValidationResult and the FraudPolicy
  - Returns a list of FraudSignal objects (empty = nothing suspicious)
  - Is independently testable

detect_mrz_fraud() runs every rule in FRAUD_RULES and sums the weights.
New rules are added by appending a function to FRAUD_RULES (or passing a
custom list); the contract of detect_mrz_fraud() does not change.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Callable

from .checksum import FILLER
from .config import DEFAULT_POLICY, FraudPolicy
from .formats import ID_PROFILE, PASSPORT_PROFILE
from .models import DocumentType, FraudAssessment, FraudSignal, ValidationResult
from .validator import validate_mrz

logger = logging.getLogger(__name__)

FraudRule = Callable[[str, ValidationResult, FraudPolicy], list[FraudSignal]]

_DISALLOWED_CHARS = re.compile(r"[^A-Z0-9<\n\r ]")
_ALNUM_12 = re.compile(r"[A-Z0-9]{12}")
_YYMMDD = re.compile(r"[0-9]{6}")

_CHECKSUM_LABELS: dict[str, str] = {
    check.name: check.label
    for profile in (ID_PROFILE, PASSPORT_PROFILE)
    for check in profile.checks
}


# ─── Orchestrator ────────────────────────────────────────────────────


def detect_mrz_fraud(
    raw: str,
    policy: FraudPolicy | None = None,
    today: date | None = None,
    rules: list[FraudRule] | tuple[FraudRule, ...] | None = None,
) -> FraudAssessment:
    """Score raw MRZ text for signs of tampering or fabrication.

    Args:
        raw: MRZ lines separated by newlines.
        policy: Weights and threshold. Defaults to DEFAULT_POLICY.
        today: Reference date forwarded to validate_mrz().
        rules: Rules to run. Defaults to FRAUD_RULES.

    Returns:
        FraudAssessment; suspicious_fraud is True when the capped
        risk score exceeds the policy threshold.
    """
    policy = policy or DEFAULT_POLICY
    rules = FRAUD_RULES if rules is None else rules
    result = validate_mrz(raw, today)

    signals: list[FraudSignal] = []
    for rule in rules:
        signals.extend(rule(raw, result, policy))

    risk_score = min(policy.max_score, sum(s.weight for s in signals))
    suspicious = risk_score > policy.threshold

    if signals:
        logger.info(
            "MRZ fraud rules fired: %s (score %d)",
            ", ".join(s.code for s in signals),
            risk_score,
        )

    return FraudAssessment(
        suspicious_fraud=suspicious,
        reasons=[s.reason for s in signals],
        risk_score=risk_score,
        signals=signals,
    )


# ─── Individual Rules ────────────────────────────────────────────────


def check_unknown_format(
    raw: str, result: ValidationResult, policy: FraudPolicy
) -> list[FraudSignal]:
    """An MRZ that matches no known layout is a baseline risk."""
    if result.document_type != DocumentType.UNKNOWN:
        return []
    return [
        FraudSignal(
            code="UNRECOGNIZED_FORMAT",
            reason="Unrecognized MRZ format: not 2 lines of 36 or 44 characters.",
            weight=policy.unknown_format,
        )
    ]


def check_disallowed_characters(
    raw: str, result: ValidationResult, policy: FraudPolicy
) -> list[FraudSignal]:
    """The MRZ alphabet is A-Z, 0-9 and '<'. Anything else is suspect.

    Newlines, carriage returns and plain spaces are ignored as OCR layout.
    Any other whitespace, such as a tab or a non-breaking space, is flagged.
    """
    found = sorted(set(_DISALLOWED_CHARS.findall(raw.upper())))
    if not found:
        return []
    return [
        FraudSignal(
            code="DISALLOWED_CHARACTERS",
            reason=(
                "Disallowed characters in MRZ (allowed: A-Z, 0-9, '<'): "
                f"{' '.join(repr(c) for c in found)}."
            ),
            weight=policy.disallowed_characters,
        )
    ]


def check_checksum_mismatches(
    raw: str, result: ValidationResult, policy: FraudPolicy
) -> list[FraudSignal]:
    """Each failed check digit is a stronger signal than a bad format."""
    signals: list[FraudSignal] = []
    for name, checksum in result.checksums.items():
        if checksum.match:
            continue
        label = _CHECKSUM_LABELS.get(name, name)
        signals.append(
            FraudSignal(
                code="CHECKSUM_MISMATCH",
                reason=(
                    f"Invalid {label} checksum (expected {checksum.expected}, "
                    f"computed {checksum.computed})."
                ),
                weight=policy.checksum_weight(name),
            )
        )
    return signals


def check_implausible_dates(
    raw: str, result: ValidationResult, policy: FraudPolicy
) -> list[FraudSignal]:
    """Six digits that do not form a calendar date (e.g. month 13)."""
    signals: list[FraudSignal] = []
    fields = result.extracted_data
    for label, raw_value, parsed in (
        ("birth date", fields.birth_date, fields.birth_date_iso),
        ("expiry date", fields.expiry_date, fields.expiry_date_iso),
    ):
        if _YYMMDD.fullmatch(raw_value) and parsed is None:
            signals.append(
                FraudSignal(
                    code="IMPLAUSIBLE_DATE",
                    reason=f"Implausible {label} {raw_value!r}: not a calendar date.",
                    weight=policy.implausible_date,
                )
            )
    return signals


def check_validity_span(
    raw: str, result: ValidationResult, policy: FraudPolicy
) -> list[FraudSignal]:
    """Expiry should fall between 15 and 100 years after birth."""
    birth = result.extracted_data.birth_date_iso
    expiry = result.extracted_data.expiry_date_iso
    if birth is None or expiry is None:
        return []

    span_years = (expiry - birth).days / 365.25
    if policy.min_validity_span_years <= span_years <= policy.max_validity_span_years:
        return []

    bound = "short" if span_years < policy.min_validity_span_years else "long"
    return [
        FraudSignal(
            code="IMPLAUSIBLE_VALIDITY_SPAN",
            reason=(
                f"Gap between birth ({birth.isoformat()}) and expiry "
                f"({expiry.isoformat()}) is implausibly {bound}: "
                f"{span_years:.1f} years."
            ),
            weight=policy.validity_span,
        )
    ]


def check_filler_fields(
    raw: str, result: ValidationResult, policy: FraudPolicy
) -> list[FraudSignal]:
    """A document number or surname made only of '<' filler."""
    if result.document_type == DocumentType.UNKNOWN:
        return []

    signals: list[FraudSignal] = []
    fields = result.extracted_data
    for label, value in (
        ("document number", fields.document_number),
        ("surname", fields.last_name),
    ):
        if value.replace(FILLER, "").strip() == "":
            signals.append(
                FraudSignal(
                    code="FILLER_ONLY_FIELD",
                    reason=f"The {label} field contains only filler characters.",
                    weight=policy.filler_field,
                )
            )
    return signals


def check_document_number_format(
    raw: str, result: ValidationResult, policy: FraudPolicy
) -> list[FraudSignal]:
    """French ID cards carry a 12-character alphanumeric document number."""
    fields = result.extracted_data
    if result.document_type != DocumentType.ID or fields.issuing_country != "FRA":
        return []
    if not fields.document_number or _ALNUM_12.fullmatch(fields.document_number):
        return []
    return [
        FraudSignal(
            code="DOCUMENT_NUMBER_FORMAT",
            reason=(
                f"French ID card number {fields.document_number!r} is not "
                f"12 alphanumeric characters."
            ),
            weight=policy.document_number_format,
        )
    ]


FRAUD_RULES: tuple[FraudRule, ...] = (
    check_unknown_format,
    check_disallowed_characters,
    check_checksum_mismatches,
    check_implausible_dates,
    check_validity_span,
    check_filler_fields,
    check_document_number_format,
)
