"""
Pydantic models for MRZ validation results.

Every result the engine hands back is one of these models. They are plain
data: built once per call, never shared, safe to serialize with
``model_dump()`` and send straight to the caller.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ─── Document Type ──────────────────────────────────────────────────


class DocumentType(str, Enum):
    """Shape of the MRZ, decided purely by line count and line length."""

    ID = "ID"  # 2 lines x 36 characters
    PASSPORT = "PASSPORT"  # 2 lines x 44 characters (TD3)
    UNKNOWN = "UNKNOWN"  # Anything else; never extracted or checksummed


# ─── Extracted Fields ───────────────────────────────────────────────


class ExtractedFields(BaseModel):
    """Identity fields sliced out of a classified MRZ.

    All string fields default to "" so that an empty instance stands in
    for "nothing could be extracted" (UNKNOWN input, truncated lines).
    """

    model_config = {"frozen": True}

    document_code: str = ""  # e.g. "ID", "P<"
    issuing_country: str = ""
    last_name: str = ""
    first_name: str = ""  # All given names, space separated
    given_names: tuple[str, ...] = ()
    document_number: str = ""
    nationality: str = ""
    birth_date: str = ""  # Raw YYMMDD
    birth_date_iso: Optional[date] = None
    sex: str = ""  # "M", "F" or "X" ("<" is reported as "X")
    expiry_date: str = ""  # Raw YYMMDD
    expiry_date_iso: Optional[date] = None
    optional_data: str = ""


# ─── Checksum Result ────────────────────────────────────────────────


class ChecksumResult(BaseModel):
    """Outcome of one check-digit comparison. A mismatch is data, not an error."""

    model_config = {"frozen": True}

    computed: int
    expected: Optional[int] = None  # None when the MRZ carries a non-digit
    match: bool


# ─── Validation Result ──────────────────────────────────────────────


class ValidationResult(BaseModel):
    """The final output of validate_mrz()."""

    valid: bool
    document_type: DocumentType
    extracted_data: ExtractedFields = Field(default_factory=ExtractedFields)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    checksums: dict[str, ChecksumResult] = Field(default_factory=dict)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


# ─── Fraud Assessment ───────────────────────────────────────────────


class FraudSignal(BaseModel):
    """A single fraud rule that fired, with its contribution to the score."""

    code: str  # Machine-readable, e.g. "CHECKSUM_MISMATCH"
    reason: str  # Human-readable explanation
    weight: int = Field(ge=0)


class FraudAssessment(BaseModel):
    """The final output of detect_mrz_fraud()."""

    suspicious_fraud: bool
    reasons: list[str] = Field(default_factory=list)
    risk_score: int = Field(default=0, ge=0)
    signals: list[FraudSignal] = Field(default_factory=list)
