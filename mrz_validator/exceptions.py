"""
Internal exception hierarchy for MRZ validation.

None of these escape the public API: validate_mrz() and detect_mrz_fraud()
catch them and turn them into result data. They exist so that the low-level
helpers can fail loudly and the orchestrator decides how to record it.
"""

from __future__ import annotations


class MRZValidationError(Exception):
    """Base exception for all MRZ validation failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class CheckDigitFormatError(MRZValidationError):
    """The character in a check-digit position is not a digit."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("CHECK_DIGIT_INVALID", message, details)


class UnsupportedFormatError(MRZValidationError):
    """No field layout exists for the requested document type."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("UNSUPPORTED_FORMAT", message, details)
