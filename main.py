#!/usr/bin/env python3
"""
MRZ Validator — Entry Point
============================

Demonstrates validation and fraud scoring on a sample OCR-extracted MRZ.

Usage:
    python main.py                              # Built-in sample (tampered ID card)
    python main.py < mrz.txt                    # Validate an MRZ from stdin
    MRZ_FRAUD_THRESHOLD=50 python main.py       # Override the fraud threshold
"""

from __future__ import annotations

import logging
import sys

from dotenv import load_dotenv

from mrz_validator.config import FraudPolicy
from mrz_validator.fraud import detect_mrz_fraud
from mrz_validator.models import FraudAssessment, ValidationResult
from mrz_validator.validator import validate_mrz


# ─── The OCR Output — Tampered on Purpose ───────────────────────────
# Document-number check digit replaced by 'X', expiry check digit altered.

RAW_MRZ = """\
IDFRADUPONT<<JEAN<MARIE<<<<<<<<<<<<<
123456789012XFRA9001011M2512318<<<<<"""


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Pretty Printer Helpers ─────────────────────────────────────────


def _print_fields(result: ValidationResult) -> None:
    """Print extracted identity fields."""
    fields = result.extracted_data
    print(f"  Document:    {fields.document_code} / {fields.document_number}")
    print(f"  Country:     {fields.issuing_country}  (nationality {fields.nationality})")
    print(f"  Surname:     {_BOLD}{fields.last_name}{_RESET}")
    print(f"  Given names: {fields.first_name}")
    print(f"  Sex:         {fields.sex}")
    print(f"  Born:        {fields.birth_date} {_DIM}→{_RESET} {fields.birth_date_iso}")
    print(f"  Expires:     {fields.expiry_date} {_DIM}→{_RESET} {fields.expiry_date_iso}")
    if fields.optional_data:
        print(f"  Optional:    {fields.optional_data}")


def _print_checksums(result: ValidationResult) -> None:
    for name, checksum in result.checksums.items():
        color = _GREEN if checksum.match else _RED
        print(
            f"    {color}{name:<16}{_RESET} computed={checksum.computed} "
            f"expected={checksum.expected}"
        )


def _print_group(messages: list[str], color: str, label: str) -> None:
    if not messages:
        return
    print(f"\n  {color}{_BOLD}{label} ({len(messages)}){_RESET}")
    for message in messages:
        print(f"    {message}")


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_report(result: ValidationResult, fraud: FraudAssessment) -> int:
    """Pretty-print the validation result and fraud assessment.

    Returns:
        0 if the MRZ is valid and not suspicious, 1 otherwise.
    """
    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  MRZ VALIDATION REPORT{_RESET}")
    print(f"{'=' * _WIDTH}")
    print(f"  Type:        {result.document_type.value}")
    print(f"  Confidence:  {result.confidence:.0%}")
    print(f"{'─' * _WIDTH}")

    _print_fields(result)

    print(f"{'─' * _WIDTH}")
    print(f"  {_CYAN}CHECKSUMS{_RESET}")
    _print_checksums(result)

    _print_group(result.errors, _RED, "ERRORS")
    _print_group(result.warnings, _YELLOW, "WARNINGS")
    _print_group(fraud.reasons, _RED if fraud.suspicious_fraud else _YELLOW, "FRAUD SIGNALS")

    print(f"\n{'=' * _WIDTH}")
    print(f"  Risk score:  {fraud.risk_score}")
    accepted = result.valid and not fraud.suspicious_fraud
    if accepted:
        print(f"  {_GREEN}{_BOLD}MRZ PASSED ALL CHECKS{_RESET}")
    else:
        print(
            f"  {_RED}{_BOLD}MRZ REJECTED  --  {len(result.errors)} error(s), "
            f"suspicious={fraud.suspicious_fraud}{_RESET}"
        )
    print(f"{'=' * _WIDTH}\n")

    return 0 if accepted else 1


# ─── Main ────────────────────────────────────────────────────────────


def main():
    """Validate the sample MRZ (or one read from stdin) and print the report."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    raw = RAW_MRZ if sys.stdin.isatty() else sys.stdin.read()
    policy = FraudPolicy.from_env()

    result = validate_mrz(raw)
    fraud = detect_mrz_fraud(raw, policy)
    sys.exit(print_report(result, fraud))


if __name__ == "__main__":
    main()
