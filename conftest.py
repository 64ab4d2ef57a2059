"""Pytest configuration: ensures the project root is importable and shares MRZ samples."""

import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


# ICAO 9303 specimen passport, every check digit is correct.
SPECIMEN_PASSPORT = (
    "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<\n"
    "L898902C36UTO7408122F1204159ZE184226B<<<<<10"
)

# 2 x 36 ID card with correct document-number, birth and expiry check digits.
VALID_ID = (
    "IDFRADUPONT<<JEAN<MARIE<<<<<<<<<<<<<\n"
    "1234567890122FRA9001011M2012319<<<<<"
)


@pytest.fixture
def specimen_passport() -> str:
    return SPECIMEN_PASSPORT


@pytest.fixture
def valid_id() -> str:
    return VALID_ID


@pytest.fixture
def today() -> date:
    """Fixed reference date so expiry checks do not drift with the calendar."""
    return date(2010, 6, 1)
