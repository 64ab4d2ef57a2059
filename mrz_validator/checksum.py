"""
ICAO 9303 check-digit arithmetic.

    value(char):  '0'-'9' → 0-9,  'A'-'Z' → 10-35,  '<' → 0,  other → 0
    checksum:     sum(value(c) * [7, 3, 1][i % 3]) mod 10

Pure functions over module-level constants; nothing here holds state.
"""

from __future__ import annotations

import string

from .exceptions import CheckDigitFormatError

# ─── Constants ───────────────────────────────────────────────────────

FILLER = "<"

CHARACTER_VALUES: dict[str, int] = {
    **{digit: int(digit) for digit in string.digits},
    **{letter: 10 + i for i, letter in enumerate(string.ascii_uppercase)},
    FILLER: 0,
}

CHECK_DIGIT_WEIGHTS: tuple[int, ...] = (7, 3, 1)


# ─── Public API ──────────────────────────────────────────────────────


def character_value(char: str) -> int:
    """Numeric value of one MRZ character. Unknown characters count as 0."""
    return CHARACTER_VALUES.get(char.upper(), 0)


def compute_checksum(segment: str) -> int:
    """Compute the ICAO 9303 check digit of ``segment``.

    Never raises: characters outside the MRZ alphabet contribute nothing,
    and the empty string yields 0.

    Example:
        >>> compute_checksum("731")
        9
    """
    total = 0
    for i, char in enumerate(segment):
        total += character_value(char) * CHECK_DIGIT_WEIGHTS[i % len(CHECK_DIGIT_WEIGHTS)]
    return total % 10


def parse_check_digit(char: str) -> int:
    """Read an embedded check digit.

    Raises:
        CheckDigitFormatError: if ``char`` is not exactly one ASCII digit.
    """
    if len(char) != 1 or char not in string.digits:
        raise CheckDigitFormatError(
            f"Check digit must be a single digit, got {char!r}",
            details={"value": char},
        )
    return int(char)
