"""
Fixed-offset field layouts for each supported MRZ format.

Each FormatProfile says where every field sits and which check digits the
format carries. The ID and PASSPORT check sets are declared separately:
the simplified 2x36 ID profile has no composite check digit, the TD3
passport does.

    ID (2 x 36)
      line 1: [0:2] code  [2:5] country  [5:36] name
      line 2: [0:12] doc no  [12] chk  [13:16] nationality
              [16:22] birth  [22] chk  [23] sex  [24:30] expiry  [30] chk
              [31:36] optional

    PASSPORT (TD3, 2 x 44)
      line 1: [0:2] code  [2:5] country  [5:44] name
      line 2: [0:9] doc no  [9] chk  [10:13] nationality
              [13:19] birth  [19] chk  [20] sex  [21:27] expiry  [27] chk
              [28:42] personal no  [42] chk  [43] composite chk
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import UnsupportedFormatError
from .models import DocumentType


# ─── Data Structures ────────────────────────────────────────────────


@dataclass(frozen=True)
class CheckedField:
    """A run of line-2 data protected by a check digit."""

    name: str  # Key in ValidationResult.checksums
    label: str  # Used in error messages
    segments: tuple[slice, ...]  # Concatenated to form the checked data
    check_index: int  # Position of the embedded check digit on line 2
    mandatory: bool = True  # Mismatch makes the document invalid
    skip_if_filler: bool = False  # Not checked when the data is all '<'

    def data(self, line: str) -> str:
        return "".join(line[segment] for segment in self.segments)

    def check_char(self, line: str) -> str:
        return line[self.check_index:self.check_index + 1]


@dataclass(frozen=True)
class FormatProfile:
    """Where each field sits in a two-line MRZ of one document type."""

    document_type: DocumentType
    line_length: int
    document_codes: tuple[str, ...]  # Expected prefixes of line 1
    # line 1
    document_code: slice
    issuing_country: slice
    name: slice
    # line 2
    document_number: slice
    nationality: slice
    birth_date: slice
    sex: slice
    expiry_date: slice
    optional_data: slice
    checks: tuple[CheckedField, ...]


# ─── Profiles ───────────────────────────────────────────────────────

ID_PROFILE = FormatProfile(
    document_type=DocumentType.ID,
    line_length=36,
    document_codes=("ID", "I<", "AC", "IP"),
    document_code=slice(0, 2),
    issuing_country=slice(2, 5),
    name=slice(5, 36),
    document_number=slice(0, 12),
    nationality=slice(13, 16),
    birth_date=slice(16, 22),
    sex=slice(23, 24),
    expiry_date=slice(24, 30),
    optional_data=slice(31, 36),
    checks=(
        CheckedField("document_number", "document number", (slice(0, 12),), 12),
        CheckedField("birth_date", "birth date", (slice(16, 22),), 22),
        CheckedField("expiry_date", "expiry date", (slice(24, 30),), 30),
    ),
)

PASSPORT_PROFILE = FormatProfile(
    document_type=DocumentType.PASSPORT,
    line_length=44,
    document_codes=("P",),
    document_code=slice(0, 2),
    issuing_country=slice(2, 5),
    name=slice(5, 44),
    document_number=slice(0, 9),
    nationality=slice(10, 13),
    birth_date=slice(13, 19),
    sex=slice(20, 21),
    expiry_date=slice(21, 27),
    optional_data=slice(28, 42),
    checks=(
        CheckedField("document_number", "document number", (slice(0, 9),), 9),
        CheckedField("birth_date", "birth date", (slice(13, 19),), 19),
        CheckedField("expiry_date", "expiry date", (slice(21, 27),), 27),
        CheckedField(
            "personal_number",
            "personal number",
            (slice(28, 42),),
            42,
            mandatory=False,
            skip_if_filler=True,
        ),
        CheckedField(
            "composite",
            "composite",
            (slice(0, 10), slice(13, 20), slice(21, 43)),
            43,
        ),
    ),
)


def get_profile(document_type: DocumentType) -> FormatProfile:
    """Return the field layout for a classified document.

    Raises:
        UnsupportedFormatError: for DocumentType.UNKNOWN.
    """
    if document_type == DocumentType.ID:
        return ID_PROFILE
    if document_type == DocumentType.PASSPORT:
        return PASSPORT_PROFILE
    raise UnsupportedFormatError(
        f"No MRZ layout for document type {document_type.value}",
        details={"document_type": document_type.value},
    )
