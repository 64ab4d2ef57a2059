"""
Fraud scoring policy.

The engine never reads the environment on its own; callers pass a
FraudPolicy (or get DEFAULT_POLICY). Entry points that want environment
overrides call FraudPolicy.from_env() after loading their .env file.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

# Weight of each checksum mismatch by field. A mismatch always outweighs
# an unrecognized format on its own.
DEFAULT_CHECKSUM_WEIGHTS: dict[str, int] = {
    "document_number": 40,
    "birth_date": 30,
    "expiry_date": 30,
    "composite": 30,
    "personal_number": 25,
}


class FraudPolicy(BaseModel):
    """Threshold, cap and per-rule weights used by detect_mrz_fraud()."""

    threshold: int = Field(default=35, ge=0)  # suspicious when score > threshold
    max_score: int = Field(default=100, ge=0)

    unknown_format: int = 20
    disallowed_characters: int = 25
    checksum_weights: dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_CHECKSUM_WEIGHTS)
    )
    default_checksum_weight: int = 30
    implausible_date: int = 15
    validity_span: int = 20
    filler_field: int = 15
    document_number_format: int = 15

    # Expected years between birth and expiry
    min_validity_span_years: int = 15
    max_validity_span_years: int = 100

    def checksum_weight(self, field_name: str) -> int:
        return self.checksum_weights.get(field_name, self.default_checksum_weight)

    @classmethod
    def from_env(cls) -> FraudPolicy:
        """Build a policy, overriding the threshold and cap from the environment.

        Reads MRZ_FRAUD_THRESHOLD and MRZ_FRAUD_MAX_SCORE when set.
        """
        overrides: dict[str, int] = {}
        threshold = os.environ.get("MRZ_FRAUD_THRESHOLD")
        if threshold:
            overrides["threshold"] = int(threshold)
        max_score = os.environ.get("MRZ_FRAUD_MAX_SCORE")
        if max_score:
            overrides["max_score"] = int(max_score)
        return cls(**overrides)


DEFAULT_POLICY = FraudPolicy()
