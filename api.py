"""
MRZ Validator — FastAPI Server
===============================

Thin HTTP wrapper around the MRZ validation engine.

Endpoints:
    POST /validate          Validate raw MRZ text
    POST /validate/file     Upload a text file containing the MRZ
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
    http://localhost:8000/redoc            # ReDoc (alternative)
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import asyncio
from datetime import date

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, UploadFile
from pydantic import BaseModel, Field

from mrz_validator import __version__
from mrz_validator.config import FraudPolicy
from mrz_validator.fraud import detect_mrz_fraud
from mrz_validator.models import FraudAssessment, ValidationResult
from mrz_validator.validator import validate_mrz

MAX_UPLOAD_BYTES = 65_536


# ─── Application Lifespan (load fraud policy) ───────────────────────

_policy: FraudPolicy | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load .env and build the fraud policy once on startup."""
    global _policy  # noqa: PLW0603
    load_dotenv()
    _policy = FraudPolicy.from_env()
    yield
    _policy = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="MRZ Validator API",
    description=(
        "ICAO 9303 validation for the Machine-Readable Zone of ID cards and "
        "passports: shape detection, field extraction, check-digit "
        "verification and heuristic fraud scoring."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class ValidateRequest(BaseModel):
    """Request body for the /validate endpoint."""

    raw_mrz: str = Field(
        ...,
        min_length=1,
        description="MRZ lines separated by newlines, as extracted by OCR.",
        json_schema_extra={
            "example": (
                "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<\n"
                "L898902C36UTO7408122F1204159ZE184226B<<<<<10"
            )
        },
    )


class ValidateResponse(BaseModel):
    """Validation result and fraud assessment for one MRZ."""

    validation: ValidationResult
    fraud: FraudAssessment


class HealthResponse(BaseModel):
    status: str
    version: str
    fraud_threshold: int


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_policy() -> FraudPolicy:
    if _policy is None:
        raise HTTPException(status_code=503, detail="Fraud policy not initialised")
    return _policy


def _assess(raw_mrz: str, policy: FraudPolicy) -> ValidateResponse:
    today = date.today()
    return ValidateResponse(
        validation=validate_mrz(raw_mrz, today),
        fraud=detect_mrz_fraud(raw_mrz, policy, today),
    )


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/validate",
    summary="Validate an MRZ from raw text",
    tags=["Validation"],
    responses={503: {"description": "Fraud policy not yet initialised"}},
)
def validate(request: ValidateRequest) -> ValidateResponse:
    """Run validation and fraud scoring on raw MRZ text.

    Returns:
    - **validation**: document type, extracted fields, per-field checksums,
      errors, warnings and confidence
    - **fraud**: risk score, reasons and the suspicious-fraud verdict
    """
    return _assess(request.raw_mrz, _get_policy())


@app.post(
    "/validate/file",
    summary="Validate an MRZ from an uploaded text file",
    tags=["Validation"],
    responses={
        413: {"description": "File too large (max 64 KiB)"},
        400: {"description": "File is not valid UTF-8 text"},
        422: {"description": "File is empty"},
        503: {"description": "Fraud policy not yet initialised"},
    },
)
async def validate_file(file: UploadFile) -> ValidateResponse:
    """Upload a `.txt` file containing the MRZ lines."""
    if file.size and file.size > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large (max 64 KiB)")

    content = await file.read()
    try:
        raw_mrz = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded text")

    if not raw_mrz.strip():
        raise HTTPException(status_code=422, detail="File is empty")

    policy = _get_policy()
    return await asyncio.to_thread(_assess, raw_mrz, policy)


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Fraud policy not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    policy = _get_policy()
    return HealthResponse(
        status="healthy",
        version=__version__,
        fraud_threshold=policy.threshold,
    )
