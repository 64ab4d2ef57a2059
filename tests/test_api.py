"""
FastAPI endpoint tests for the MRZ Validator API.

Uses httpx + FastAPI TestClient, no real server needed.
"""

from __future__ import annotations

import api
import pytest
from api import app
from fastapi.testclient import TestClient

from mrz_validator.config import FraudPolicy
from mrz_validator.fraud import detect_mrz_fraud
from mrz_validator.validator import validate_mrz

client = TestClient(app)


@pytest.fixture(scope="module", autouse=True)
def _load_policy() -> None:
    """Initialise the fraud policy once for all API tests (bypasses lifespan)."""
    api._policy = FraudPolicy()
    yield  # type: ignore[misc]
    api._policy = None


# ─── Sample MRZ (ICAO 9303 specimen passport) ───────────────────────

SPECIMEN = (
    "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<\n"
    "L898902C36UTO7408122F1204159ZE184226B<<<<<10"
)

TAMPERED_ID = (
    "IDFRADUPONT<<JEAN<MARIE<<<<<<<<<<<<<\n"
    "123456789012XFRA9001011M2512318<<<<<"
)


class TestHealthEndpoint:
    def test_health_returns_200(self) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200

    def test_health_response_shape(self) -> None:
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["fraud_threshold"] == 35


class TestValidateEndpoint:
    def test_specimen_passport(self) -> None:
        resp = client.post("/validate", json={"raw_mrz": SPECIMEN})
        assert resp.status_code == 200
        validation = resp.json()["validation"]
        assert validation["document_type"] == "PASSPORT"
        assert validation["extracted_data"]["last_name"] == "ERIKSSON"
        assert validation["checksums"]["composite"]["match"] is True

    def test_tampered_id_is_suspicious(self) -> None:
        data = client.post("/validate", json={"raw_mrz": TAMPERED_ID}).json()
        assert data["validation"]["valid"] is False
        assert data["validation"]["document_type"] == "ID"
        assert data["fraud"]["suspicious_fraud"] is True
        assert data["fraud"]["risk_score"] >= 70

    def test_garbage_is_still_200(self) -> None:
        resp = client.post("/validate", json={"raw_mrz": "INVALID_MRZ_FORMAT"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["validation"]["document_type"] == "UNKNOWN"
        assert data["fraud"]["risk_score"] > 0


class TestRequestValidation:
    def test_empty_body_returns_422(self) -> None:
        resp = client.post("/validate", json={})
        assert resp.status_code == 422

    def test_empty_text_returns_422(self) -> None:
        resp = client.post("/validate", json={"raw_mrz": ""})
        assert resp.status_code == 422


class TestFileUploadEndpoint:
    def test_upload_text_file(self) -> None:
        resp = client.post(
            "/validate/file",
            files={"file": ("mrz.txt", SPECIMEN.encode("utf-8"), "text/plain")},
        )
        assert resp.status_code == 200
        assert resp.json()["validation"]["document_type"] == "PASSPORT"

    def test_upload_empty_file(self) -> None:
        resp = client.post(
            "/validate/file",
            files={"file": ("mrz.txt", b"   \n", "text/plain")},
        )
        assert resp.status_code == 422

    def test_upload_binary_file(self) -> None:
        resp = client.post(
            "/validate/file",
            files={"file": ("mrz.bin", b"\xff\xfe\xfa", "application/octet-stream")},
        )
        assert resp.status_code == 400

    def test_upload_too_large(self) -> None:
        resp = client.post(
            "/validate/file",
            files={"file": ("mrz.txt", b"<" * (api.MAX_UPLOAD_BYTES + 1), "text/plain")},
        )
        assert resp.status_code == 413


class TestReferenceDate:
    def test_validation_and_fraud_share_one_date(self, monkeypatch) -> None:
        seen: list = []

        def recording_validate(raw, today=None):
            seen.append(today)
            return validate_mrz(raw, today)

        def recording_fraud(raw, policy=None, today=None):
            seen.append(today)
            return detect_mrz_fraud(raw, policy, today)

        monkeypatch.setattr(api, "validate_mrz", recording_validate)
        monkeypatch.setattr(api, "detect_mrz_fraud", recording_fraud)

        resp = client.post("/validate", json={"raw_mrz": SPECIMEN})
        assert resp.status_code == 200
        assert len(seen) == 2
        assert seen[0] is not None
        assert seen[0] == seen[1]
