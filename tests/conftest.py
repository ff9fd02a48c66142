"""
Test Configuration
==================

Pytest fixtures for KYC tests.
"""

import os
from collections.abc import AsyncGenerator, Callable
from typing import Any

# Set test environment before any settings are loaded
os.environ["ENVIRONMENT"] = "testing"
os.environ["PROVIDER_MODE"] = "mock"
os.environ["PROVIDER_MOCK_LATENCY_MIN_MS"] = "0"
os.environ["PROVIDER_MOCK_LATENCY_MAX_MS"] = "0"
os.environ["ATTESTATION_SECRET"] = "test-attestation-secret"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from kyc_common.attestation import HmacAttestationIssuer
from kyc_common.storage import InMemoryStore
from services.kyc.models import (
    DocumentKind,
    DocumentRef,
    PersonalData,
    Subject,
    VerificationRecord,
    VerificationRequest,
)
from services.kyc.orchestrator import (
    VerificationOrchestrator,
    reset_orchestrator,
    set_orchestrator,
)
from services.kyc.providers import MockVerificationProvider
from services.kyc.records import VerificationLedger
from services.kyc.registry import SubjectRegistry


TEST_SECRET = "test-attestation-secret"
FIXED_TIMESTAMP = 1_700_000_000_000
WALLET = "0xABC0000000000000000000000000000000000001"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def issuer() -> HmacAttestationIssuer:
    return HmacAttestationIssuer(secret=TEST_SECRET)


@pytest.fixture
def registry() -> SubjectRegistry:
    return SubjectRegistry(InMemoryStore[Subject](name="subjects"))


@pytest.fixture
def ledger() -> VerificationLedger:
    return VerificationLedger(InMemoryStore[VerificationRecord](name="verification_records"))


@pytest.fixture
def mock_provider() -> MockVerificationProvider:
    """Mock registry without simulated latency."""
    return MockVerificationProvider(latency_min_ms=0, latency_max_ms=0)


@pytest.fixture
def orchestrator(
    registry: SubjectRegistry,
    ledger: VerificationLedger,
    mock_provider: MockVerificationProvider,
    issuer: HmacAttestationIssuer,
) -> VerificationOrchestrator:
    return VerificationOrchestrator(
        registry=registry,
        ledger=ledger,
        provider=mock_provider,
        issuer=issuer,
        clock=lambda: FIXED_TIMESTAMP,
    )


@pytest.fixture
def personal_data() -> PersonalData:
    """Sample personal data; an even national ID is VALID for the mock registry."""
    return PersonalData(
        name="Juan",
        lastname="Perez",
        national_id="12345678",
        date_of_birth="1990-01-15",
        email="juan.perez@example.com",
        country="AR",
    )


@pytest.fixture
def make_request(personal_data: PersonalData) -> Callable[..., VerificationRequest]:
    """Factory for verification requests with a given identifier and national ID."""

    def _make(identifier: str = WALLET, national_id: str = "12345678") -> VerificationRequest:
        return VerificationRequest(
            identifier=identifier,
            personal_data=personal_data.model_copy(update={"national_id": national_id}),
            documents=[
                DocumentRef(kind=DocumentKind.SELFIE, filename="selfie.jpg", size_bytes=2048),
                DocumentRef(kind=DocumentKind.DOC_PHOTO, filename="dni.jpg", size_bytes=4096),
            ],
        )

    return _make


@pytest_asyncio.fixture
async def kyc_client(
    orchestrator: VerificationOrchestrator,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the KYC service, wired to a fresh orchestrator."""
    from services.kyc.main import app

    set_orchestrator(orchestrator)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    reset_orchestrator()


@pytest.fixture
def kyc_payload() -> dict[str, Any]:
    """Sample BASE KYC request body."""
    return {
        "wallet_address": WALLET,
        "name": "Juan",
        "lastname": "Perez",
        "dni": "12345678",
        "dob": "1990-01-15",
        "email": "juan.perez@example.com",
        "country": "AR",
        "selfie": {"filename": "selfie.jpg", "size_bytes": 2048, "content_type": "image/jpeg"},
        "doc_photo": {"filename": "dni.jpg", "size_bytes": 4096, "content_type": "image/jpeg"},
    }
