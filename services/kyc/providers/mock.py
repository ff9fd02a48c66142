"""
Mock Verification Provider
==========================

Deterministic stand-in for the national registry (RENAPER), for
development and testing.

Rules on the national ID:
- plain ASCII digits forming an even number -> VALID
- otherwise, ending in "5" -> PENDING
- otherwise -> REJECTED

Version: 0.1.0
"""

import asyncio
import random
from datetime import UTC, datetime
from typing import Any

from kyc_common.attestation import now_ms
from kyc_common.logging import get_logger
from services.kyc.models import PersonalData, ProviderResponse, VerificationOutcome
from services.kyc.providers.base import VerificationProvider

logger = get_logger(__name__)


def decide_outcome(national_id: str) -> VerificationOutcome:
    """Placeholder decision policy of the mock registry."""
    digits = national_id.strip()
    # Only plain ASCII digit strings take the parity rule
    if digits.isascii() and digits.isdigit() and int(digits) % 2 == 0:
        return VerificationOutcome.VALID

    if digits.endswith("5"):
        return VerificationOutcome.PENDING
    return VerificationOutcome.REJECTED


class MockVerificationProvider(VerificationProvider):
    """In-process mock authority with simulated network latency."""

    def __init__(self, latency_min_ms: int = 200, latency_max_ms: int = 500) -> None:
        if latency_max_ms < latency_min_ms:
            raise ValueError("latency_max_ms must be >= latency_min_ms")

        self._latency_min_ms = latency_min_ms
        self._latency_max_ms = latency_max_ms
        self._calls = 0

    @property
    def name(self) -> str:
        return "mock"

    @property
    def calls(self) -> int:
        """Number of verifications performed."""
        return self._calls

    async def _simulate_network_delay(self) -> None:
        if self._latency_max_ms <= 0:
            return
        delay_ms = random.uniform(self._latency_min_ms, self._latency_max_ms)
        await asyncio.sleep(delay_ms / 1000)

    async def verify(self, personal_data: PersonalData) -> ProviderResponse:
        await self._simulate_network_delay()
        self._calls += 1

        outcome = decide_outcome(personal_data.national_id)
        reference = f"RENAPER-{now_ms()}"

        logger.info(
            "mock_verification_completed",
            outcome=outcome.value,
            reference=reference,
        )

        return ProviderResponse(
            outcome=outcome,
            reference=reference,
            match_score=0.98 if outcome == VerificationOutcome.VALID else 0.45,
            raw={
                "name": personal_data.name,
                "lastname": personal_data.lastname,
                "validated": outcome == VerificationOutcome.VALID,
                "timestamp": datetime.now(UTC).isoformat(),
            },
        )

    async def health_check(self) -> dict[str, Any]:
        return {
            "status": "healthy",
            "provider": self.name,
            "calls": self._calls,
        }
