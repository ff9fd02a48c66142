"""
HTTP Verification Provider
==========================

Client for a live identity registry reachable over HTTP.

Every call is bounded by a timeout. Transport failures are retried with
exponential backoff; once retries are exhausted, or when the registry
answers with an error or an unrecognised status, the call surfaces as
VerificationUnavailableError. It never degrades to REJECTED.

Version: 0.1.0
"""

from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from kyc_common.logging import get_logger
from services.kyc.errors import VerificationUnavailableError
from services.kyc.models import PersonalData, ProviderResponse, VerificationOutcome
from services.kyc.providers.base import VerificationProvider


logger = get_logger(__name__)

STATUS_MAP: dict[str, VerificationOutcome] = {
    "VALID": VerificationOutcome.VALID,
    "APPROVED": VerificationOutcome.VALID,
    "KYC_VALID": VerificationOutcome.VALID,
    "REJECTED": VerificationOutcome.REJECTED,
    "DENIED": VerificationOutcome.REJECTED,
    "KYC_REJECTED": VerificationOutcome.REJECTED,
    "PENDING": VerificationOutcome.PENDING,
    "IN_REVIEW": VerificationOutcome.PENDING,
    "KYC_PENDING": VerificationOutcome.PENDING,
}


class HttpVerificationProvider(VerificationProvider):
    """
    Live registry client.

    Usage:
        provider = HttpVerificationProvider(
            base_url="https://api.renaper.gob.ar/v1",
            api_key="...",
        )
        response = await provider.verify(personal_data)
        await provider.close()
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 10.0,
        max_retries: int = 3,
        wait: wait_base | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            base_url: Registry base URL
            api_key: Bearer credential for the registry
            timeout: Per-request timeout in seconds
            max_retries: Attempts for transport failures
            wait: Backoff strategy between attempts
            transport: Optional httpx transport (tests)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._wait = wait or wait_exponential(multiplier=0.5, min=0.5, max=5)

        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

        logger.debug(
            "http_provider_initialized",
            base_url=self._base_url,
            timeout=timeout,
        )

    @property
    def name(self) -> str:
        return "http"

    async def _post_validate(self, payload: dict[str, Any]) -> httpx.Response:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(self._max_retries),
            wait=self._wait,
            reraise=True,
            before_sleep=lambda retry_state: logger.warning(
                "http_provider_retry",
                attempt=retry_state.attempt_number,
            ),
        )
        return await retrying(self._client.post, "/validate", json=payload)

    def _map_response(self, body: Any) -> ProviderResponse:
        if not isinstance(body, dict):
            raise VerificationUnavailableError(self.name, "malformed response body")

        raw_status = str(body.get("status", "")).upper()
        outcome = STATUS_MAP.get(raw_status)
        if outcome is None:
            raise VerificationUnavailableError(
                self.name, f"unrecognised status {raw_status or '<missing>'}"
            )

        match_score = body.get("matchScore")
        if not isinstance(match_score, int | float) or not 0 <= match_score <= 1:
            match_score = None

        try:
            return ProviderResponse(
                outcome=outcome,
                reference=body.get("reference") or body.get("renaperReference"),
                match_score=match_score,
                raw=body,
            )
        except ValidationError as e:
            raise VerificationUnavailableError(self.name, "malformed response") from e

    async def verify(self, personal_data: PersonalData) -> ProviderResponse:
        payload = {
            "dni": personal_data.national_id,
            "name": personal_data.name,
            "lastname": personal_data.lastname,
            "dob": personal_data.date_of_birth,
        }

        try:
            response = await self._post_validate(payload)
        except httpx.TimeoutException as e:
            logger.error("http_provider_timeout", timeout=self._timeout)
            raise VerificationUnavailableError(self.name, "timeout") from e
        except httpx.TransportError as e:
            logger.error("http_provider_transport_error", error=str(e))
            raise VerificationUnavailableError(self.name, f"transport error: {e!s}") from e

        if response.is_error:
            logger.error("http_provider_error_status", status_code=response.status_code)
            raise VerificationUnavailableError(
                self.name, f"registry answered HTTP {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise VerificationUnavailableError(self.name, "response is not JSON") from e

        result = self._map_response(body)
        logger.info(
            "http_verification_completed",
            outcome=result.outcome.value,
            reference=result.reference,
        )
        return result

    async def close(self) -> None:
        await self._client.aclose()

    async def health_check(self) -> dict[str, Any]:
        return {
            "status": "healthy" if not self._client.is_closed else "unhealthy",
            "provider": self.name,
            "base_url": self._base_url,
        }
