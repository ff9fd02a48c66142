"""
Verification Providers
======================

External identity verification authorities.

Supports:
- Mock (development/testing, deterministic)
- Live (HTTP registry client)

Usage:
    from services.kyc.providers import get_verification_provider

    provider = get_verification_provider()
    response = await provider.verify(personal_data)
"""

from kyc_common.config import ProviderMode, settings
from kyc_common.logging import get_logger
from services.kyc.errors import VerificationUnavailableError
from services.kyc.providers.base import VerificationProvider
from services.kyc.providers.live import HttpVerificationProvider
from services.kyc.providers.mock import MockVerificationProvider, decide_outcome


logger = get_logger(__name__)

# Global provider instance
_provider: VerificationProvider | None = None


def get_verification_provider() -> VerificationProvider:
    """
    Get the configured verification provider.

    Returns:
        VerificationProvider selected by ``settings.provider.mode``
    """
    global _provider

    if _provider is None:
        config = settings.provider

        if config.mode == ProviderMode.MOCK:
            _provider = MockVerificationProvider(
                latency_min_ms=config.mock_latency_min_ms,
                latency_max_ms=config.mock_latency_max_ms,
            )
        elif config.mode == ProviderMode.LIVE:
            _provider = HttpVerificationProvider(
                base_url=config.api_url,
                api_key=config.api_key.get_secret_value(),
                timeout=config.timeout_seconds,
                max_retries=config.max_retries,
            )
        else:
            raise ValueError(f"Unknown provider mode: {config.mode}")

        logger.info(
            "verification_provider_initialized",
            mode=config.mode.value,
            provider=_provider.name,
        )

    return _provider


def set_verification_provider(provider: VerificationProvider) -> None:
    """Set a custom verification provider."""
    global _provider
    _provider = provider
    logger.info("verification_provider_set", provider=provider.name)


def reset_verification_provider() -> None:
    """Reset the provider to be re-initialized."""
    global _provider
    _provider = None


__all__ = [
    "VerificationProvider",
    "VerificationUnavailableError",
    "MockVerificationProvider",
    "HttpVerificationProvider",
    "decide_outcome",
    "get_verification_provider",
    "set_verification_provider",
    "reset_verification_provider",
]
