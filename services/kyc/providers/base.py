"""
Verification Provider Interface
===============================

Capability interface for external identity verification authorities.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from typing import Any

from services.kyc.models import PersonalData, ProviderResponse


class VerificationProvider(ABC):
    """
    Abstract base class for verification providers.

    Implements the Strategy pattern for swappable authorities. The
    decision policy is the provider's own; callers only see one of the
    three outcomes or a VerificationUnavailableError.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        ...

    @abstractmethod
    async def verify(self, personal_data: PersonalData) -> ProviderResponse:
        """
        Check a subject's personal data against the authority.

        Args:
            personal_data: Fields to verify

        Returns:
            ProviderResponse carrying the outcome

        Raises:
            VerificationUnavailableError: If no outcome could be obtained
        """
        ...

    async def close(self) -> None:
        """Release provider resources."""
        return None

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        ...
