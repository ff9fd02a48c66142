"""
Attestation Issuer
==================

Capability interface for minting and re-deriving attestation tokens,
plus the HMAC-SHA256 implementation used by default.

A token binds (subject identifier, fact, timestamp) under a process-wide
secret. Issuance is deterministic so a holder of the secret can validate a
token offline by re-deriving it.

Version: 0.1.0
"""

import hashlib
import hmac
import time
from abc import ABC, abstractmethod

from kyc_common.attestation.models import TOKEN_SEPARATOR, AttestationParts, parse_token
from kyc_common.config import settings
from kyc_common.logging import get_logger


logger = get_logger(__name__)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class AttestationIssuer(ABC):
    """
    Abstract base class for attestation issuers.

    Implementations must be deterministic given their inputs and secret,
    and must never raise from ``validate``.
    """

    @property
    @abstractmethod
    def prefix(self) -> str:
        """Fixed token prefix."""
        ...

    @abstractmethod
    def issue(self, subject_identifier: str, fact: str, timestamp: int) -> str:
        """
        Mint an attestation token.

        Args:
            subject_identifier: Canonical subject identifier
            fact: Proof-relevant fact (e.g. the verified national ID)
            timestamp: Generation time in epoch milliseconds

        Returns:
            Opaque token string
        """
        ...

    @abstractmethod
    def validate(self, token: str, subject_identifier: str, fact: str) -> bool:
        """Check that ``token`` was issued for this subject and fact."""
        ...


class HmacAttestationIssuer(AttestationIssuer):
    """
    Keyed one-way attestation over ``identifier:fact:timestamp``.

    Placeholder for a real zero-knowledge or signature construction. Token
    shape is ``<prefix>_<timestamp>_<hmac-sha256 hex>``.
    """

    def __init__(self, secret: str | bytes, prefix: str = "zkp") -> None:
        if not secret:
            raise ValueError("Attestation secret must not be empty")
        if not prefix or TOKEN_SEPARATOR in prefix:
            raise ValueError(f"Invalid attestation prefix: {prefix!r}")

        self._secret = secret.encode() if isinstance(secret, str) else secret
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def _digest(self, subject_identifier: str, fact: str, timestamp: int) -> str:
        message = f"{subject_identifier}:{fact}:{timestamp}".encode()
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()

    def issue(self, subject_identifier: str, fact: str, timestamp: int) -> str:
        if timestamp < 0:
            raise ValueError(f"Timestamp must be non-negative, got {timestamp}")

        parts = AttestationParts(
            prefix=self._prefix,
            timestamp=timestamp,
            digest=self._digest(subject_identifier, fact, timestamp),
        )

        logger.debug(
            "attestation_issued",
            identifier=subject_identifier,
            issued_at=timestamp,
        )
        return parts.to_token()

    def validate(self, token: str, subject_identifier: str, fact: str) -> bool:
        parts = parse_token(token)
        if parts is None or parts.prefix != self._prefix:
            return False

        expected = self._digest(subject_identifier, fact, parts.timestamp)
        return hmac.compare_digest(expected, parts.digest)


# Global issuer instance
_issuer: AttestationIssuer | None = None


def get_attestation_issuer() -> AttestationIssuer:
    """
    Get the configured attestation issuer.

    Returns:
        AttestationIssuer keyed with ``settings.attestation.secret``
    """
    global _issuer

    if _issuer is None:
        _issuer = HmacAttestationIssuer(
            secret=settings.attestation.secret.get_secret_value(),
            prefix=settings.attestation.prefix,
        )
        logger.info("attestation_issuer_initialized", prefix=_issuer.prefix)

    return _issuer


def set_attestation_issuer(issuer: AttestationIssuer) -> None:
    """Replace the process-wide issuer (e.g. with a real proof system)."""
    global _issuer
    _issuer = issuer


def reset_attestation_issuer() -> None:
    """Reset the issuer to be re-initialized from settings."""
    global _issuer
    _issuer = None
