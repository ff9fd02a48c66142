"""
Attestation Module
==================

Issue and validate attestation tokens for verified subjects.

Usage:
    from kyc_common.attestation import get_attestation_issuer, now_ms

    issuer = get_attestation_issuer()
    token = issuer.issue("0xabc...", "12345678", now_ms())

    assert issuer.validate(token, "0xabc...", "12345678")

Version: 0.1.0
"""

from kyc_common.attestation.issuer import (
    AttestationIssuer,
    HmacAttestationIssuer,
    get_attestation_issuer,
    now_ms,
    reset_attestation_issuer,
    set_attestation_issuer,
)
from kyc_common.attestation.models import AttestationParts, parse_token


__all__ = [
    # Issuers
    "AttestationIssuer",
    "HmacAttestationIssuer",
    "get_attestation_issuer",
    "set_attestation_issuer",
    "reset_attestation_issuer",
    "now_ms",
    # Models
    "AttestationParts",
    "parse_token",
]
