"""
KYC Service
===========

Wallet-keyed identity verification with attestation issuance.

This service provides:
- First-seen subject registration
- Verification against the national registry
- Attestation issuance for valid subjects
- Latest-status queries per wallet

Version: 0.1.0
"""

__version__ = "0.1.0"
