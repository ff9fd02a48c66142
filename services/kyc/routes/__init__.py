"""
KYC Service Routes
==================

API route handlers for the KYC service.
"""

from services.kyc.routes import admin, verification


__all__ = ["admin", "verification"]
