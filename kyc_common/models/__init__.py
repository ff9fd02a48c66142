"""
Shared Models
=============

Pydantic response envelopes shared across KYC services.
"""

from kyc_common.models.common import (
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
]
