"""
KYC Common Library
==================

Utilities, configuration, and abstractions shared by the KYC services.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - attestation: Attestation token issuance and validation
    - storage: Storage port and in-memory implementation
    - models: Shared Pydantic response models

Version: 0.1.0
"""

__version__ = "0.1.0"

from kyc_common.config import settings
from kyc_common.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
