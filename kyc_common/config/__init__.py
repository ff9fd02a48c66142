"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from kyc_common.config import settings

    print(settings.environment)
    print(settings.provider.api_url)
"""

from kyc_common.config.settings import (
    AttestationSettings,
    Environment,
    LogLevel,
    ProviderMode,
    ProviderSettings,
    Settings,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
    "ProviderMode",
    "ProviderSettings",
    "AttestationSettings",
]
