"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ProviderMode(str, Enum):
    """External verification provider mode."""

    MOCK = "mock"
    LIVE = "live"


class AttestationSettings(BaseSettings):
    """Attestation signing configuration."""

    model_config = SettingsConfigDict(env_prefix="ATTESTATION_")

    secret: SecretStr = Field(
        default=SecretStr("default-zk-secret"),
        validation_alias=AliasChoices("ATTESTATION_SECRET", "ZK_PROOF_SECRET"),
    )
    prefix: str = "zkp"

    @field_validator("prefix")
    @classmethod
    def prefix_has_no_separator(cls, v: str) -> str:
        """Token fields are underscore separated."""
        if not v or "_" in v:
            raise ValueError("Attestation prefix must be non-empty and contain no '_'")
        return v


class ProviderSettings(BaseSettings):
    """External verification authority configuration."""

    model_config = SettingsConfigDict(env_prefix="PROVIDER_")

    mode: ProviderMode = ProviderMode.MOCK
    api_url: str = Field(
        default="https://api.renaper.gob.ar/v1",
        validation_alias=AliasChoices("PROVIDER_API_URL", "RENAPER_API_URL"),
    )
    api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("PROVIDER_API_KEY", "RENAPER_API_KEY"),
    )
    timeout_seconds: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=3, ge=1)

    # Simulated latency of the mock authority
    mock_latency_min_ms: int = Field(default=200, ge=0)
    mock_latency_max_ms: int = Field(default=500, ge=0)

    @model_validator(mode="after")
    def latency_bounds_ordered(self) -> "ProviderSettings":
        if self.mock_latency_max_ms < self.mock_latency_min_ms:
            raise ValueError("mock_latency_max_ms must be >= mock_latency_min_ms")
        return self


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [o.strip() for o in self.origins.split(",") if o.strip()]


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO
    port: int = Field(default=3000, validation_alias=AliasChoices("KYC_PORT", "PORT"))

    # Attestation issuer
    attestation: AttestationSettings = Field(default_factory=AttestationSettings)

    # External verification authority
    provider: ProviderSettings = Field(default_factory=ProviderSettings)

    # Security
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
