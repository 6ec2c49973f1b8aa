"""
Configuration management for shapematch.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables prefixed with SHAPEMATCH_,
e.g. SHAPEMATCH_TOP_N=20 or SHAPEMATCH_FEATURE_KEYS='["a","b","c"]'.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import (
    DEFAULT_FEATURE_KEYS,
    DEFAULT_MIN_COMMON_DIMS,
    DEFAULT_THROTTLE_MS,
    DEFAULT_TOP_N,
)


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Ranking parameters (top_n, min_common_dims, throttle_ms) are tunable here
    rather than hard-coded in the engine.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHAPEMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Application Metadata
    # ==========================================================================
    app_name: str = "shapematch"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", description="development, staging, production")
    log_level: str = Field(default="INFO", description="Root log level for entry points")

    # ==========================================================================
    # Dataset
    # ==========================================================================
    dataset_path: Optional[str] = Field(
        default=None,
        description="CSV file loaded at startup by the HTTP host",
    )
    dataset_encoding: str = "utf-8-sig"
    id_column: str = "id"
    name_column: str = "name"
    feature_keys: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FEATURE_KEYS),
        description="Ordered feature columns; their count is the vector dimension",
    )

    # ==========================================================================
    # Ranking
    # ==========================================================================
    top_n: int = Field(default=DEFAULT_TOP_N, ge=1, le=1000)
    min_common_dims: int = Field(default=DEFAULT_MIN_COMMON_DIMS, ge=1)
    throttle_ms: int = Field(
        default=DEFAULT_THROTTLE_MS,
        ge=0,
        description="Trailing-edge throttle interval for recomputes (milliseconds)",
    )

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_prefix: str = "/api/v1"
    cors_allow_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Allowed CORS origins. Set to ['*'] for development.",
    )
    cors_allow_methods: list[str] = ["GET", "PUT", "PATCH", "POST", "OPTIONS"]
    cors_allow_headers: list[str] = ["Accept", "Content-Type"]

    @field_validator("feature_keys")
    @classmethod
    def _check_feature_keys(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("feature_keys must name at least one column")
        if len(set(value)) != len(value):
            raise ValueError("feature_keys must be unique")
        return value

    @computed_field
    @property
    def dimensions(self) -> int:
        """Vector dimension K."""
        return len(self.feature_keys)

    @computed_field
    @property
    def throttle_seconds(self) -> float:
        """Throttle interval in seconds, as expected by event-loop timers."""
        return self.throttle_ms / 1000.0


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
