"""Application configuration using Pydantic Settings.

Configuration is loaded from environment variables. Point `ENV_FILE` at a
local env file to load settings from it during development.
"""

import os
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnvironment(str, Enum):
    """Application environment values."""

    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class Settings(BaseSettings):
    """
    Application settings with type validation.

    Every setting has a default, so the composer runs without any
    environment configured.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None, env_prefix="", extra="ignore"
    )

    # Application
    app_env: AppEnvironment = AppEnvironment.LOCAL
    app_name: str = "pdl-composer"
    app_log_level: str = "INFO"

    # Observability
    observability_enabled: bool = True
    observability_structured_logs: bool = True
    observability_request_id_header: str = "X-Request-ID"

    # Field catalog: JSON file replacing the built-in catalog when set
    field_catalog_file: str | None = None

    # Prefix for ids generated by the editor (e.g. "auto-1")
    id_prefix: str = "auto"

    # Snapshot limits enforced at the API boundary
    max_tree_depth: int = Field(default=10, ge=1)
    max_tree_nodes: int = Field(default=1000, ge=1)

    # CORS Configuration
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @field_validator("app_log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.strip().upper()

    @field_validator("id_prefix")
    @classmethod
    def validate_id_prefix(cls, v: str) -> str:
        """Reject blank id prefixes."""
        v = v.strip()
        if not v:
            raise ValueError("id_prefix cannot be blank")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
