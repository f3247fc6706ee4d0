"""Configuration for the REST server.

Loaded from environment variables and a local ``.env`` file (if present).
There is no storage configuration: all workflow state is in memory and is
discarded when the process exits.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Settings for the workflow REST API.

    Environment variables:
    - LOG_LEVEL              (optional)
    - WORKFLOW_HOST          (optional)
    - WORKFLOW_PORT          (optional)
    - WORKFLOW_CORS_ORIGINS  (optional)
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    host: str = Field(default="127.0.0.1", validation_alias="WORKFLOW_HOST")
    port: int = Field(default=8000, validation_alias="WORKFLOW_PORT", ge=1, le=65535)

    # Empty disables CORS entirely.
    cors_origins: str = Field(
        default="",
        validation_alias="WORKFLOW_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
