#!/usr/bin/env python3
"""Application configuration using Pydantic settings."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ONE_WEEK_NS = 7 * 24 * 60 * 60 * 1_000_000_000


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra='ignore'
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./dao_governance.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # API Server
    api_v1_prefix: str = "/api/v1"
    service_port: int = Field(default=8000, validation_alias='HTTP_PORT')
    debug: bool = False

    # App Info
    app_name: str = "DAO Governance"
    app_description: str = "Organizations, proposals, votes and comments"
    docs_url: str = "/docs"

    # Identity
    principal_header: str = "X-Principal"
    allow_anonymous: bool = True
    anonymous_principal: str = "2vxsx-fae"

    # Governance
    voting_window_ns: int = ONE_WEEK_NS  # deadline = created_at + window

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(',') if origin.strip()]


# Global settings instance
settings = Settings()
