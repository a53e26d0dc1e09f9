"""Application settings and configuration.

This module defines all configuration options for the Dossier Hub service.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Dossier Hub", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Document store configuration
    store_backend: Literal["json", "sql"] = Field(default="json", alias="STORE_BACKEND")
    data_dir: str = Field(default="./data", alias="DATA_DIR")
    database_url: str = Field(default="sqlite:///./dossier_hub.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Agents seeded into an empty agents document at bootstrap
    default_agents: list[str] = Field(
        default=["Omar", "Achraf", "Assane Diop"],
        alias="DEFAULT_AGENTS",
    )
    default_agent_code: str = Field(default="12345678", alias="DEFAULT_AGENT_CODE")

    # Moderating agent; its edits on other agents' dossiers raise admin notifications
    admin_agent_name: str = Field(default="Assane Diop", alias="ADMIN_AGENT_NAME")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )


settings = Settings()
