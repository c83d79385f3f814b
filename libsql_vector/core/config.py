"""
Library Configuration
Pydantic Settings for environment-based configuration
"""

from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings from environment variables (prefix LIBSQL_VECTOR_)
    """

    model_config = SettingsConfigDict(
        env_prefix="LIBSQL_VECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database (libSQL / SQLite)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./vectors.db",
        description="SQLAlchemy async URL of a libSQL-compatible database",
    )
    database_echo: bool = False  # SQLAlchemy logging

    # Index defaults
    default_table_name: str = "vector_index"
    default_list_limit: int = Field(default=10, ge=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False  # Structured JSON logging


# Global settings instance
settings = Settings()
