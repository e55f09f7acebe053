"""Configuration loading for httpx-restdocs.

This module provides centralized configuration management:
- Load settings from RESTDOCS_* environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Documentation configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_prefix="RESTDOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Snippet output
    output_directory: str = Field(
        default="build/generated-snippets",
        description="Directory snippets are written to, relative to the working directory",
    )
    template_format: Literal["asciidoctor", "markdown"] = Field(
        default="asciidoctor",
        description="Markup snippets are rendered in",
    )
    snippet_encoding: str = Field(
        default="utf-8",
        description="Text encoding of written snippet files",
    )

    # Documented URIs
    uri_scheme: str | None = Field(
        default=None,
        description="Scheme shown in documented URIs instead of the real one",
    )
    uri_host: str | None = Field(
        default=None,
        description="Host shown in documented URIs instead of the real one",
    )
    uri_port: int | None = Field(
        default=None,
        description="Port shown in documented URIs instead of the real one",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level of the restdocs loggers",
    )

    @field_validator("output_directory")
    @classmethod
    def validate_output_directory(cls, v: str) -> str:
        """Ensure the output directory is not empty."""
        if not v or not v.strip():
            raise ValueError("output_directory must not be empty")
        return v

    @field_validator("uri_port")
    @classmethod
    def validate_uri_port(cls, v: int | None) -> int | None:
        """Ensure the documented port is in valid range."""
        if v is not None and (v <= 0 or v > 65535):
            raise ValueError("uri_port must be between 1 and 65535")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v


def load_settings(env_file: str | None = None) -> Settings:
    """Load documentation settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
