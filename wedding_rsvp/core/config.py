"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app, its dependency factories
and the maintenance scripts share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Optional

import os

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class GoogleSettings(BaseSettings):
    """Configuration required for interacting with Google APIs."""

    model_config = SettingsConfigDict(extra="ignore")

    client_id: str = Field(..., validation_alias="GOOGLE_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="GOOGLE_CLIENT_SECRET")
    app_url: str = Field("http://localhost:3000", validation_alias="APP_URL")
    redirect_uri: Optional[str] = Field(
        None,
        validation_alias="GOOGLE_REDIRECT_URI",
        description="Defaults to the callback route under APP_URL.",
    )
    sheet_id: Optional[str] = Field(
        None,
        validation_alias="GOOGLE_SHEET_ID",
        description="Pre-provisioned spreadsheet; disables lookup and creation.",
    )
    sheet_title: str = Field(
        "Wedding RSVPs - Maria & Andrei", validation_alias="SHEET_TITLE"
    )
    api_timeout_seconds: float = Field(
        10.0, validation_alias="GOOGLE_API_TIMEOUT_SECONDS"
    )

    @model_validator(mode="after")
    def _default_redirect_uri(self) -> "GoogleSettings":
        if not self.redirect_uri:
            self.redirect_uri = f"{self.app_url.rstrip('/')}/auth/google/callback"
        if not self.sheet_id:
            self.sheet_id = None
        return self


class SecuritySettings(BaseSettings):
    """Security-related configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the symmetric key for encrypting stored tokens."
        ),
    )


class OAuthSettings(BaseSettings):
    """OAuth flow configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    scopes: Annotated[tuple[str, ...], NoDecode] = Field(
        (
            "https://www.googleapis.com/auth/spreadsheets",
            "https://www.googleapis.com/auth/drive.file",
        ),
        validation_alias="OAUTH_SCOPES",
    )

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        """Support providing scopes as a comma-separated string."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(value)
        return tuple(scope.strip() for scope in value.split(",") if scope.strip())


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    database_path: str = Field("wedding.db", validation_alias="DATABASE_PATH")
    static_dir: Optional[str] = Field(
        "dist",
        validation_alias="STATIC_DIR",
        description="Prebuilt frontend bundle served at the site root when present.",
    )
    timestamp_timezone: str = Field("UTC", validation_alias="TIMESTAMP_TIMEZONE")
    timestamp_format: str = Field(
        "%Y-%m-%d %H:%M:%S", validation_alias="TIMESTAMP_FORMAT"
    )
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)
    google: GoogleSettings = Field(default_factory=GoogleSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "GoogleSettings",
    "OAuthSettings",
    "SecuritySettings",
    "get_settings",
]
