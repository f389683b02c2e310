"""
Factory functions providing settings, shared clients and services as FastAPI
dependencies. Tests replace them through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from wedding_rsvp.clients import GoogleOAuthClient, GoogleSheetsClient, SQLiteStore
from wedding_rsvp.core.config import AppSettings, get_settings
from wedding_rsvp.services import (
    GoogleTokenService,
    RSVPSubmissionService,
    SpreadsheetProvisioner,
    TokenCipherService,
)


@lru_cache()
def _settings() -> AppSettings:
    """Settings snapshot shared by every factory below."""
    return get_settings()


def get_app_settings() -> AppSettings:
    return _settings()


SettingsDependency = Depends(get_app_settings)


@lru_cache()
def get_sqlite_store() -> SQLiteStore:
    """Provide the process-wide config table."""
    return SQLiteStore(_settings().database_path)


@lru_cache()
def get_google_oauth_client() -> GoogleOAuthClient:
    """Create a singleton Google OAuth client."""
    settings = _settings()
    return GoogleOAuthClient(settings.google, settings.oauth)


@lru_cache()
def get_sheets_client() -> GoogleSheetsClient:
    """Provide Google Sheets client instance."""
    return GoogleSheetsClient(timeout_seconds=_settings().google.api_timeout_seconds)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService:
    """Provide symmetric encryption helper for token storage."""
    settings = _settings()
    secret = settings.security.token_encryption_secret or settings.google.client_secret
    return TokenCipherService(secret=secret)


@lru_cache()
def get_google_token_service() -> GoogleTokenService:
    """Provide helper for managing the stored Google OAuth tokens."""
    settings = _settings()
    return GoogleTokenService(
        store=get_sqlite_store(),
        oauth_client=get_google_oauth_client(),
        google_settings=settings.google,
        token_cipher=get_token_cipher_service(),
    )


@lru_cache()
def get_spreadsheet_provisioner() -> SpreadsheetProvisioner:
    """Provide the resolver for the RSVP ledger spreadsheet."""
    settings = _settings()
    return SpreadsheetProvisioner(
        store=get_sqlite_store(),
        sheets_client=get_sheets_client(),
        title=settings.google.sheet_title,
        fixed_sheet_id=settings.google.sheet_id,
    )


def get_rsvp_service() -> RSVPSubmissionService:
    """Build an RSVP submission service using configured clients."""
    settings = _settings()
    return RSVPSubmissionService(
        token_service=get_google_token_service(),
        provisioner=get_spreadsheet_provisioner(),
        sheets_client=get_sheets_client(),
        timestamp_timezone=settings.timestamp_timezone,
        timestamp_format=settings.timestamp_format,
    )


__all__ = [
    "SettingsDependency",
    "get_app_settings",
    "get_google_oauth_client",
    "get_google_token_service",
    "get_rsvp_service",
    "get_sheets_client",
    "get_spreadsheet_provisioner",
    "get_sqlite_store",
    "get_token_cipher_service",
]
