"""Expose constructed client wrappers."""

from .google_auth import AuthExchangeFailed, GoogleOAuthClient
from .google_sheets import GoogleSheetsClient, SheetsRequestError
from .sqlite_store import SQLiteStore

__all__ = [
    "AuthExchangeFailed",
    "GoogleOAuthClient",
    "GoogleSheetsClient",
    "SQLiteStore",
    "SheetsRequestError",
]
