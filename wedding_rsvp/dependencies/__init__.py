"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    SettingsDependency,
    get_app_settings,
    get_google_oauth_client,
    get_google_token_service,
    get_rsvp_service,
    get_sheets_client,
    get_spreadsheet_provisioner,
    get_sqlite_store,
    get_token_cipher_service,
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
