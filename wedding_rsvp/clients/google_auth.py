"""
Google OAuth utilities.

These helpers build the consent URL for the site operator and trade the
returned authorization code for a token bundle.
"""

from __future__ import annotations

import logging
from typing import Any, Dict
from urllib.parse import urlencode

import httpx

from fastapi import status

from wedding_rsvp.core.config import GoogleSettings, OAuthSettings

logger = logging.getLogger(__name__)


class AuthExchangeFailed(Exception):
    """Raised when an authorization code cannot be traded for tokens."""


class GoogleOAuthClient:
    """Build Google authorization URLs and exchange authorization codes."""

    AUTH_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(self, google_settings: GoogleSettings, oauth_settings: OAuthSettings) -> None:
        self._google = google_settings
        self._oauth = oauth_settings

    @property
    def scopes(self) -> tuple[str, ...]:
        return self._oauth.scopes

    def build_authorization_url(self) -> str:
        """Construct the Google OAuth consent URL.

        Consent is always forced so Google hands out a new refresh token each
        time the operator links the account.
        """
        params = {
            "client_id": self._google.client_id,
            "redirect_uri": str(self._google.redirect_uri),
            "response_type": "code",
            "scope": " ".join(self._oauth.scopes),
            "access_type": "offline",
            "prompt": "consent",
        }
        return f"{self.AUTH_BASE_URL}?{urlencode(params)}"

    async def exchange_authorization_code(self, code: str) -> Dict[str, Any]:
        """
        Exchange an authorization code for the raw token payload.

        The payload is returned as Google sent it (access_token, refresh_token,
        expires_in, scope, token_type, ...).
        """
        payload = {
            "code": code,
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "redirect_uri": str(self._google.redirect_uri),
            "grant_type": "authorization_code",
        }

        try:
            async with httpx.AsyncClient(timeout=self._google.api_timeout_seconds) as client:
                response = await client.post(self.TOKEN_URL, data=payload)
        except httpx.HTTPError as exc:
            raise AuthExchangeFailed(f"Token endpoint unreachable: {exc}") from exc

        if response.status_code != status.HTTP_200_OK:
            raise AuthExchangeFailed(response.text)

        try:
            token_payload = response.json()
        except ValueError as exc:
            raise AuthExchangeFailed("Token endpoint returned a non-JSON body.") from exc
        if not isinstance(token_payload, dict) or not token_payload.get("access_token"):
            raise AuthExchangeFailed("Incomplete token payload returned from Google.")

        if not token_payload.get("refresh_token"):
            logger.warning("Google returned no refresh token; access will lapse on expiry")

        return token_payload


__all__ = ["AuthExchangeFailed", "GoogleOAuthClient"]
