"""
OAuth session management for the operator's Google account.

Links the account, persists the Credential Record and rebuilds google-auth
credentials for Sheets calls.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from google.oauth2.credentials import Credentials

from wedding_rsvp.clients import GoogleOAuthClient, SQLiteStore
from wedding_rsvp.clients.sqlite_store import GOOGLE_TOKENS_KEY
from wedding_rsvp.core.config import GoogleSettings
from wedding_rsvp.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)


class NotConfigured(Exception):
    """Raised when no Credential Record has been stored yet."""


class GoogleTokenService:
    """Manages the single persisted Google OAuth Credential Record."""

    def __init__(
        self,
        store: SQLiteStore,
        oauth_client: GoogleOAuthClient,
        google_settings: GoogleSettings,
        token_cipher: TokenCipherService,
    ) -> None:
        self._store = store
        self._oauth = oauth_client
        self._google = google_settings
        self._cipher = token_cipher

    def build_authorization_url(self) -> str:
        return self._oauth.build_authorization_url()

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        """Trade an authorization code for tokens and store them.

        Any previously stored record is overwritten. Nothing is written when
        the exchange raises ``AuthExchangeFailed``.
        """
        token_payload = await self._oauth.exchange_authorization_code(code)

        record = dict(token_payload)
        expires_in = record.get("expires_in")
        if expires_in:
            expiry = datetime.now(timezone.utc) + timedelta(seconds=int(expires_in))
            record["expiry_date"] = expiry.isoformat()

        self._store.put(GOOGLE_TOKENS_KEY, self._cipher.seal_record(record))
        logger.info("Google account linked; credential record stored")
        return record

    def load_record(self) -> Optional[Dict[str, Any]]:
        blob = self._store.get(GOOGLE_TOKENS_KEY)
        if blob is None:
            return None
        return self._cipher.open_record(blob)

    def connection_status(self) -> bool:
        """Report whether a Credential Record is stored.

        Presence only: an expired access token still counts as connected.
        """
        return self._store.get(GOOGLE_TOKENS_KEY) is not None

    def get_credentials(self) -> Credentials:
        """Rebuild google-auth credentials from the stored record."""
        record = self.load_record()
        if not record:
            raise NotConfigured("Google Sheets not configured by admin.")

        expiry = None
        if record.get("expiry_date"):
            # google-auth compares expiry against a naive UTC timestamp.
            expiry = (
                datetime.fromisoformat(record["expiry_date"])
                .astimezone(timezone.utc)
                .replace(tzinfo=None)
            )

        scope = record.get("scope")
        scopes = scope.split() if scope else list(self._oauth.scopes)

        return Credentials(
            token=record.get("access_token"),
            refresh_token=record.get("refresh_token"),
            token_uri=GoogleOAuthClient.TOKEN_URL,
            client_id=self._google.client_id,
            client_secret=self._google.client_secret,
            scopes=scopes,
            expiry=expiry,
        )


__all__ = ["GoogleTokenService", "NotConfigured"]
