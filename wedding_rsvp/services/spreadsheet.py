"""
Resolve or create the spreadsheet used as the RSVP ledger.

Resolution order: the configured ``GOOGLE_SHEET_ID``, then the id cached in
the config table, then a freshly created spreadsheet whose id is cached before
its header row is written.

Creation and header append are two independent calls. When the header append
fails the new id stays cached and is reused as-is afterwards, so the sheet can
end up without a header. Concurrent first calls are not serialized either and
may each create a spreadsheet; the last cache write wins.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from google.auth.credentials import Credentials

from wedding_rsvp.clients import GoogleSheetsClient, SQLiteStore
from wedding_rsvp.clients.google_sheets import SheetsRequestError
from wedding_rsvp.clients.sqlite_store import GOOGLE_SHEET_ID_KEY

logger = logging.getLogger(__name__)

HEADER_ROW = [
    "Timestamp",
    "Name",
    "Attending",
    "Guest Count",
    "Dietary Requirements",
    "Message",
]

STAGE_LOOKUP = "lookup"
STAGE_CREATE = "create"
STAGE_HEADER_APPEND = "header-append"


class SheetProvisioningFailed(Exception):
    """Raised when the ledger spreadsheet cannot be resolved or created."""

    def __init__(self, stage: str, message: str | None = None) -> None:
        self.stage = stage
        super().__init__(message or f"Spreadsheet provisioning failed at stage '{stage}'")


class SpreadsheetProvisioner:
    def __init__(
        self,
        *,
        store: SQLiteStore,
        sheets_client: GoogleSheetsClient,
        title: str,
        fixed_sheet_id: Optional[str] = None,
    ) -> None:
        self._store = store
        self._sheets = sheets_client
        self._title = title
        self._fixed_sheet_id = fixed_sheet_id

    async def ensure_spreadsheet(self, credentials: Credentials) -> str:
        """Return the ledger spreadsheet id, creating the sheet on first use."""
        if self._fixed_sheet_id:
            return self._fixed_sheet_id

        try:
            cached = self._store.get(GOOGLE_SHEET_ID_KEY)
        except sqlite3.Error as exc:
            raise SheetProvisioningFailed(STAGE_LOOKUP, str(exc)) from exc
        if cached:
            return cached

        try:
            spreadsheet_id = await self._sheets.create_spreadsheet(
                credentials, title=self._title
            )
            self._store.put(GOOGLE_SHEET_ID_KEY, spreadsheet_id)
        except (SheetsRequestError, sqlite3.Error) as exc:
            raise SheetProvisioningFailed(STAGE_CREATE, str(exc)) from exc
        logger.info("Created RSVP spreadsheet %s", spreadsheet_id)

        try:
            await self._sheets.append_row(
                credentials, spreadsheet_id=spreadsheet_id, row=list(HEADER_ROW)
            )
        except SheetsRequestError as exc:
            logger.warning(
                "Header append failed for spreadsheet %s; id stays cached", spreadsheet_id
            )
            raise SheetProvisioningFailed(STAGE_HEADER_APPEND, str(exc)) from exc

        return spreadsheet_id


__all__ = [
    "HEADER_ROW",
    "STAGE_CREATE",
    "STAGE_HEADER_APPEND",
    "STAGE_LOOKUP",
    "SheetProvisioningFailed",
    "SpreadsheetProvisioner",
]
