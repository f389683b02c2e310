"""Google Sheets client wrapper for the RSVP ledger."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, TypeVar

import httplib2
from google.auth.credentials import Credentials
from google.auth.exceptions import GoogleAuthError
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

DEFAULT_RANGE = "Sheet1!A1"

T = TypeVar("T")


class SheetsRequestError(Exception):
    """Raised when a Sheets API call fails or times out."""


class GoogleSheetsClient:
    """Create spreadsheets and append rows on behalf of the site operator."""

    def __init__(self, *, timeout_seconds: float = 10.0) -> None:
        self._timeout = timeout_seconds

    def _service(self, credentials: Credentials) -> Any:
        http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=self._timeout))
        return build("sheets", "v4", http=http, cache_discovery=False)

    async def _run(self, func: Callable[[], T]) -> T:
        try:
            return await asyncio.to_thread(func)
        except (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as exc:
            raise SheetsRequestError(str(exc)) from exc

    async def create_spreadsheet(self, credentials: Credentials, *, title: str) -> str:
        """Create a spreadsheet and return its generated identifier."""

        def _execute_create() -> str:
            service = self._service(credentials)
            result = (
                service.spreadsheets()
                .create(
                    body={"properties": {"title": title}},
                    fields="spreadsheetId",
                )
                .execute()
            )
            spreadsheet_id = result.get("spreadsheetId")
            if not spreadsheet_id:
                raise SheetsRequestError("Sheets API returned no spreadsheetId.")
            return spreadsheet_id

        return await self._run(_execute_create)

    async def append_row(
        self,
        credentials: Credentials,
        *,
        spreadsheet_id: str,
        row: List[Any],
        sheet_range: str | None = None,
    ) -> str:
        """Append a new row to the spreadsheet and return the updated range."""

        def _execute_append() -> str:
            service = self._service(credentials)
            result = (
                service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=spreadsheet_id,
                    range=sheet_range or DEFAULT_RANGE,
                    valueInputOption="RAW",
                    body={"values": [row]},
                )
                .execute()
            )
            updates = result.get("updates", {})
            return updates.get("updatedRange") or result.get("tableRange") or ""

        return await self._run(_execute_append)


__all__ = ["DEFAULT_RANGE", "GoogleSheetsClient", "SheetsRequestError"]
