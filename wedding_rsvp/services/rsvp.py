"""
Business logic for recording guest RSVPs in the ledger spreadsheet.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List
from zoneinfo import ZoneInfo

from wedding_rsvp.clients import GoogleSheetsClient
from wedding_rsvp.clients.google_sheets import SheetsRequestError
from wedding_rsvp.schemas import RSVPSubmission
from wedding_rsvp.services.google_tokens import GoogleTokenService
from wedding_rsvp.services.spreadsheet import SpreadsheetProvisioner

logger = logging.getLogger(__name__)


class SubmissionFailed(Exception):
    """Raised when the RSVP row could not be appended."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Failed to append RSVP row: {cause}")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RSVPSubmissionService:
    """Append one spreadsheet row per RSVP.

    The payload is trusted beyond the name presence check done by the schema;
    guest counts are written as received.
    """

    def __init__(
        self,
        *,
        token_service: GoogleTokenService,
        provisioner: SpreadsheetProvisioner,
        sheets_client: GoogleSheetsClient,
        timestamp_timezone: str = "UTC",
        timestamp_format: str = "%Y-%m-%d %H:%M:%S",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._tokens = token_service
        self._provisioner = provisioner
        self._sheets = sheets_client
        self._tz = ZoneInfo(timestamp_timezone)
        self._timestamp_format = timestamp_format
        self._clock = clock

    async def submit(self, submission: RSVPSubmission) -> None:
        """Record a submission.

        Raises ``NotConfigured`` before any remote call when no account is
        linked, lets ``SheetProvisioningFailed`` through unchanged and wraps
        append failures in ``SubmissionFailed``.
        """
        credentials = self._tokens.get_credentials()
        spreadsheet_id = await self._provisioner.ensure_spreadsheet(credentials)

        row = self._build_sheet_row(submission)
        try:
            updated_range = await self._sheets.append_row(
                credentials, spreadsheet_id=spreadsheet_id, row=row
            )
        except SheetsRequestError as exc:
            raise SubmissionFailed(exc) from exc

        logger.info("RSVP appended to %s (%s)", spreadsheet_id, updated_range or "range unknown")

    def _build_sheet_row(self, submission: RSVPSubmission) -> List[Any]:
        timestamp = self._clock().astimezone(self._tz).strftime(self._timestamp_format)
        return [
            timestamp,
            submission.name,
            "Yes" if submission.attending else "No",
            submission.guests,
            submission.diet or "",
            submission.message or "",
        ]


__all__ = ["RSVPSubmissionService", "SubmissionFailed"]
