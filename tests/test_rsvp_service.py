from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from wedding_rsvp.clients import SQLiteStore
from wedding_rsvp.clients.sqlite_store import GOOGLE_SHEET_ID_KEY
from wedding_rsvp.schemas import RSVPSubmission
from wedding_rsvp.services import (
    NotConfigured,
    RSVPSubmissionService,
    SheetProvisioningFailed,
    SpreadsheetProvisioner,
    SubmissionFailed,
)
from wedding_rsvp.services.spreadsheet import HEADER_ROW

from fakes import FakeSheetsClient

FIXED_NOW = datetime(2026, 6, 20, 15, 30, 5, tzinfo=timezone.utc)


class StubTokenService:
    def __init__(self, *, linked: bool = True) -> None:
        self.linked = linked

    def get_credentials(self):
        if not self.linked:
            raise NotConfigured("Google Sheets not configured by admin.")
        return object()


def _build_service(tmp_path, sheets, *, linked=True, **kwargs):
    store = SQLiteStore(str(tmp_path / "wedding.db"))
    provisioner = SpreadsheetProvisioner(
        store=store, sheets_client=sheets, title="Wedding RSVPs"
    )
    service = RSVPSubmissionService(
        token_service=StubTokenService(linked=linked),
        provisioner=provisioner,
        sheets_client=sheets,
        clock=lambda: FIXED_NOW,
        **kwargs,
    )
    return service, store


def _submission(**overrides) -> RSVPSubmission:
    payload = {
        "name": "Ana Pop",
        "attending": True,
        "guests": 2,
        "diet": "vegetarian",
        "message": "Felicitări!",
    }
    payload.update(overrides)
    return RSVPSubmission.model_validate(payload)


@pytest.mark.anyio
async def test_first_submission_provisions_sheet_and_appends_row(tmp_path) -> None:
    sheets = FakeSheetsClient()
    service, store = _build_service(tmp_path, sheets)

    await service.submit(_submission())

    assert sheets.created == ["sheet-1"]
    assert store.get(GOOGLE_SHEET_ID_KEY) == "sheet-1"
    assert sheets.rows["sheet-1"] == [
        HEADER_ROW,
        ["2026-06-20 15:30:05", "Ana Pop", "Yes", 2, "vegetarian", "Felicitări!"],
    ]


@pytest.mark.anyio
async def test_second_submission_reuses_cached_sheet(tmp_path) -> None:
    sheets = FakeSheetsClient()
    service, _ = _build_service(tmp_path, sheets)

    await service.submit(_submission())
    await service.submit(_submission(name="Ion Pop", attending=False, diet=None, message=None))

    assert sheets.created == ["sheet-1"]
    assert sheets.rows["sheet-1"][1:] == [
        ["2026-06-20 15:30:05", "Ana Pop", "Yes", 2, "vegetarian", "Felicitări!"],
        ["2026-06-20 15:30:05", "Ion Pop", "No", 2, "", ""],
    ]


@pytest.mark.anyio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Ana Pop", "attending": True},
        {"name": "Guest", "attending": False, "guests": 0, "message": "Sorry"},
    ],
)
async def test_unlinked_account_is_rejected_before_any_remote_call(
    tmp_path, payload
) -> None:
    sheets = FakeSheetsClient()
    service, store = _build_service(tmp_path, sheets, linked=False)

    with pytest.raises(NotConfigured):
        await service.submit(RSVPSubmission.model_validate(payload))

    assert sheets.created == []
    assert sheets.rows == {}
    assert store.get(GOOGLE_SHEET_ID_KEY) is None


@pytest.mark.anyio
async def test_append_failure_is_reported_as_submission_failure(tmp_path) -> None:
    sheets = FakeSheetsClient(fail_rows=True)
    service, _ = _build_service(tmp_path, sheets)

    with pytest.raises(SubmissionFailed) as excinfo:
        await service.submit(_submission())

    assert "append failed" in str(excinfo.value.cause)
    assert sheets.rows["sheet-1"] == [HEADER_ROW]


@pytest.mark.anyio
async def test_provisioning_failure_propagates_unchanged(tmp_path) -> None:
    sheets = FakeSheetsClient(fail_create=True)
    service, _ = _build_service(tmp_path, sheets)

    with pytest.raises(SheetProvisioningFailed) as excinfo:
        await service.submit(_submission())

    assert excinfo.value.stage == "create"


@pytest.mark.anyio
async def test_timestamp_uses_configured_timezone_and_format(tmp_path) -> None:
    sheets = FakeSheetsClient()
    service, _ = _build_service(
        tmp_path,
        sheets,
        timestamp_timezone="Europe/Bucharest",
        timestamp_format="%d.%m.%Y %H:%M",
    )

    await service.submit(_submission())

    assert sheets.rows["sheet-1"][1][0] == "20.06.2026 18:30"


def test_submission_defaults_and_form_aliases() -> None:
    submission = RSVPSubmission.model_validate(
        {
            "name": "  Ana Pop ",
            "attending": True,
            "otherGuests": "Mihai Pop",
            "childrenCount": "2",
            "needsAccommodation": True,
            "unexpected": "ignored",
        }
    )

    assert submission.name == "Ana Pop"
    assert submission.guests == 1
    assert submission.companions == "Mihai Pop"
    assert submission.children == 2
    assert submission.needs_accommodation is True
    assert submission.diet is None


def test_submission_requires_name() -> None:
    with pytest.raises(ValidationError):
        RSVPSubmission.model_validate({"name": "   ", "attending": True})
    with pytest.raises(ValidationError):
        RSVPSubmission.model_validate({"attending": True})
