from __future__ import annotations

import httplib2
import pytest
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from wedding_rsvp.clients.google_sheets import (
    DEFAULT_RANGE,
    GoogleSheetsClient,
    SheetsRequestError,
)


class FakeRequest:
    def __init__(self, result=None, error: Exception | None = None) -> None:
        self._result = result
        self._error = error

    def execute(self):
        if self._error is not None:
            raise self._error
        return self._result


class FakeValues:
    def __init__(self, owner: "FakeService") -> None:
        self._owner = owner

    def append(self, **kwargs):
        self._owner.calls.append(("append", kwargs))
        return FakeRequest(self._owner.append_result, self._owner.error)


class FakeSpreadsheets:
    def __init__(self, owner: "FakeService") -> None:
        self._owner = owner

    def create(self, **kwargs):
        self._owner.calls.append(("create", kwargs))
        return FakeRequest(self._owner.create_result, self._owner.error)

    def values(self) -> FakeValues:
        return FakeValues(self._owner)


class FakeService:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.error = error
        self.create_result = {"spreadsheetId": "new-sheet"}
        self.append_result = {
            "tableRange": "Sheet1!A1:F1",
            "updates": {"updatedRange": "Sheet1!A2:F2"},
        }

    def spreadsheets(self) -> FakeSpreadsheets:
        return FakeSpreadsheets(self)


def _client_with(monkeypatch, service: FakeService) -> GoogleSheetsClient:
    client = GoogleSheetsClient(timeout_seconds=1.0)
    monkeypatch.setattr(client, "_service", lambda credentials: service)
    return client


@pytest.mark.anyio
async def test_create_spreadsheet_requests_only_the_id(monkeypatch) -> None:
    service = FakeService()
    client = _client_with(monkeypatch, service)

    spreadsheet_id = await client.create_spreadsheet(object(), title="Wedding RSVPs")

    assert spreadsheet_id == "new-sheet"
    assert service.calls == [
        (
            "create",
            {"body": {"properties": {"title": "Wedding RSVPs"}}, "fields": "spreadsheetId"},
        )
    ]


@pytest.mark.anyio
async def test_create_without_id_in_response_fails(monkeypatch) -> None:
    service = FakeService()
    service.create_result = {}
    client = _client_with(monkeypatch, service)

    with pytest.raises(SheetsRequestError):
        await client.create_spreadsheet(object(), title="Wedding RSVPs")


@pytest.mark.anyio
async def test_append_row_writes_raw_values_to_first_sheet(monkeypatch) -> None:
    service = FakeService()
    client = _client_with(monkeypatch, service)

    updated = await client.append_row(
        object(), spreadsheet_id="sheet-1", row=["ts", "Ana Pop", "Yes", 2, "", ""]
    )

    assert updated == "Sheet1!A2:F2"
    name, kwargs = service.calls[0]
    assert name == "append"
    assert kwargs == {
        "spreadsheetId": "sheet-1",
        "range": DEFAULT_RANGE,
        "valueInputOption": "RAW",
        "body": {"values": [["ts", "Ana Pop", "Yes", 2, "", ""]]},
    }


@pytest.mark.anyio
@pytest.mark.parametrize(
    "error",
    [
        HttpError(httplib2.Response({"status": 403}), b'{"error": {"code": 403, "message": "forbidden"}}'),
        RefreshError("invalid_grant: Token has been expired or revoked."),
        TimeoutError("timed out"),
        httplib2.ServerNotFoundError("sheets.googleapis.com"),
    ],
)
async def test_remote_errors_are_wrapped(monkeypatch, error) -> None:
    client = _client_with(monkeypatch, FakeService(error=error))

    with pytest.raises(SheetsRequestError) as excinfo:
        await client.append_row(object(), spreadsheet_id="sheet-1", row=["x"])

    assert excinfo.value.__cause__ is error
