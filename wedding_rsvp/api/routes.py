"""
FastAPI routes for the wedding RSVP backend.

``router`` is mounted under ``/api``; ``oauth_router`` carries the Google
redirect target, which lives outside that prefix.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from wedding_rsvp.clients import AuthExchangeFailed
from wedding_rsvp.core.config import AppSettings
from wedding_rsvp.dependencies import (
    SettingsDependency,
    get_google_token_service,
    get_rsvp_service,
)
from wedding_rsvp.schemas import (
    AuthStatusResponse,
    AuthUrlResponse,
    ErrorResponse,
    RSVPResponse,
    RSVPSubmission,
)
from wedding_rsvp.services import NotConfigured, SheetProvisioningFailed, SubmissionFailed

router = APIRouter()
oauth_router = APIRouter()
logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Google Sheets not configured by admin."
SAVE_FAILED_MESSAGE = "Failed to save RSVP"
AUTH_FAILED_MESSAGE = "Authentication failed"
STATUS_FAILED_MESSAGE = "Failed to read connection status"

# The opener (admin panel) listens for this message to flip its status badge.
_CALLBACK_SUCCESS_HTML = """
<html>
  <body style="font-family: sans-serif; display: flex; align-items: center; justify-content: center; height: 100vh; background: #f5f2ed;">
    <div style="text-align: center; padding: 2rem; background: white; border-radius: 1rem; box-shadow: 0 4px 6px rgba(0,0,0,0.1);">
      <h1 style="color: #1a1a1a;">Connection Successful!</h1>
      <p>Your Google account is now linked to the wedding app.</p>
      <p>You can close this window now.</p>
      <script>
        if (window.opener) {
          window.opener.postMessage({ type: 'OAUTH_AUTH_SUCCESS' }, '*');
          setTimeout(() => window.close(), 2000);
        }
      </script>
    </div>
  </body>
</html>
"""


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(settings: AppSettings = SettingsDependency) -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok", "environment": settings.environment}


@router.get("/auth/url", response_model=AuthUrlResponse)
async def get_authorization_url(
    token_service: Annotated[Any, Depends(get_google_token_service)],
) -> AuthUrlResponse:
    """Return the consent URL the admin panel opens in a popup."""
    return AuthUrlResponse(url=token_service.build_authorization_url())


@router.get("/auth/status", response_model=AuthStatusResponse)
async def get_connection_status(
    token_service: Annotated[Any, Depends(get_google_token_service)],
):
    try:
        connected = token_service.connection_status()
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unable to read the stored Google credentials")
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={"error": STATUS_FAILED_MESSAGE},
        )
    return AuthStatusResponse(connected=connected)


@oauth_router.get("/auth/google/callback", response_class=HTMLResponse)
async def handle_google_oauth_callback(
    token_service: Annotated[Any, Depends(get_google_token_service)],
    code: str | None = Query(default=None, description="Authorization code returned by Google."),
    error: str | None = Query(default=None, description="Error reported by Google, e.g. access_denied."),
):
    """Complete the OAuth exchange and notify the opener window."""
    if error or not code:
        logger.warning("OAuth callback without a usable code (error=%s)", error)
        return PlainTextResponse(AUTH_FAILED_MESSAGE, status_code=HTTPStatus.BAD_REQUEST)

    try:
        await token_service.exchange_code(code)
    except AuthExchangeFailed as exc:
        logger.error("Error getting tokens: %s", exc)
        return PlainTextResponse(
            AUTH_FAILED_MESSAGE, status_code=HTTPStatus.INTERNAL_SERVER_ERROR
        )
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unexpected error while linking the Google account")
        return PlainTextResponse(
            AUTH_FAILED_MESSAGE, status_code=HTTPStatus.INTERNAL_SERVER_ERROR
        )

    return HTMLResponse(_CALLBACK_SUCCESS_HTML)


@router.post(
    "/rsvp",
    response_model=RSVPResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_rsvp(
    payload: RSVPSubmission,
    service: Annotated[Any, Depends(get_rsvp_service)],
):
    """Append the guest's response to the RSVP spreadsheet."""
    try:
        await service.submit(payload)
    except NotConfigured:
        return JSONResponse(
            status_code=HTTPStatus.BAD_REQUEST,
            content={"error": NOT_CONFIGURED_MESSAGE},
        )
    except SheetProvisioningFailed as exc:
        logger.error("Spreadsheet provisioning failed at stage %s: %s", exc.stage, exc)
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={"error": SAVE_FAILED_MESSAGE},
        )
    except SubmissionFailed as exc:
        logger.error("Error saving to sheets: %s", exc.cause)
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={"error": SAVE_FAILED_MESSAGE},
        )
    except Exception:  # pylint: disable=broad-except
        logger.exception("Unexpected error while saving RSVP")
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={"error": SAVE_FAILED_MESSAGE},
        )

    return RSVPResponse(success=True)


__all__ = ["oauth_router", "router"]
