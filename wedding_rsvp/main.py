"""
FastAPI application entrypoint for the wedding invitation backend.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse

from wedding_rsvp.api.routes import oauth_router, router as api_router
from wedding_rsvp.core.config import AppSettings, get_settings
from wedding_rsvp.core.logging import configure_logging

logger = logging.getLogger(__name__)


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        content={"error": "Invalid RSVP submission."},
    )


def _register_frontend(app: FastAPI, static_dir: str) -> None:
    """Serve the prebuilt bundle, falling back to index.html for client routes."""
    root = Path(static_dir).resolve()
    index = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
        if not index.is_file():
            return JSONResponse(status_code=HTTPStatus.NOT_FOUND, content={"error": "Not found"})
        return FileResponse(index)


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Factory for the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Wedding Invitation RSVP",
        version="0.1.0",
        description="RSVP collection backed by a Google Sheet.",
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(api_router, prefix="/api")
    app.include_router(oauth_router)

    # Registered last so the API routes take precedence over the catch-all.
    if settings.static_dir and Path(settings.static_dir).is_dir():
        _register_frontend(app, settings.static_dir)
        logger.info("Serving frontend from %s", settings.static_dir)

    return app


app = create_app()

__all__ = ["app", "create_app"]
