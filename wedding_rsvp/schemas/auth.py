"""Schemas related to the operator's OAuth flow."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AuthUrlResponse(BaseModel):
    """Consent URL the admin panel opens in a popup."""

    url: str = Field(..., description="Google OAuth consent URL.")


class AuthStatusResponse(BaseModel):
    """Whether a Google account is currently linked."""

    connected: bool = Field(
        ..., description="True when a credential record is stored, even if expired."
    )


__all__ = ["AuthStatusResponse", "AuthUrlResponse"]
