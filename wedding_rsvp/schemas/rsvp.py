"""
Pydantic models for RSVP submissions and their responses.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RSVPSubmission(BaseModel):
    """A guest's attendance response as posted by the invitation form."""

    model_config = ConfigDict(
        populate_by_name=True, str_strip_whitespace=True, extra="ignore"
    )

    name: str = Field(..., min_length=1, description="Guest's full name.")
    attending: bool = Field(..., description="Whether the guest will attend.")
    guests: int = Field(1, description="Number of adults in the party.")
    companions: Optional[str] = Field(
        None,
        alias="otherGuests",
        description="Names of the people accompanying the guest.",
    )
    children: int = Field(0, alias="childrenCount")
    needs_accommodation: bool = Field(False, alias="needsAccommodation")
    diet: Optional[str] = Field(None, description="Dietary requirements.")
    message: Optional[str] = Field(None, description="Free-form note for the couple.")


class RSVPResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str


__all__ = ["ErrorResponse", "RSVPResponse", "RSVPSubmission"]
