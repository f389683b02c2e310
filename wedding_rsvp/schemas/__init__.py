"""Public schema exports."""

from .auth import AuthStatusResponse, AuthUrlResponse
from .rsvp import ErrorResponse, RSVPResponse, RSVPSubmission

__all__ = [
    "AuthStatusResponse",
    "AuthUrlResponse",
    "ErrorResponse",
    "RSVPResponse",
    "RSVPSubmission",
]
