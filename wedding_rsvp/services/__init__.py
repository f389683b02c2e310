"""Service layer exports."""

from .google_tokens import GoogleTokenService, NotConfigured
from .rsvp import RSVPSubmissionService, SubmissionFailed
from .spreadsheet import SheetProvisioningFailed, SpreadsheetProvisioner
from .token_cipher import TokenCipherService

__all__ = [
    "GoogleTokenService",
    "NotConfigured",
    "RSVPSubmissionService",
    "SheetProvisioningFailed",
    "SpreadsheetProvisioner",
    "SubmissionFailed",
    "TokenCipherService",
]
