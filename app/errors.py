"""Exception hierarchy for the export pipeline.

Every stage raises a subclass of :class:`ExportError`. Each class knows the
HTTP status it maps to, the message the caller is allowed to see and the
pipeline operation it belongs to. ``detail`` keeps the internal reason
(including verbatim upstream bodies) for operator logs only.
"""
from __future__ import annotations


class ExportError(Exception):
    """Base class for failures surfaced by the export pipeline."""

    status_code: int = 500
    public_message: str = "Export failed"
    operation: str = "export"

    def __init__(self, detail: str = "", *, operation: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message
        if operation is not None:
            self.operation = operation


class ValidationError(ExportError):
    """Raised when the caller's payload is unusable."""

    status_code = 400
    public_message = "No images provided"
    operation = "validate_request"

    def __init__(self, detail: str = "No images provided", *, operation: str | None = None) -> None:
        super().__init__(detail, operation=operation)
        # Validation messages describe the caller's own input, so they are safe to return.
        self.public_message = self.detail


class ConfigurationError(ExportError):
    public_message = "Google credentials not configured"
    operation = "load_credentials"


class CredentialParseError(ExportError):
    public_message = "Invalid Google credentials format"
    operation = "load_credentials"


class KeyImportError(ExportError):
    public_message = "Failed to authenticate with Google"
    operation = "build_assertion"


class SigningError(ExportError):
    public_message = "Failed to authenticate with Google"
    operation = "build_assertion"


class AuthenticationError(ExportError):
    """Raised when the token endpoint rejects the assertion."""

    public_message = "Failed to authenticate with Google"
    operation = "exchange_token"


class TransportError(ExportError):
    """Raised when an upstream Google endpoint cannot be reached."""

    public_message = "Could not reach Google services"


class SpreadsheetCreateError(ExportError):
    public_message = "Failed to create spreadsheet"
    operation = "create_spreadsheet"


class SpreadsheetUpdateError(ExportError):
    public_message = "Failed to update spreadsheet"
    operation = "update_spreadsheet"
