"""dmc exception classes."""

from typing import Optional


class DMCError(Exception):
    """Base exception for all dmc errors."""

    pass


class ConfigurationError(DMCError):
    """Raised when configuration is invalid or cannot be read or written."""

    pass


class GitOperationError(DMCError):
    """Raised when git operations fail."""

    pass


class KeyValidationError(DMCError):
    """Raised when a template or interval key is not configured."""

    pass


class TemplateNotFoundError(KeyValidationError):
    """Raised when a template key is not configured."""

    pass


class IntervalNotFoundError(KeyValidationError):
    """Raised when an interval key is not configured."""

    pass


class TemplateRenderError(DMCError):
    """Raised when a prompt template cannot be rendered."""

    pass


class GeminiError(DMCError):
    """Base for all Gemini API errors."""

    pass


class GeminiRequestError(GeminiError):
    """Raised when the request never produced an HTTP response."""

    pass


class GeminiHTTPError(GeminiError):
    """Raised when the API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the API
        body: Raw response body
    """

    def __init__(self, status_code: int, body: str, message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"API error ({status_code}): {body}")


class GeminiResponseError(GeminiError):
    """Raised when the API response is malformed or carries no text."""

    pass
