"""Exceptions and error handling for anondocs.

Every error raised by the SDK derives from :class:`AnonDocsError` and carries
an optional suggestion that is shown to the user as a hint.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from anondocs.types import ProgressEvent


class AnonDocsError(Exception):
    """Base exception for anondocs errors."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\n💡 Hint: {self.suggestion}"
        return self.message


class AnonDocsApiError(AnonDocsError):
    """Raised when the API answers with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, _suggestion_for_status(status_code))
        self.status_code = status_code
        self.error_code = error_code


class AnonDocsNetworkError(AnonDocsError):
    """Raised when the server cannot be reached or the request times out."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        suggestion = (
            "Check that the AnonDocs server is running and reachable:\n"
            "  - Verify the base URL (default: http://localhost:3000)\n"
            "  - Increase the timeout for large documents\n"
            "  - Check proxies and firewalls between you and the server"
        )
        super().__init__(message, suggestion)
        self.original_error = original_error


class AnonDocsValidationError(AnonDocsError):
    """Raised when input is rejected before any request is sent."""

    def __init__(self, message: str):
        super().__init__(message)


class AnonDocsStreamError(AnonDocsError):
    """Raised when a progress stream fails.

    Covers both an ``error`` event reported by the server (``event`` is set)
    and a failure while reading the stream (``original_error`` is set).
    """

    def __init__(
        self,
        message: str,
        event: Optional["ProgressEvent"] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.event = event
        self.original_error = original_error


class AnonDocsHandlerError(AnonDocsError):
    """Raised when a caller-supplied stream callback fails."""

    def __init__(self, callback: str, original_error: BaseException):
        suggestion = (
            f"The exception was raised inside your {callback} callback, "
            "not by the server. See the chained traceback for details."
        )
        super().__init__(
            f"{callback} callback failed: {type(original_error).__name__}: {original_error}",
            suggestion,
        )
        self.callback = callback
        self.original_error = original_error


class ConfigurationError(AnonDocsError):
    """Raised when client configuration is invalid."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        suggestion = None
        if errors:
            suggestion = "Configuration errors:\n" + "\n".join(
                f"  - {e}" for e in errors
            )
        super().__init__(message, suggestion)
        self.errors = errors or []


def _suggestion_for_status(status_code: int) -> Optional[str]:
    if status_code == 400:
        return "The server rejected the request. Check the text or document you sent."
    if status_code == 404:
        return "Endpoint not found. Check that the base URL points at an AnonDocs server."
    if status_code == 413:
        return "The document is too large for the server. Try splitting it."
    if status_code == 415:
        return "Unsupported document type. AnonDocs accepts PDF, DOCX and TXT files."
    if status_code >= 500:
        return (
            "The server failed while processing the request.\n"
            "  - Check the server logs\n"
            "  - Check that the selected LLM provider is available"
        )
    return None


def format_error(e: Exception) -> str:
    """Format an exception into a user-friendly message.

    Args:
        e: The exception to format.

    Returns:
        A user-friendly error message with suggestions.
    """
    if isinstance(e, AnonDocsError):
        return str(e)

    if isinstance(e, FileNotFoundError):
        return (
            f"File not found: {e.filename or e}\n\n"
            "💡 Hint: Check the path and ensure the file exists."
        )

    if isinstance(e, ValueError):
        return f"Invalid value: {e}\n\n💡 Hint: Check your input parameters match the expected format."

    if isinstance(e, TypeError):
        return f"Type error: {e}\n\n💡 Hint: Check that you're passing the right types (e.g., str, bytes, path)."

    return (
        f"Unexpected error: {type(e).__name__}: {e}\n\n"
        "💡 Hint: This looks like a bug in anondocs. Please report it with the traceback."
    )
