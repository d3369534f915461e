"""Tests for the error hierarchy and error formatting."""

import pytest

from anondocs.errors import (
    AnonDocsApiError,
    AnonDocsError,
    AnonDocsHandlerError,
    AnonDocsNetworkError,
    AnonDocsStreamError,
    AnonDocsValidationError,
    ConfigurationError,
    format_error,
)
from anondocs.types import ProgressEvent, ProgressEventType


class TestErrorHierarchy:
    """Test cases for the exception classes."""

    @pytest.mark.parametrize(
        "error",
        [
            AnonDocsApiError("bad", 400),
            AnonDocsNetworkError("down"),
            AnonDocsValidationError("empty"),
            AnonDocsStreamError("broken"),
            AnonDocsHandlerError("on_progress", RuntimeError("x")),
            ConfigurationError("invalid"),
        ],
    )
    def test_all_errors_share_a_base(self, error):
        assert isinstance(error, AnonDocsError)
        assert isinstance(error, Exception)

    def test_str_without_suggestion(self):
        assert str(AnonDocsValidationError("Text cannot be empty")) == "Text cannot be empty"

    def test_str_with_suggestion(self):
        error = AnonDocsError("Something failed", suggestion="Try again")

        assert str(error) == "Something failed\n\n💡 Hint: Try again"

    def test_api_error_fields(self):
        error = AnonDocsApiError("Quota exceeded", 429, "RATE_LIMITED")

        assert error.status_code == 429
        assert error.error_code == "RATE_LIMITED"
        assert error.message == "Quota exceeded"

    @pytest.mark.parametrize("status", [400, 404, 413, 415, 500, 503])
    def test_api_error_suggestions(self, status):
        assert AnonDocsApiError("x", status).suggestion

    def test_api_error_without_suggestion(self):
        assert AnonDocsApiError("x", 409).suggestion is None

    def test_network_error_keeps_cause(self):
        cause = ConnectionRefusedError("refused")
        error = AnonDocsNetworkError("Network error: refused", cause)

        assert error.original_error is cause
        assert "server is running" in str(error)

    def test_stream_error_from_event(self):
        event = ProgressEvent(ProgressEventType.ERROR, 40, "provider unavailable")
        error = AnonDocsStreamError(event.message, event=event)

        assert error.event is event
        assert error.original_error is None
        assert str(error) == "provider unavailable"

    def test_handler_error(self):
        cause = ValueError("bad value")
        error = AnonDocsHandlerError("on_complete", cause)

        assert error.callback == "on_complete"
        assert error.original_error is cause
        assert error.message == "on_complete callback failed: ValueError: bad value"

    def test_configuration_error_lists_problems(self):
        error = ConfigurationError("Invalid", ["timeout must be positive"])

        assert error.errors == ["timeout must be positive"]
        assert "  - timeout must be positive" in str(error)


class TestFormatError:
    """Test cases for format_error."""

    def test_anondocs_error(self):
        error = AnonDocsApiError("Not found", 404)

        assert format_error(error) == str(error)

    def test_file_not_found(self):
        message = format_error(FileNotFoundError(2, "No such file", "report.pdf"))

        assert "report.pdf" in message
        assert "Hint" in message

    def test_value_error(self):
        assert format_error(ValueError("nope")).startswith("Invalid value: nope")

    def test_type_error(self):
        assert format_error(TypeError("nope")).startswith("Type error: nope")

    def test_unexpected_error(self):
        message = format_error(RuntimeError("kaboom"))

        assert "Unexpected error: RuntimeError: kaboom" in message
        assert "bug" in message
