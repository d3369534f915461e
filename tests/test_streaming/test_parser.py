"""Tests for stream frame parsing."""

import json
import logging

import pytest

from anondocs.streaming.parser import DONE, parse_frame
from anondocs.types import AnonymizationResult, ProgressEvent, ProgressEventType


def data_line(payload):
    return "data: " + json.dumps(payload)


class TestParseFrame:
    """Test cases for parse_frame."""

    def test_sentinel(self):
        """Test that the [DONE] payload returns the DONE marker."""
        assert parse_frame("data: [DONE]") is DONE

    def test_sentinel_requires_exact_payload(self):
        """Test that a padded sentinel is not treated as DONE."""
        assert parse_frame("data: [DONE] ") is None

    @pytest.mark.parametrize(
        "line",
        ["", ": keep-alive", "event: progress", "id: 7", "data:[DONE]", "DATA: [DONE]"],
    )
    def test_non_frame_lines_are_ignored(self, line):
        """Test that lines without the 'data: ' prefix are skipped."""
        assert parse_frame(line) is None

    def test_started_event(self, started_event):
        """Test decoding a simple progress event."""
        event = parse_frame(data_line(started_event))

        assert isinstance(event, ProgressEvent)
        assert event.type is ProgressEventType.STARTED
        assert event.progress == 0
        assert event.message == "Starting anonymization"
        assert event.current_chunk is None
        assert event.data is None

    def test_chunk_metadata(self, chunk_events):
        """Test that chunk position fields are decoded."""
        event = parse_frame(data_line(chunk_events[0]))

        assert event.type is ProgressEventType.CHUNK_PROCESSING
        assert event.current_chunk == 1
        assert event.total_chunks == 2

    def test_completed_event_carries_result(self, completed_event):
        """Test that a completed event embeds the final result."""
        event = parse_frame(data_line(completed_event))

        assert event.type is ProgressEventType.COMPLETED
        assert isinstance(event.data, AnonymizationResult)
        assert event.data.anonymized_text == "[NAME] lives in [ADDRESS]"
        assert event.data.pii_detected.phone_numbers == ["555-0123"]
        assert event.data.processing_time_ms == 1250

    def test_error_event(self):
        """Test that error events parse like any other event."""
        event = parse_frame(
            data_line({"type": "error", "progress": 50, "message": "provider unavailable"})
        )

        assert event.type is ProgressEventType.ERROR
        assert event.message == "provider unavailable"

    @pytest.mark.parametrize(
        "payload",
        [
            "{not valid}",
            "",
            "42",
            '"started"',
            "[1, 2]",
            '{"progress": 10, "message": "no type"}',
            '{"type": "paused", "progress": 10, "message": "unknown"}',
            '{"type": "started", "progress": "ten", "message": "bad progress"}',
            '{"type": "started", "progress": 0, "message": 5}',
            '{"type": "completed", "progress": 100, "message": "x", "data": {"piiDetected": {}}}',
        ],
    )
    def test_malformed_payloads_are_skipped(self, payload):
        """Test that undecodable payloads return None instead of raising."""
        assert parse_frame("data: " + payload) is None

    def test_malformed_payload_is_logged(self, caplog):
        """Test that skipped frames leave a warning behind."""
        with caplog.at_level(logging.WARNING, logger="anondocs.streaming.parser"):
            parse_frame("data: {not valid}")

        assert "malformed" in caplog.text
        assert "{not valid}" in caplog.text

    def test_missing_optional_fields_default(self):
        """Test that progress and message default when absent."""
        event = parse_frame('data: {"type": "chunk_completed"}')

        assert event.progress == 0
        assert event.message == ""
