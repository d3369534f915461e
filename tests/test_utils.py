"""Tests for utility functions."""

import io

import pytest

from anondocs.errors import AnonDocsValidationError
from anondocs.types import LLMProvider
from anondocs.utils import (
    form_fields,
    json_body,
    prepare_upload,
    provider_value,
    validate_text,
)


class TestValidateText:
    """Test cases for validate_text."""

    def test_valid_text(self):
        assert validate_text("  John  ") == "  John  "

    def test_not_a_string(self):
        with pytest.raises(AnonDocsValidationError, match="must be a string"):
            validate_text(["John"])

    def test_blank(self):
        with pytest.raises(AnonDocsValidationError, match="cannot be empty"):
            validate_text(" \n ")


class TestProviderValue:
    """Test cases for provider_value."""

    def test_explicit_wins(self):
        assert provider_value("anthropic", LLMProvider.OPENAI) == "anthropic"

    def test_default_used(self):
        assert provider_value(None, LLMProvider.OLLAMA) == "ollama"

    def test_none(self):
        assert provider_value(None) is None

    def test_unknown(self):
        with pytest.raises(AnonDocsValidationError, match="openai, anthropic, ollama"):
            provider_value("mistral")


class TestBodies:
    """Test cases for request body helpers."""

    def test_json_body(self):
        assert json_body("hi", "openai") == {"text": "hi", "provider": "openai"}
        assert json_body("hi", None) == {"text": "hi"}

    def test_form_fields(self):
        assert form_fields("ollama") == {"provider": "ollama"}
        assert form_fields(None) == {}


class TestPrepareUpload:
    """Test cases for prepare_upload."""

    def test_bytes(self):
        assert prepare_upload(b"abc") == ("document", b"abc", "application/octet-stream")

    def test_bytearray_with_filename(self):
        name, content, content_type = prepare_upload(bytearray(b"abc"), "memo.txt")

        assert (name, content, content_type) == ("memo.txt", b"abc", "text/plain")

    def test_path(self, tmp_path):
        doc = tmp_path / "report.pdf"
        doc.write_bytes(b"%PDF-1.7")

        assert prepare_upload(doc) == ("report.pdf", b"%PDF-1.7", "application/pdf")

    def test_string_path(self, tmp_path):
        doc = tmp_path / "letter.docx"
        doc.write_bytes(b"PK")

        name, content, _ = prepare_upload(str(doc))

        assert name == "letter.docx"
        assert content == b"PK"

    def test_empty_file(self, tmp_path):
        doc = tmp_path / "empty.txt"
        doc.touch()

        with pytest.raises(AnonDocsValidationError, match="empty"):
            prepare_upload(doc)

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(AnonDocsValidationError, match="not found"):
            prepare_upload(tmp_path)

    def test_anonymous_file_object(self):
        stream = io.BytesIO(b"data")

        name, content, _ = prepare_upload(stream)

        assert name == "document"
        assert content is stream

    def test_named_file_object(self, tmp_path):
        doc = tmp_path / "scan.pdf"
        doc.write_bytes(b"%PDF")

        with open(doc, "rb") as f:
            name, content, content_type = prepare_upload(f)

        assert name == "scan.pdf"
        assert content_type == "application/pdf"

    def test_unsupported(self):
        with pytest.raises(AnonDocsValidationError, match="Unsupported document type: float"):
            prepare_upload(3.14)
