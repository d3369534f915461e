"""Utility functions for anondocs.

Helpers shared by the client and the CLI for input validation and request
body preparation.
"""

import mimetypes
import os
from pathlib import Path
from typing import IO, Any, Dict, Optional, Tuple, Union

from anondocs.errors import AnonDocsValidationError
from anondocs.types import LLMProvider

DEFAULT_FILENAME = "document"

DocumentInput = Union[bytes, bytearray, memoryview, str, os.PathLike, IO[bytes]]


def validate_text(text: Any) -> str:
    """Check that text is a non-blank string.

    Args:
        text: Value to check.

    Returns:
        The text, unchanged.

    Raises:
        AnonDocsValidationError: If text is not a string or is blank.

    Example:
        >>> validate_text("John lives in Paris")
        'John lives in Paris'
    """
    if not isinstance(text, str):
        raise AnonDocsValidationError("Text must be a string")

    if not text.strip():
        raise AnonDocsValidationError("Text cannot be empty")

    return text


def provider_value(
    provider: Optional[Union[LLMProvider, str]],
    default: Optional[Union[LLMProvider, str]] = None,
) -> Optional[str]:
    """Resolve the provider to send, falling back to the default.

    Raises:
        AnonDocsValidationError: If the provider is not a known one.
    """
    chosen = provider or default
    if chosen is None:
        return None

    try:
        return LLMProvider(chosen).value
    except ValueError:
        valid = ", ".join(p.value for p in LLMProvider)
        raise AnonDocsValidationError(f"Unknown provider '{chosen}'. Valid providers: {valid}")


def json_body(text: str, provider: Optional[str]) -> Dict[str, str]:
    """Build the JSON body for text endpoints."""
    body = {"text": text}
    if provider:
        body["provider"] = provider
    return body


def form_fields(provider: Optional[str]) -> Dict[str, str]:
    """Build the non-file form fields for document endpoints."""
    return {"provider": provider} if provider else {}


def prepare_upload(
    file: DocumentInput,
    filename: Optional[str] = None,
) -> Tuple[str, Union[bytes, IO[bytes]], str]:
    """Turn a document into an ``httpx`` multipart file tuple.

    Accepts raw bytes, a path, or a binary file object. Paths and named file
    objects keep their own name unless ``filename`` is given; anything else
    is sent as ``document``.

    Args:
        file: The document to upload.
        filename: Name to send instead of the inferred one.

    Returns:
        ``(filename, content, content_type)``.

    Raises:
        AnonDocsValidationError: If the input is empty, missing or of an
            unsupported type.
    """
    if isinstance(file, (bytes, bytearray, memoryview)):
        content: Union[bytes, IO[bytes]] = bytes(file)
        if not content:
            raise AnonDocsValidationError("Document cannot be empty")
        name = filename or DEFAULT_FILENAME

    elif isinstance(file, (str, os.PathLike)):
        path = Path(file)
        if not path.is_file():
            raise AnonDocsValidationError(f"Document not found: {path}")
        content = path.read_bytes()
        if not content:
            raise AnonDocsValidationError(f"Document is empty: {path}")
        name = filename or path.name

    elif hasattr(file, "read"):
        content = file
        inferred = getattr(file, "name", None)
        if isinstance(inferred, str) and inferred:
            inferred = os.path.basename(inferred)
        else:
            inferred = None
        name = filename or inferred or DEFAULT_FILENAME

    else:
        raise AnonDocsValidationError(
            f"Unsupported document type: {type(file).__name__}. "
            "Pass bytes, a file path, or a binary file object."
        )

    content_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
    return name, content, content_type
