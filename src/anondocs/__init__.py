"""anondocs: Python SDK for the AnonDocs anonymization API.

Send text or documents to an AnonDocs server and get de-identified results
back, either in one response or as a stream of progress events.

QUICK START:
    >>> from anondocs import AnonDocsClient
    >>> async with AnonDocsClient(base_url="http://localhost:3000") as client:
    ...     result = await client.anonymize_text("John Smith lives in Springfield")
    >>> result.anonymized_text
    '[NAME] lives in [ADDRESS]'

STREAMING:
    >>> await client.stream_anonymize_text(
    ...     long_text,
    ...     on_progress=lambda event: print(f"{event.progress}% {event.message}"),
    ...     on_complete=lambda result: print(result.anonymized_text),
    ... )

Modules:
    - client: AnonDocsClient (start here!)
    - config: ClientConfig
    - types: Results, progress events and callbacks
    - streaming: Server-sent event decoding and dispatch
    - errors: Exception hierarchy
"""

import logging

from anondocs.__version__ import __version__, __version_info__
from anondocs.client import AnonDocsClient
from anondocs.config import ClientConfig
from anondocs.errors import (
    AnonDocsApiError,
    AnonDocsError,
    AnonDocsHandlerError,
    AnonDocsNetworkError,
    AnonDocsStreamError,
    AnonDocsValidationError,
    ConfigurationError,
)
from anondocs.types import (
    AnonymizationResult,
    HealthResponse,
    LLMProvider,
    PIIDetected,
    ProgressEvent,
    ProgressEventType,
    StreamCallbacks,
)

logging.getLogger("anondocs").addHandler(logging.NullHandler())

__all__ = [
    # Client
    "AnonDocsClient",
    "ClientConfig",
    "__version__",
    "__version_info__",
    # Types
    "AnonymizationResult",
    "HealthResponse",
    "LLMProvider",
    "PIIDetected",
    "ProgressEvent",
    "ProgressEventType",
    "StreamCallbacks",
    # Errors
    "AnonDocsError",
    "AnonDocsApiError",
    "AnonDocsNetworkError",
    "AnonDocsValidationError",
    "AnonDocsStreamError",
    "AnonDocsHandlerError",
    "ConfigurationError",
]
