"""Data model for the AnonDocs API.

The server speaks camelCase JSON; these dataclasses expose snake_case
attributes and convert in both directions with ``from_dict``/``to_dict``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class LLMProvider(str, Enum):
    """LLM providers supported by the AnonDocs server."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    OLLAMA = "ollama"


class ProgressEventType(str, Enum):
    """Kinds of progress events sent on streaming endpoints."""

    STARTED = "started"
    CHUNK_PROCESSING = "chunk_processing"
    CHUNK_COMPLETED = "chunk_completed"
    COMPLETED = "completed"
    ERROR = "error"


def _str_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


def _number(value: Any, key: str) -> float:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{key}' must be a number, got {type(value).__name__}")
    return value


@dataclass
class PIIDetected:
    """PII found by the server, grouped by category.

    Attributes:
        names: Person names.
        addresses: Postal addresses.
        emails: Email addresses.
        phone_numbers: Phone numbers.
        dates: Dates (birth dates and similar).
        organizations: Company and organization names.
        other: Anything else the server flagged.
    """

    names: List[str] = field(default_factory=list)
    addresses: List[str] = field(default_factory=list)
    emails: List[str] = field(default_factory=list)
    phone_numbers: List[str] = field(default_factory=list)
    dates: List[str] = field(default_factory=list)
    organizations: List[str] = field(default_factory=list)
    other: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Total number of PII items across all categories."""
        return sum(len(items) for items in self.to_dict().values())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PIIDetected":
        if not isinstance(data, dict):
            raise TypeError("'piiDetected' must be an object")
        return cls(
            names=_str_list(data.get("names"), "names"),
            addresses=_str_list(data.get("addresses"), "addresses"),
            emails=_str_list(data.get("emails"), "emails"),
            phone_numbers=_str_list(data.get("phoneNumbers"), "phoneNumbers"),
            dates=_str_list(data.get("dates"), "dates"),
            organizations=_str_list(data.get("organizations"), "organizations"),
            other=_str_list(data.get("other"), "other"),
        )

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "names": self.names,
            "addresses": self.addresses,
            "emails": self.emails,
            "phoneNumbers": self.phone_numbers,
            "dates": self.dates,
            "organizations": self.organizations,
            "other": self.other,
        }


@dataclass
class AnonymizationResult:
    """Final output of an anonymization request.

    Attributes:
        anonymized_text: The de-identified text.
        pii_detected: Breakdown of the PII that was replaced.
        chunks_processed: Number of chunks the server split the input into.
        words_per_minute: Server-side throughput.
        processing_time_ms: Server-side processing time in milliseconds.
    """

    anonymized_text: str
    pii_detected: PIIDetected = field(default_factory=PIIDetected)
    chunks_processed: int = 0
    words_per_minute: float = 0
    processing_time_ms: float = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnonymizationResult":
        """Build a result from the server's JSON object.

        Raises:
            KeyError: If ``anonymizedText`` is missing.
            TypeError: If a field has the wrong type.
        """
        if not isinstance(data, dict):
            raise TypeError("result must be an object")

        text = data["anonymizedText"]
        if not isinstance(text, str):
            raise TypeError("'anonymizedText' must be a string")

        return cls(
            anonymized_text=text,
            pii_detected=PIIDetected.from_dict(data.get("piiDetected") or {}),
            chunks_processed=int(_number(data.get("chunksProcessed", 0), "chunksProcessed")),
            words_per_minute=_number(data.get("wordsPerMinute", 0), "wordsPerMinute"),
            processing_time_ms=_number(data.get("processingTimeMs", 0), "processingTimeMs"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "anonymizedText": self.anonymized_text,
            "piiDetected": self.pii_detected.to_dict(),
            "chunksProcessed": self.chunks_processed,
            "wordsPerMinute": self.words_per_minute,
            "processingTimeMs": self.processing_time_ms,
        }


@dataclass
class ProgressEvent:
    """One progress update from a streaming endpoint.

    Attributes:
        type: Event kind.
        progress: Completion percentage, 0 to 100.
        message: Human-readable status message.
        current_chunk: Index of the chunk being processed, if reported.
        total_chunks: Number of chunks in the request, if reported.
        data: Final result; only set on ``completed`` events.
    """

    type: ProgressEventType
    progress: float = 0
    message: str = ""
    current_chunk: Optional[int] = None
    total_chunks: Optional[int] = None
    data: Optional[AnonymizationResult] = None

    @property
    def is_terminal(self) -> bool:
        return self.type in (ProgressEventType.COMPLETED, ProgressEventType.ERROR)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgressEvent":
        """Build an event from a decoded frame payload.

        Raises:
            KeyError: If ``type`` is missing.
            ValueError: If ``type`` is not a known event kind.
            TypeError: If a field has the wrong type.
        """
        if not isinstance(data, dict):
            raise TypeError(f"event must be an object, got {type(data).__name__}")

        event_type = ProgressEventType(data["type"])

        message = data.get("message", "")
        if not isinstance(message, str):
            raise TypeError("'message' must be a string")

        current_chunk = data.get("currentChunk")
        total_chunks = data.get("totalChunks")

        result = None
        if event_type is ProgressEventType.COMPLETED and data.get("data") is not None:
            result = AnonymizationResult.from_dict(data["data"])

        return cls(
            type=event_type,
            progress=_number(data.get("progress", 0), "progress"),
            message=message,
            current_chunk=None if current_chunk is None else int(_number(current_chunk, "currentChunk")),
            total_chunks=None if total_chunks is None else int(_number(total_chunks, "totalChunks")),
            data=result,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type.value,
            "progress": self.progress,
            "message": self.message,
        }
        if self.current_chunk is not None:
            payload["currentChunk"] = self.current_chunk
        if self.total_chunks is not None:
            payload["totalChunks"] = self.total_chunks
        if self.data is not None:
            payload["data"] = self.data.to_dict()
        return payload


@dataclass
class HealthResponse:
    """Response of the ``/health`` endpoint."""

    status: str
    timestamp: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HealthResponse":
        return cls(status=str(data["status"]), timestamp=str(data.get("timestamp", "")))

    @property
    def ok(self) -> bool:
        return self.status == "ok"


ProgressCallback = Callable[[ProgressEvent], None]
CompleteCallback = Callable[[AnonymizationResult], None]
ErrorCallback = Callable[[Exception], None]


@dataclass
class StreamCallbacks:
    """Handlers for one streaming call. All of them are optional.

    Attributes:
        on_progress: Called for every event, including ``completed``.
        on_complete: Called with the final result, before ``on_progress``
            sees the ``completed`` event.
        on_error: Called once with the error that ends the stream.
    """

    on_progress: Optional[ProgressCallback] = None
    on_complete: Optional[CompleteCallback] = None
    on_error: Optional[ErrorCallback] = None
