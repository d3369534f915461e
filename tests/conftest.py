"""Shared fixtures for anondocs tests."""

import json
from typing import Any, Dict, Iterable, List, Optional, Union

import pytest


class FakeBody:
    """Response body double: yields preset chunks and counts releases."""

    def __init__(self, chunks: Iterable[bytes], error: Optional[Exception] = None):
        self.chunks = list(chunks)
        self.error = error
        self.chunks_read = 0
        self.close_calls = 0

    async def aiter_bytes(self):
        for chunk in self.chunks:
            self.chunks_read += 1
            yield chunk
        if self.error is not None:
            raise self.error

    async def aclose(self) -> None:
        self.close_calls += 1


def frame(payload: Union[str, Dict[str, Any]]) -> str:
    """Encode one payload as an SSE ``data:`` line."""
    if not isinstance(payload, str):
        payload = json.dumps(payload, ensure_ascii=False)
    return f"data: {payload}\n"


def sse(*payloads: Union[str, Dict[str, Any]]) -> bytes:
    """Encode payloads as a UTF-8 event stream."""
    return "".join(frame(p) for p in payloads).encode("utf-8")


def split_at(data: bytes, offsets: List[int]) -> List[bytes]:
    """Split bytes at the given offsets."""
    bounds = [0] + sorted(offsets) + [len(data)]
    return [data[a:b] for a, b in zip(bounds, bounds[1:])]


@pytest.fixture
def result_payload():
    """A completed result as the server sends it."""
    return {
        "anonymizedText": "[NAME] lives in [ADDRESS]",
        "piiDetected": {
            "names": ["John Smith"],
            "addresses": ["123 Main Street, Springfield"],
            "emails": [],
            "phoneNumbers": ["555-0123"],
            "dates": [],
            "organizations": ["Acme Corp"],
            "other": [],
        },
        "chunksProcessed": 2,
        "wordsPerMinute": 420,
        "processingTimeMs": 1250,
    }


@pytest.fixture
def started_event():
    return {"type": "started", "progress": 0, "message": "Starting anonymization"}


@pytest.fixture
def completed_event(result_payload):
    return {
        "type": "completed",
        "progress": 100,
        "message": "Anonymization complete",
        "data": result_payload,
    }


@pytest.fixture
def chunk_events():
    return [
        {
            "type": "chunk_processing",
            "progress": 25,
            "message": "Processing chunk 1 of 2",
            "currentChunk": 1,
            "totalChunks": 2,
        },
        {
            "type": "chunk_completed",
            "progress": 50,
            "message": "Chunk 1 of 2 done",
            "currentChunk": 1,
            "totalChunks": 2,
        },
    ]


@pytest.fixture
def body_factory():
    """Build FakeBody instances."""
    return FakeBody


@pytest.fixture
def encode():
    """Encode payloads as an event stream (see ``sse``)."""
    return sse


@pytest.fixture
def splitter():
    """Split bytes at offsets (see ``split_at``)."""
    return split_at
