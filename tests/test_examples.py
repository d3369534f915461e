"""Tests that the example scripts work against a mocked server."""

import importlib.util
from pathlib import Path

import httpx
import pytest

from anondocs import AnonDocsClient

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


def load_example(name):
    spec = importlib.util.spec_from_file_location(f"example_{name}", EXAMPLES_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def streaming_usage():
    return load_example("streaming_usage")


@pytest.fixture
def fractional_stream(encode, completed_event):
    """A stream whose progress values are not whole numbers."""
    return encode(
        {"type": "started", "progress": 0.0, "message": "Starting"},
        {
            "type": "chunk_completed",
            "progress": 33.3,
            "message": "Chunk 1 of 3 anonymized",
            "currentChunk": 1,
            "totalChunks": 3,
        },
        completed_event,
        "[DONE]",
    )


def client_for(body: bytes) -> AnonDocsClient:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=body))
    return AnonDocsClient(http_client=httpx.AsyncClient(transport=transport))


@pytest.mark.asyncio
class TestStreamingUsage:
    """Test examples/streaming_usage.py."""

    async def test_callbacks_with_fractional_progress(
        self, streaming_usage, fractional_stream, capsys
    ):
        await streaming_usage.with_callbacks(client_for(fractional_stream))

        out = capsys.readouterr().out
        assert " 33% chunk_completed [chunk 1/3]" in out
        assert "✓ Done: 4 PII item(s) replaced" in out
        assert "✗ Failed" not in out

    async def test_iterator_with_fractional_progress(
        self, streaming_usage, fractional_stream, capsys
    ):
        await streaming_usage.with_iterator(client_for(fractional_stream))

        out = capsys.readouterr().out
        assert " 33% Chunk 1 of 3 anonymized" in out
        assert "First chunk done" in out
