#!/usr/bin/env python3
"""
AnonDocs Streaming Examples

Shows the two ways to follow a long anonymization job:

1. callbacks (on_progress / on_complete / on_error)
2. an async iterator of progress events

Usage:
    python examples/streaming_usage.py
"""

import asyncio
from contextlib import aclosing

from anondocs import AnonDocsClient, AnonDocsError, ProgressEventType

LONG_TEXT = "\n\n".join(
    f"Meeting {i}: Maria Lopez (maria.lopez@example.org, +1-555-01{i:02d}) "
    f"met the Globex board at 1{i} Harbor Road."
    for i in range(1, 9)
)


async def with_callbacks(client):
    """Example 1: Callbacks."""
    print("\n" + "="*60)
    print("Example 1: Streaming with Callbacks")
    print("="*60)

    def on_progress(event):
        chunk = ""
        if event.current_chunk is not None:
            chunk = f" [chunk {event.current_chunk}/{event.total_chunks}]"
        print(f"  {event.progress:3.0f}% {event.type.value}{chunk} {event.message}")

    def on_complete(result):
        print(f"\n✓ Done: {result.pii_detected.total} PII item(s) replaced")

    def on_error(error):
        print(f"\n✗ Failed: {error}")

    result = await client.stream_anonymize_text(
        LONG_TEXT,
        on_progress=on_progress,
        on_complete=on_complete,
        on_error=on_error,
    )

    if result is not None:
        print("\nAnonymized text:")
        print(result.anonymized_text)


async def with_iterator(client):
    """Example 2: Async iteration, stopping at the first finished chunk."""
    print("\n" + "="*60)
    print("Example 2: Streaming with async for")
    print("="*60)

    # aclosing releases the connection as soon as we break out
    async with aclosing(client.iter_text_events(LONG_TEXT)) as events:
        async for event in events:
            print(f"  {event.progress:3.0f}% {event.message}")
            if event.type is ProgressEventType.CHUNK_COMPLETED:
                print("\n  First chunk done, stopping early.")
                break


if __name__ == "__main__":
    async def main():
        async with AnonDocsClient() as client:
            await with_callbacks(client)
            await with_iterator(client)

    try:
        asyncio.run(main())
    except AnonDocsError as e:
        print(f"\n✗ Error: {e}")
