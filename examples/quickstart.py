#!/usr/bin/env python3
"""
AnonDocs Quick Start Example

This example walks through the most common uses of the anondocs client.
Start an AnonDocs server first (default http://localhost:3000), then run
this script to see it in action!
"""

import asyncio

from anondocs import AnonDocsClient, AnonDocsError


SAMPLE_TEXT = (
    "John Smith from Acme Corp called on 2024-03-14. "
    "Reach him at john.smith@acme.com or 555-0123, "
    "or visit 42 Elm Street, Springfield."
)


async def example_health(client):
    """Example 1: Check the server is up."""
    print("\n" + "="*60)
    print("Example 1: Health Check")
    print("="*60)

    health = await client.health()
    print(f"\nStatus:    {health.status}")
    print(f"Timestamp: {health.timestamp}")


async def example_anonymize_text(client):
    """Example 2: Anonymize text and inspect what was found."""
    print("\n" + "="*60)
    print("Example 2: Anonymize Text")
    print("="*60)

    print("\nOriginal:")
    print(f"  {SAMPLE_TEXT}")

    result = await client.anonymize_text(SAMPLE_TEXT)

    print("\nAnonymized:")
    print(f"  {result.anonymized_text}")

    print("\nDetected PII:")
    for category, items in result.pii_detected.to_dict().items():
        if items:
            print(f"  ✓ {category}: {', '.join(items)}")

    print(f"\nProcessed {result.chunks_processed} chunk(s) in {result.processing_time_ms:.0f} ms")


async def example_provider(client):
    """Example 3: Pick the LLM provider per request."""
    print("\n" + "="*60)
    print("Example 3: Choosing a Provider")
    print("="*60)

    # Overrides the client's default_provider for this call only
    result = await client.anonymize_text("Call Anna Berg at 555-0199.", provider="ollama")
    print(f"\n  ollama: {result.anonymized_text}")


if __name__ == "__main__":
    print("\n" + "🛡️ " * 15)
    print("  ANONDOCS - Quick Start Examples")
    print("🛡️ " * 15)

    async def main():
        async with AnonDocsClient() as client:
            await example_health(client)
            await example_anonymize_text(client)
            await example_provider(client)

    try:
        asyncio.run(main())

        print("\n" + "="*60)
        print("✓ All examples completed successfully!")
        print("="*60)
        print("\nNext steps:")
        print("  1. Watch progress live: python examples/streaming_usage.py")
        print("  2. Anonymize files: python examples/document_usage.py report.pdf")
        print("  3. Try the CLI: anondocs text \"John lives in Paris\" --stream")
        print()

    except AnonDocsError as e:
        print(f"\n✗ Error: {e}")
