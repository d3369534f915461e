#!/usr/bin/env python3
"""
AnonDocs Document Example

Anonymize a PDF, DOCX or TXT file and save the result next to it.

Usage:
    python examples/document_usage.py report.pdf [--provider ollama]

Without an argument a small sample .txt file is created and used.
"""

import argparse
import asyncio
import tempfile
from pathlib import Path

from tqdm import tqdm

from anondocs import AnonDocsClient, AnonDocsError, ClientConfig


def make_sample() -> Path:
    """Write a sample document to a temp directory."""
    path = Path(tempfile.mkdtemp()) / "intake_form.txt"
    path.write_text(
        "Patient: Robert Chen\n"
        "DOB: 1984-07-02\n"
        "Address: 7 Birch Lane, Portland, OR\n"
        "Phone: (503) 555-0147\n"
        "Employer: Initech\n",
        encoding="utf-8",
    )
    return path


async def anonymize_file(path: Path, provider=None):
    # Environment variables (ANONDOCS_BASE_URL, ...) are honored here
    config = ClientConfig.from_env()

    async with AnonDocsClient(config, timeout=120) as client:
        with tqdm(total=100, desc=path.name, unit="%") as bar:
            def on_progress(event):
                if event.progress > bar.n:
                    bar.update(event.progress - bar.n)
                bar.set_postfix_str(event.message)

            result = await client.stream_anonymize_document(
                path, provider, on_progress=on_progress
            )

    if result is None:
        print("✗ Server closed the stream without a result")
        return

    output_path = path.with_name(f"{path.stem}_anonymized.txt")
    output_path.write_text(result.anonymized_text, encoding="utf-8")

    print(f"\n✓ Saved to {output_path}")
    print(f"  {result.pii_detected.total} PII item(s) replaced")
    print(f"  {result.words_per_minute:.0f} words/min")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("file", nargs="?", help="Document to anonymize")
    parser.add_argument("--provider", choices=["openai", "anthropic", "ollama"])
    args = parser.parse_args()

    path = Path(args.file) if args.file else make_sample()
    print(f"Anonymizing {path}")

    try:
        asyncio.run(anonymize_file(path, args.provider))
    except AnonDocsError as e:
        print(f"\n✗ Error: {e}")
