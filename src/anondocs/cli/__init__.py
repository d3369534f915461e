#!/usr/bin/env python3
"""anondocs CLI - Command line interface for the AnonDocs API.

Usage:
    anondocs health
    anondocs text TEXT [--stream] [--output OUT] [--json]
    anondocs document FILE [--stream] [--output OUT] [--json]

Examples:
    # Check the server
    anondocs health --base-url http://localhost:3000

    # Anonymize a sentence
    anondocs text "John Smith lives at 123 Main Street"

    # Anonymize a PDF with a live progress bar
    anondocs document contract.pdf --stream --output contract.txt

    # Read text from stdin
    cat notes.txt | anondocs text - --provider ollama
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from anondocs import __version__
from anondocs.client import AnonDocsClient
from anondocs.config import ClientConfig
from anondocs.errors import AnonDocsError, format_error
from anondocs.types import AnonymizationResult, LLMProvider, ProgressEvent, StreamCallbacks

logger = logging.getLogger(__name__)


def print_error(message: str):
    """Print an error message."""
    print(f"✗ {message}", file=sys.stderr)


def print_success(message: str):
    """Print a success message."""
    print(f"✓ {message}")


def print_info(message: str, file=None):
    """Print an info message."""
    print(f"ℹ {message}", file=file or sys.stdout)


class ProgressBar:
    """Feeds stream progress events into a tqdm bar."""

    def __init__(self, disable: bool = False):
        self.position = 0
        self._bar = tqdm(
            total=100,
            desc="Anonymizing",
            unit="%",
            bar_format="{desc}: {percentage:3.0f}%|{bar}| {postfix}",
            disable=disable,
            file=sys.stderr,
        )

    def __enter__(self) -> "ProgressBar":
        return self

    def __exit__(self, *exc_info) -> None:
        self._bar.close()

    def on_progress(self, event: ProgressEvent) -> None:
        if event.current_chunk is not None and event.total_chunks:
            self._bar.set_description(f"Chunk {event.current_chunk}/{event.total_chunks}")
        self._bar.set_postfix_str(event.message, refresh=False)

        target = min(max(event.progress, 0), 100)
        if target > self.position:
            self._bar.update(target - self.position)
            self.position = target
        else:
            self._bar.refresh()


def build_config(args) -> ClientConfig:
    """Combine environment configuration with command line flags."""
    return ClientConfig.from_env().merge(
        base_url=args.base_url,
        default_provider=args.provider,
        timeout=args.timeout,
    )


def read_text_arg(value: str) -> str:
    """Return the text argument, reading stdin for ``-``."""
    if value == "-":
        return sys.stdin.read()
    return value


def emit_result(result: Optional[AnonymizationResult], args) -> int:
    """Print or save a result according to the output flags."""
    if result is None:
        print_error("The server closed the stream without sending a result")
        return 1

    if args.json:
        output = json.dumps(result.to_dict(), indent=2)
    else:
        output = result.anonymized_text

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(output + "\n", encoding="utf-8")
        print_success(f"Anonymized output written to {output_path}")
    else:
        print(output)

    if not args.json:
        pii = result.pii_detected
        print_info(
            f"{pii.total} PII item(s) replaced | "
            f"{result.chunks_processed} chunk(s) | "
            f"{result.processing_time_ms:.0f} ms | "
            f"{result.words_per_minute:.0f} words/min",
            # stdout carries only the anonymized text unless it went to a file
            file=None if args.output else sys.stderr,
        )

    return 0


async def cmd_health(args) -> int:
    """Handle the health command."""
    async with AnonDocsClient(build_config(args)) as client:
        health = await client.health()

    if health.ok:
        print_success(f"Server is healthy ({health.timestamp})")
        return 0

    print_error(f"Server reported status '{health.status}' ({health.timestamp})")
    return 1


async def cmd_text(args) -> int:
    """Handle the text command."""
    text = read_text_arg(args.text)

    async with AnonDocsClient(build_config(args)) as client:
        if not args.stream:
            result = await client.anonymize_text(text)
        else:
            with ProgressBar(disable=args.no_progress) as bar:
                result = await client.stream_anonymize_text(
                    text, callbacks=StreamCallbacks(on_progress=bar.on_progress)
                )

    return emit_result(result, args)


async def cmd_document(args) -> int:
    """Handle the document command."""
    file_path = Path(args.file)

    if not file_path.exists():
        print_error(f"File not found: {file_path}")
        print_info("Hint: Check the path and ensure the file exists.")
        return 1

    async with AnonDocsClient(build_config(args)) as client:
        if not args.stream:
            result = await client.anonymize_document(file_path)
        else:
            with ProgressBar(disable=args.no_progress) as bar:
                result = await client.stream_anonymize_document(
                    file_path, callbacks=StreamCallbacks(on_progress=bar.on_progress)
                )

    return emit_result(result, args)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--base-url",
        help="AnonDocs server URL (default: $ANONDOCS_BASE_URL or http://localhost:3000)"
    )
    common.add_argument(
        "-p", "--provider",
        choices=[p.value for p in LLMProvider],
        help="LLM provider to use (default: $ANONDOCS_PROVIDER or server default)"
    )
    common.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: $ANONDOCS_TIMEOUT or 30)"
    )
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log requests and stream events to stderr"
    )

    output = argparse.ArgumentParser(add_help=False)
    output.add_argument(
        "-s", "--stream",
        action="store_true",
        help="Use the streaming endpoint and show progress"
    )
    output.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar when streaming"
    )
    output.add_argument(
        "-o", "--output",
        help="Write the result to this file instead of stdout"
    )
    output.add_argument(
        "--json",
        action="store_true",
        help="Output the full result (text, PII and metrics) as JSON"
    )

    parser = argparse.ArgumentParser(
        prog="anondocs",
        description="""
anondocs - Privacy-first text and document anonymization.

Quick Start:
    anondocs health                          # Check the server
    anondocs text "John lives in Paris"      # Anonymize text
    anondocs document report.pdf --stream    # Anonymize a file with progress
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser(
        "health",
        parents=[common],
        help="Check that the AnonDocs server is up"
    )

    text_parser = subparsers.add_parser(
        "text",
        parents=[common, output],
        help="Anonymize text (use '-' to read stdin)"
    )
    text_parser.add_argument("text", help="Text to anonymize, or '-' for stdin")

    document_parser = subparsers.add_parser(
        "document",
        aliases=["doc"],
        parents=[common, output],
        help="Anonymize a PDF, DOCX or TXT document"
    )
    document_parser.add_argument("file", help="Document to anonymize")

    return parser


COMMANDS = {
    "health": cmd_health,
    "text": cmd_text,
    "document": cmd_document,
    "doc": cmd_document,
}


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    try:
        return asyncio.run(COMMANDS[args.command](args))
    except AnonDocsError as e:
        print_error(format_error(e))
        return 1
    except KeyboardInterrupt:
        print_error("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
