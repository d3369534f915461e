"""Streaming support for anondocs.

This package turns a server-sent event response into progress events:

- decoder: bytes to complete lines, across chunk boundaries
- parser: one line to a progress event or the end-of-stream marker
- dispatcher: the event loop, callback dispatch and resource release

Example:
    >>> from anondocs.streaming import run_stream
    >>> from anondocs.types import StreamCallbacks
    >>>
    >>> callbacks = StreamCallbacks(on_progress=lambda e: print(e.progress))
    >>> result = await run_stream(response, callbacks)
"""

from anondocs.streaming.decoder import FrameDecoder, iter_lines
from anondocs.streaming.dispatcher import iter_events, notify_error, run_stream
from anondocs.streaming.parser import DATA_PREFIX, DONE, DONE_PAYLOAD, parse_frame

__all__ = [
    "FrameDecoder",
    "iter_lines",
    "parse_frame",
    "DATA_PREFIX",
    "DONE",
    "DONE_PAYLOAD",
    "iter_events",
    "run_stream",
    "notify_error",
]
