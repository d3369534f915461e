"""Event dispatch for streaming anonymization responses.

Two ways to consume a stream are offered:

- :func:`iter_events` pulls events one by one with ``async for``.
- :func:`run_stream` pushes events into :class:`StreamCallbacks`.

Both stop at the ``[DONE]`` sentinel, both turn a server ``error`` event into
:class:`AnonDocsStreamError`, and both release the response body exactly once
on every exit path.
"""

import logging
from contextlib import aclosing
from typing import Any, AsyncIterator, Callable, Optional, Protocol

from anondocs.errors import AnonDocsError, AnonDocsHandlerError, AnonDocsStreamError
from anondocs.streaming.decoder import iter_lines
from anondocs.streaming.parser import DONE, parse_frame
from anondocs.types import (
    AnonymizationResult,
    ProgressEvent,
    ProgressEventType,
    StreamCallbacks,
)

logger = logging.getLogger(__name__)


class ResponseBody(Protocol):
    """What the dispatcher needs from a response; ``httpx.Response`` fits."""

    def aiter_bytes(self) -> AsyncIterator[bytes]:
        ...

    async def aclose(self) -> None:
        ...


async def iter_events(body: ResponseBody) -> AsyncIterator[ProgressEvent]:
    """Yield progress events from a streaming response body.

    Args:
        body: An open response body.

    Yields:
        Every event except ``error`` events, in arrival order.

    Raises:
        AnonDocsStreamError: When the server sends an ``error`` event, or
            when reading the body fails.
    """
    pending: Optional[BaseException] = None
    try:
        async with aclosing(iter_lines(body.aiter_bytes())) as lines:
            async for line in lines:
                frame = parse_frame(line)
                if frame is None:
                    continue

                if frame is DONE:
                    logger.debug("Stream finished with [DONE]")
                    return

                if frame.type is ProgressEventType.ERROR:
                    raise AnonDocsStreamError(
                        frame.message or "The server reported an error", event=frame
                    )

                logger.debug(f"Stream event: {frame.type.value} ({frame.progress}%)")
                yield frame

        # lenient: a body that ends without [DONE] still counts as success
        logger.debug("Stream body ended without [DONE]")

    except AnonDocsStreamError as e:
        pending = e
        raise
    except Exception as e:
        pending = AnonDocsStreamError(f"Stream read failed: {e}", original_error=e)
        raise pending from e
    except BaseException as e:
        # early close by the consumer, or cancellation
        pending = e
        raise
    finally:
        await _release(body, pending)


async def _release(body: ResponseBody, pending: Optional[BaseException]) -> None:
    """Close the body; a close failure never hides an exception in flight."""
    try:
        await body.aclose()
    except Exception as e:
        if pending is not None:
            logger.warning(f"Failed to release stream body after {pending!r}: {e!r}")
            return
        raise AnonDocsStreamError(f"Stream release failed: {e}", original_error=e) from e


async def run_stream(
    body: ResponseBody,
    callbacks: Optional[StreamCallbacks] = None,
) -> Optional[AnonymizationResult]:
    """Drive a streaming response to completion, dispatching to callbacks.

    A ``completed`` event goes to ``on_complete`` first and then to
    ``on_progress``. Any failure that ends the stream is passed to
    ``on_error`` once and then raised, so callers that register no callbacks
    still see it.

    Args:
        body: An open response body.
        callbacks: Handlers for this call.

    Returns:
        The result from the ``completed`` event, or ``None`` if the stream
        ended without one.

    Raises:
        AnonDocsStreamError: Server ``error`` event or read failure.
        AnonDocsHandlerError: A callback raised.
    """
    callbacks = callbacks or StreamCallbacks()
    result: Optional[AnonymizationResult] = None

    try:
        async with aclosing(iter_events(body)) as events:
            async for event in events:
                if event.type is ProgressEventType.COMPLETED and event.data is not None:
                    result = event.data
                    _invoke(callbacks.on_complete, "on_complete", event.data)
                _invoke(callbacks.on_progress, "on_progress", event)
    except AnonDocsError as e:
        notify_error(callbacks, e)
        raise

    return result


def notify_error(callbacks: StreamCallbacks, error: Exception) -> None:
    """Pass a terminal error to ``on_error``.

    Raises:
        AnonDocsHandlerError: If ``on_error`` itself raises.
    """
    logger.debug(f"Stream failed: {error!r}")
    _invoke(callbacks.on_error, "on_error", error)


def _invoke(callback: Optional[Callable[[Any], None]], name: str, arg: Any) -> None:
    if callback is None:
        return
    try:
        callback(arg)
    except Exception as e:
        raise AnonDocsHandlerError(name, e) from e
