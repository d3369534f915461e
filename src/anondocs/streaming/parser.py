"""Frame parsing for the progress event stream.

A frame is a line of the form ``data: <payload>``. The payload is either the
``[DONE]`` sentinel or a JSON encoded progress event.
"""

import json
import logging
from typing import Optional, Union

from anondocs.types import ProgressEvent

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_PAYLOAD = "[DONE]"


class _Done:
    """Marker returned for the end-of-stream sentinel."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DONE"


DONE = _Done()

ParsedFrame = Union[ProgressEvent, _Done]


def parse_frame(line: str) -> Optional[ParsedFrame]:
    """Parse one line of the event stream.

    Args:
        line: A complete line, without its terminator.

    Returns:
        ``DONE`` for the sentinel, a :class:`ProgressEvent` for a valid
        frame, or ``None`` for lines to skip: anything that is not a
        ``data:`` frame, and frames whose payload cannot be decoded.
    """
    if not line.startswith(DATA_PREFIX):
        return None

    payload = line[len(DATA_PREFIX):]
    if payload == DONE_PAYLOAD:
        return DONE

    try:
        return ProgressEvent.from_dict(json.loads(payload))
    except (ValueError, KeyError, TypeError, OverflowError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning(f"Skipping malformed stream frame ({e}): {payload[:200]!r}")
        return None
