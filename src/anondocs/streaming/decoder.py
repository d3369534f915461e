"""Line framing for server-sent event byte streams.

Bytes arrive from the transport in arbitrary chunks: a chunk may end in the
middle of a line or in the middle of a multi-byte UTF-8 character. The
decoder keeps both pieces of partial state between chunks and only hands out
complete lines.
"""

import codecs
import logging
from typing import AsyncIterable, AsyncIterator, List

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"


class FrameDecoder:
    """Incremental bytes-to-lines decoder.

    Example:
        >>> decoder = FrameDecoder()
        >>> decoder.feed(b"data: one\\nda")
        ['data: one']
        >>> decoder.feed(b"ta: two\\n")
        ['data: two']
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        # "replace" only affects truly invalid bytes; an incomplete sequence
        # at the end of a chunk is held until the next feed.
        self._decoder = codecs.getincrementaldecoder(encoding)("replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Decoded text that does not yet form a complete line."""
        return self._buffer

    def feed(self, chunk: bytes) -> List[str]:
        """Decode a chunk and return the lines it completes, in order.

        Args:
            chunk: Raw bytes as delivered by the transport.

        Returns:
            Complete lines without their terminator. A trailing ``\\r`` is
            removed so CRLF streams yield the same lines as LF streams.
        """
        self._buffer += self._decoder.decode(chunk)
        if LINE_SEPARATOR not in self._buffer:
            return []

        *lines, self._buffer = self._buffer.split(LINE_SEPARATOR)
        return [line[:-1] if line.endswith("\r") else line for line in lines]


async def iter_lines(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Yield complete lines from an async stream of byte chunks.

    Text left over when the stream ends is not a complete line and is
    dropped. Errors raised by the underlying stream propagate unchanged.
    """
    decoder = FrameDecoder()
    async for chunk in chunks:
        for line in decoder.feed(chunk):
            yield line

    if decoder.pending:
        logger.debug(f"Discarding {len(decoder.pending)} chars of unterminated stream data")
