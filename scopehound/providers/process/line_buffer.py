"""Chunk-to-line adapter for streamed process output."""

from __future__ import annotations

import codecs
from collections.abc import Callable


class LineBuffer:
    """Turns arbitrarily split byte chunks into complete text lines.

    Bytes are decoded incrementally, so a multi-byte character split across
    two chunks is decoded correctly. Each complete line is passed to
    ``on_line`` without its terminator (``\\n`` or ``\\r\\n``). A trailing
    partial line is kept until the next chunk, or until ``close()``.
    """

    def __init__(
        self, on_line: Callable[[str], None], encoding: str = "utf-8"
    ) -> None:
        self._on_line = on_line
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""
        self._closed = False

    @property
    def pending(self) -> str:
        """Text received after the last line terminator."""
        return self._pending

    def feed(self, chunk: bytes) -> str:
        """Consume a chunk and emit every line it completes.

        Returns:
            The decoded text of the chunk, for callers accumulating the stream
        """
        if self._closed:
            raise ValueError("LineBuffer is closed")
        text = self._decoder.decode(chunk)
        self._split(text)
        return text

    def close(self) -> str:
        """Flush the decoder and emit any unterminated last line."""
        if self._closed:
            return ""
        self._closed = True
        text = self._decoder.decode(b"", final=True)
        self._split(text)
        if self._pending:
            line, self._pending = self._pending, ""
            self._emit(line)
        return text

    def _split(self, text: str) -> None:
        if not text:
            return
        data = self._pending + text
        *lines, self._pending = data.split("\n")
        for line in lines:
            self._emit(line)

    def _emit(self, line: str) -> None:
        if line.endswith("\r"):
            line = line[:-1]
        self._on_line(line)
