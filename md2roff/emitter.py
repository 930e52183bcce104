"""Writes rendered events and flushed text lines to an output sink."""

from __future__ import annotations

import logging
from typing import TextIO

from .buffer import LineBuffer
from .dialects import RoffDialect
from .events import Event

logger = logging.getLogger(__name__)


class Emitter:
    """Render events through a dialect and write them to `sink`.

    Args:
        dialect: Dialect strategy used for every event.
        sink: Text stream receiving the roff output.
    """

    def __init__(self, dialect: RoffDialect, sink: TextIO):
        self.dialect = dialect
        self.sink = sink

    def emit(self, event: Event) -> None:
        logger.debug("emit %r", event)
        self.sink.write(self.dialect.render(event))

    def write(self, text: str) -> None:
        """Write `text` as is, without a trailing newline."""
        self.sink.write(text)

    def write_line(self, text: str) -> None:
        self.sink.write(f"{text}\n")

    def flush(self, buffer: LineBuffer) -> None:
        """Write the squeezed contents of `buffer` as one line and empty it.

        Nothing is written when the buffer holds only whitespace.
        """
        if not buffer:
            return
        line = buffer.drain()
        if line:
            self.write_line(line)
