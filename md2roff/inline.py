"""Inline formatting: strong, emphasis and code spans."""

from __future__ import annotations

from .buffer import LineBuffer
from .constants import EMPHASIS_OPENERS
from .dialects import RoffDialect
from .exceptions import UnterminatedCodeSpanError
from .models import ScanContext


def can_open_span(source: str, pos: int) -> bool:
    """Check whether an emphasis marker at `pos` may open a span.

    A marker opens only at the start of the document or after whitespace or
    one of ``({[,.;`'"``; elsewhere (as in ``a**b``) it is literal text.

    Examples:
        can_open_span("a **b**", 2)  # True
        can_open_span("a**b", 1)  # False
    """
    return pos == 0 or source[pos - 1] in EMPHASIS_OPENERS


class InlineFormatter:
    """Toggle strong/emphasis spans and copy inline code into a line buffer.

    Strong and emphasis are independent booleans on the shared `ScanContext`;
    a marker closes the span of its own kind when one is open and never looks
    at the other kind.

    Args:
        dialect: Supplies the font escape sequences.
        buffer: Line buffer receiving the formatted text.
        context: Scanner context holding the toggles.
    """

    def __init__(self, dialect: RoffDialect, buffer: LineBuffer, context: ScanContext):
        self.dialect = dialect
        self.buffer = buffer
        self.context = context

    def consume(self, source: str, pos: int) -> int | None:
        """Handle an inline marker at `pos`.

        Returns:
            int | None: Position after the consumed characters, or None when
            `pos` does not hold an inline marker.

        Raises:
            UnterminatedCodeSpanError: If a code span reaches the end of the
                document without a closing backtick.
        """
        char = source[pos]
        if char == "`":
            return self._code_span(source, pos)
        if char not in "*_":
            return None
        if source.startswith(char * 2, pos):
            return self._strong(source, pos)
        return self._emphasis(source, pos)

    def _strong(self, source: str, pos: int) -> int:
        if self.context.bold_active:
            self.context.bold_active = False
            self.buffer.append(self.dialect.font_off)
        elif can_open_span(source, pos):
            self.context.bold_active = True
            self.buffer.append(self.dialect.bold_on)
        else:
            self.buffer.append(source[pos : pos + 2])
        return pos + 2

    def _emphasis(self, source: str, pos: int) -> int:
        if self.context.italic_active:
            self.context.italic_active = False
            self.buffer.append(self.dialect.font_off)
        elif can_open_span(source, pos):
            self.context.italic_active = True
            self.buffer.append(self.dialect.italic_on)
        else:
            self.buffer.append(source[pos])
        return pos + 1

    def _code_span(self, source: str, pos: int) -> int:
        end = source.find("`", pos + 1)
        if end == -1:
            raise UnterminatedCodeSpanError(source.count("\n", 0, pos) + 1)
        self.buffer.append(self.dialect.code_on)
        self.buffer.append(source[pos + 1 : end])
        self.buffer.append(self.dialect.code_off)
        return end + 1
