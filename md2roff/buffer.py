"""Line buffer that collects inline text until a block boundary."""

from __future__ import annotations

from .constants import WHITESPACE_CHARS, WHITESPACE_RUN_PATTERN


def squeeze(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim both ends.

    Args:
        text: Text to normalize.

    Returns:
        str: Normalized text; empty when `text` holds only whitespace.

    Examples:
        squeeze("  a \\t b\\n")  # "a b"
    """
    return WHITESPACE_RUN_PATTERN.sub(" ", text).strip(WHITESPACE_CHARS)


class LineBuffer:
    """Accumulates characters for the next flushed output line.

    Besides the text itself, the buffer remembers the offset at which the
    current source line began, so a setext rule can turn only that line into a
    heading while earlier lines of the paragraph are flushed as body text.
    """

    __slots__ = ("_parts", "_size", "_line_mark")

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._size = 0
        self._line_mark = 0

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def append(self, text: str) -> None:
        if text:
            self._parts.append(text)
            self._size += len(text)

    def mark_line(self) -> None:
        """Record that a new source line starts at the current end."""
        self._line_mark = self._size

    def getvalue(self) -> str:
        return "".join(self._parts)

    def split_last_line(self) -> tuple[str, str]:
        """Return the text before the current line mark and the text after it."""
        value = self.getvalue()
        return value[: self._line_mark], value[self._line_mark :]

    def clear(self) -> None:
        self._parts.clear()
        self._size = 0
        self._line_mark = 0

    def drain(self) -> str:
        """Return the squeezed buffer contents and empty the buffer."""
        value = squeeze(self.getvalue())
        self.clear()
        return value
