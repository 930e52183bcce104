"""Bounded stack of open Markdown lists."""

from __future__ import annotations

from .constants import DEFAULT_MAX_LIST_DEPTH
from .models import ListFrame, ListKind


class ListStack:
    """Ordered sequence of open list frames; the top is the innermost list.

    Args:
        max_depth: Maximum number of simultaneously open lists.

    Examples:
        stack = ListStack()
        stack.push(ListKind.ORDERED, start=3)
        stack.open_item()  # 3
        stack.open_item()  # 4
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_LIST_DEPTH):
        if max_depth <= 0:
            raise ValueError("`max_depth` must be a positive integer")
        self.max_depth = max_depth
        self._frames: list[ListFrame] = []

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def top(self) -> ListFrame | None:
        return self._frames[-1] if self._frames else None

    @property
    def is_full(self) -> bool:
        return len(self._frames) >= self.max_depth

    def push(self, kind: ListKind, start: int = 1, indent: int = 0) -> ListFrame:
        """Open a new list level.

        Raises:
            OverflowError: If the stack already holds `max_depth` frames.
        """
        if self.is_full:
            raise OverflowError(f"List nesting exceeds {self.max_depth} levels")
        frame = ListFrame(kind=kind, counter=start, indent=indent)
        self._frames.append(frame)
        return frame

    def pop(self) -> ListFrame:
        if not self._frames:
            raise IndexError("pop from an empty list stack")
        return self._frames.pop()

    def open_item(self) -> int | None:
        """Advance the top frame for a new item.

        Returns:
            int | None: The item's number for ordered lists, None otherwise.
        """
        frame = self.top
        if frame is None:
            raise IndexError("no open list")
        if frame.kind is not ListKind.ORDERED:
            return None
        number = frame.counter
        frame.counter += 1
        return number
