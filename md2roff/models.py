"""Data models for md2roff."""

from dataclasses import dataclass
from enum import Enum, auto


class ParserState(Enum):
    """Scanner states used while walking Markdown content.

    Attributes:
        AT_LINE_START: First character of a source line; block constructs are
            recognized here.
        IN_PROSE: Ordinary text inside a line.
        IN_CODE_BLOCK: Inside a fenced code block.
    """

    AT_LINE_START = auto()
    IN_PROSE = auto()
    IN_CODE_BLOCK = auto()


class ListKind(Enum):
    """Kinds of Markdown lists."""

    ORDERED = auto()
    UNORDERED = auto()


@dataclass
class ScanContext:
    """Encapsulate scanner state carried across a whole document.

    Attributes:
        state: Current scanner state.
        bold_active: Whether a strong span is open.
        italic_active: Whether an emphasis span is open.
    """

    state: ParserState = ParserState.AT_LINE_START
    bold_active: bool = False
    italic_active: bool = False

    @property
    def at_line_start(self) -> bool:
        return self.state is ParserState.AT_LINE_START

    @property
    def in_code_block(self) -> bool:
        return self.state is ParserState.IN_CODE_BLOCK


@dataclass
class ListFrame:
    """One open list level.

    Attributes:
        kind: Ordered or unordered.
        counter: Number of the next ordered item.
        indent: Indentation columns of the marker that opened the list.
    """

    kind: ListKind
    counter: int = 1
    indent: int = 0


@dataclass
class TitleHeading:
    """Fields of a man-style title line (``# title section date source manual``).

    Attributes:
        raw: Text of the line after the leading ``#``, unmodified.
        title: Page title.
        section: Manual section, if given.
        date: Date string, if given.
        source: Source or operating system, if given.
        manual: Manual name, if given.
    """

    raw: str
    title: str
    section: str | None = None
    date: str | None = None
    source: str | None = None
    manual: str | None = None
