"""Abstract roff events produced by the scanner and rendered by a dialect."""

from __future__ import annotations

import datetime
from dataclasses import dataclass

from .models import ListKind, TitleHeading


@dataclass(frozen=True)
class Event:
    """Base class for every event."""


@dataclass(frozen=True)
class DocumentStart(Event):
    """Start of a document: macro package selection and title heading.

    Attributes:
        docname: Name of the input (filename or ``"stdin"``).
        date: Date used when the document carries no title line.
        heading: Parsed leading ``# ...`` title line, when one was consumed.
    """

    docname: str
    date: datetime.date
    heading: TitleHeading | None = None


@dataclass(frozen=True)
class ParagraphBreak(Event):
    pass


@dataclass(frozen=True)
class LineBreak(Event):
    pass


@dataclass(frozen=True)
class HeaderOpen(Event):
    level: int


@dataclass(frozen=True)
class HeaderClose(Event):
    level: int


@dataclass(frozen=True)
class SectionRule(Event):
    """A setext rule; `text` is the retitled line, empty for a bare rule."""

    text: str = ""


@dataclass(frozen=True)
class ListOpen(Event):
    kind: ListKind
    depth: int


@dataclass(frozen=True)
class ListClose(Event):
    kind: ListKind
    depth: int


@dataclass(frozen=True)
class ItemOpen(Event):
    """A list item starts; `number` is set for ordered lists only."""

    kind: ListKind
    depth: int
    number: int | None = None


@dataclass(frozen=True)
class ItemClose(Event):
    kind: ListKind
    depth: int


@dataclass(frozen=True)
class CodeBlockOpen(Event):
    pass


@dataclass(frozen=True)
class CodeLine(Event):
    """One verbatim line of a fenced code block, without its line ending."""

    text: str


@dataclass(frozen=True)
class CodeBlockClose(Event):
    pass


@dataclass(frozen=True)
class ManPageRef(Event):
    name: str
    section: str | None = None


@dataclass(frozen=True)
class HyperLink(Event):
    text: str
    target: str

    @property
    def is_mail(self) -> bool:
        return "@" in self.target


@dataclass(frozen=True)
class BoxOpen(Event):
    pass


@dataclass(frozen=True)
class BoxClose(Event):
    pass
