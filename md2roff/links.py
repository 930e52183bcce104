"""Markdown link recognition.

Recognizes ``[text](target)``, ``![text](target)`` and the manual page form
``[name section](man)``. Images are rendered like links.
"""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import squeeze
from .events import Event, HyperLink, ManPageRef

MAN_TARGET = "man"
MAILTO_PREFIX = "mailto:"


@dataclass(frozen=True)
class LinkMatch:
    """A link found in the source.

    Attributes:
        text: Text between the brackets.
        target: Text between the parentheses.
        end: Position just past the closing parenthesis.
        is_image: Whether the link was written as ``![...](...)``.
    """

    text: str
    target: str
    end: int
    is_image: bool = False

    def to_event(self) -> Event:
        """Build the manual page reference or hyperlink event for this link.

        Examples:
            match_link("[ls 1](man)", 0).to_event()  # ManPageRef("ls", "1")
        """
        if self.target == MAN_TARGET:
            name, _, section = squeeze(self.text).partition(" ")
            return ManPageRef(name=name, section=section.strip() or None)
        target = self.target
        if "@" in target and target.startswith(MAILTO_PREFIX):
            target = target[len(MAILTO_PREFIX) :]
        return HyperLink(text=squeeze(self.text), target=target)


def match_link(source: str, pos: int) -> LinkMatch | None:
    """Match a link starting at `pos`.

    The first ``]`` after the opening bracket must be followed directly by
    ``(``, and a ``)`` must appear later in the source.

    Args:
        source: Whole document.
        pos: Position of ``[`` or of the ``!`` of ``![``.

    Returns:
        LinkMatch | None: The link, or None when the shape is absent.

    Examples:
        match_link("[Example](http://x.test)", 0).target  # "http://x.test"
        match_link("[no link] here", 0)  # None
    """
    is_image = source.startswith("![", pos)
    if is_image:
        text_start = pos + 2
    elif source.startswith("[", pos):
        text_start = pos + 1
    else:
        return None

    close_bracket = source.find("]", text_start)
    if close_bracket == -1 or not source.startswith("(", close_bracket + 1):
        return None

    close_paren = source.find(")", close_bracket + 2)
    if close_paren == -1:
        return None

    return LinkMatch(
        text=source[text_start:close_bracket],
        target=source[close_bracket + 2 : close_paren].strip(),
        end=close_paren + 1,
        is_image=is_image,
    )
