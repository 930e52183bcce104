"""Single-pass block scanner.

The scanner walks the document once, left to right, as a finite-state machine
with three states (see `ParserState`). Block constructs are recognized at the
start of a line, inline constructs while in prose, and fenced code is copied
line by line. Output is produced immediately through an `Emitter`; nothing is
kept beyond the current line buffer, the list stack and the inline toggles.
"""

from __future__ import annotations

import logging
import re
import shlex
import string

from .buffer import LineBuffer, squeeze
from .constants import (
    CODE_FENCE,
    DEFAULT_MAX_LIST_DEPTH,
    ESCAPES,
    FENCE_MAX_INDENT,
    MAX_ORDERED_DIGITS,
    RULE_CHARS,
    RULE_MIN_LENGTH,
    UNORDERED_MARKERS,
    WHITESPACE_CHARS,
)
from .emitter import Emitter
from .events import (
    BoxClose,
    BoxOpen,
    CodeBlockClose,
    CodeBlockOpen,
    CodeLine,
    HeaderClose,
    HeaderOpen,
    ItemClose,
    ItemOpen,
    LineBreak,
    ListClose,
    ListOpen,
    ParagraphBreak,
    SectionRule,
)
from .inline import InlineFormatter
from .links import match_link
from .lists import ListStack
from .models import ListKind, ParserState, ScanContext, TitleHeading

logger = logging.getLogger(__name__)

# Characters that may start something other than plain prose
_PROSE_SPECIAL = re.compile(r"[\\\n*_`\[!]")


def leading_whitespace_columns(line: str) -> int:
    """Compute the column width of leading whitespace.

    Tabs advance to the next multiple of four columns.

    Examples:
        leading_whitespace_columns("    text")  # 4
        leading_whitespace_columns(" \\ttext")  # 4
    """
    columns = 0
    for character in line:
        if character == " ":
            columns += 1
            continue
        if character == "\t":
            columns += 4 - (columns % 4)
            continue
        break
    return columns


def is_fence(line: str) -> bool:
    """Check whether `line` opens a fenced code block.

    Examples:
        is_fence("```python")  # True
        is_fence("    ```")  # False, indented too far
    """
    if leading_whitespace_columns(line) > FENCE_MAX_INDENT:
        return False
    return line.lstrip(" \t").startswith(CODE_FENCE)


def is_closing_fence(line: str) -> bool:
    """Check whether `line` closes a fenced code block.

    Only backticks, at least three, may follow the indentation; a fence line
    carrying an info string inside a block is code.

    Examples:
        is_closing_fence("```")  # True
        is_closing_fence("```bash")  # False
    """
    if not is_fence(line):
        return False
    text = line.strip(WHITESPACE_CHARS)
    return text == "`" * len(text)


def is_rule_line(line: str) -> bool:
    """Check whether `line` is a setext rule (``===``, ``---`` or ``***``).

    The trimmed line must consist of at least three copies of one rule
    character.

    Examples:
        is_rule_line("---")  # True
        is_rule_line("***bold***")  # False
    """
    text = line.strip(WHITESPACE_CHARS)
    return (
        len(text) >= RULE_MIN_LENGTH
        and text[0] in RULE_CHARS
        and text == text[0] * len(text)
    )


def match_list_marker(text: str) -> tuple[ListKind, int | None, int] | None:
    """Recognize a list marker at the start of `text`.

    Unordered markers are ``*``, ``+`` or ``-`` followed by a space or tab;
    only the marker itself is consumed. Ordered markers are digits followed by
    ``.``; the marker and any spaces or tabs after it are consumed. A run of
    more than nine digits is not a marker.

    Returns:
        tuple | None: ``(kind, written_number, width)`` or None.

    Examples:
        match_list_marker("- item")  # (ListKind.UNORDERED, None, 1)
        match_list_marker("12. item")  # (ListKind.ORDERED, 12, 4)
    """
    if len(text) >= 2 and text[0] in UNORDERED_MARKERS and text[1] in " \t":
        return ListKind.UNORDERED, None, 1

    digits = len(text) - len(text.lstrip(string.digits))
    if 0 < digits <= MAX_ORDERED_DIGITS and text[digits : digits + 1] == ".":
        width = digits + 1
        while text[width : width + 1] in (" ", "\t"):
            width += 1
        return ListKind.ORDERED, int(text[:digits]), width

    return None


def parse_title_heading(text: str) -> TitleHeading:
    """Split a man-style title line into its fields.

    Fields are separated by whitespace and may be double-quoted, as in
    ``md2roff 1 2019-02-10 "md2roff 1.1" "User Commands"``.

    Examples:
        parse_title_heading("ls 1").section  # "1"
    """
    raw = text.strip(WHITESPACE_CHARS)
    try:
        fields = shlex.split(raw)
    except ValueError:
        fields = raw.split()
    fields += [None] * (5 - len(fields))
    title, section, date, source, manual = fields[:5]
    return TitleHeading(
        raw=raw,
        title=title or "",
        section=section,
        date=date,
        source=source,
        manual=manual,
    )


def read_title_line(source: str) -> tuple[TitleHeading | None, int]:
    """Consume a leading ``# title section date source manual`` line.

    Returns:
        tuple[TitleHeading | None, int]: The parsed heading (None when the
        document does not start with ``#`` and a space or tab) and the position
        where scanning should start.
    """
    if not source.startswith(("# ", "#\t")):
        return None, 0
    end = source.find("\n")
    if end == -1:
        end = len(source)
    return parse_title_heading(source[2:end]), min(end + 1, len(source))


class BlockScanner:
    """Convert one Markdown document into a stream of roff output.

    Args:
        source: Whole document.
        emitter: Destination for events and text lines.
        max_list_depth: Bound on nested lists.
        start: Position where scanning begins (after a consumed title line).

    Examples:
        scanner = BlockScanner("# Title\\n\\nBody\\n", emitter)
        scanner.run()
    """

    def __init__(
        self,
        source: str,
        emitter: Emitter,
        max_list_depth: int = DEFAULT_MAX_LIST_DEPTH,
        start: int = 0,
    ):
        self.source = source
        self.pos = start
        self.emitter = emitter
        self.context = ScanContext()
        self.lists = ListStack(max_list_depth)
        self.buffer = LineBuffer()
        self.inline = InlineFormatter(emitter.dialect, self.buffer, self.context)
        self._transitions = {
            ParserState.AT_LINE_START: self._scan_line_start,
            ParserState.IN_PROSE: self._scan_prose,
            ParserState.IN_CODE_BLOCK: self._scan_code_line,
        }

    def run(self) -> None:
        """Scan the whole document and close whatever is still open.

        Raises:
            UnterminatedCodeSpanError: If an inline code span is never closed.
        """
        while self.pos < len(self.source):
            self._transitions[self.context.state]()
        self._finish()

    # Helpers

    def _line_end(self, pos: int) -> int:
        end = self.source.find("\n", pos)
        return len(self.source) if end == -1 else end

    def _advance_past(self, end: int) -> None:
        self.pos = min(end + 1, len(self.source))

    def _line_number(self) -> int:
        return self.source.count("\n", 0, self.pos) + 1

    # AT_LINE_START

    def _scan_line_start(self) -> None:
        if self.source.startswith("\\", self.pos):
            self.context.state = ParserState.IN_PROSE
            return

        end = self._line_end(self.pos)
        line = self.source[self.pos : end]
        for attempt in (
            self._try_blank_line,
            self._try_heading,
            self._try_list_item,
            self._try_open_fence,
            self._try_bare_rule,
        ):
            if attempt(line, end):
                return

        self.context.state = ParserState.IN_PROSE

    def _try_blank_line(self, line: str, end: int) -> bool:
        if line.strip(WHITESPACE_CHARS):
            return False

        self.emitter.flush(self.buffer)
        if self.lists:
            self._close_list()
        self.emitter.emit(ParagraphBreak())
        self._advance_past(end)
        return True

    def _try_heading(self, line: str, end: int) -> bool:
        if not line.startswith("#"):
            return False

        self.emitter.flush(self.buffer)
        level = len(line) - len(line.lstrip("#"))
        text = line[level:].strip(WHITESPACE_CHARS)

        if text.endswith("#"):
            logger.debug("boxed heading: %r", text)
            text = text.rstrip("#").strip(WHITESPACE_CHARS)
            self.emitter.emit(BoxOpen())
            self.emitter.emit(LineBreak())
            if text:
                self.emitter.write_line(text)
            self.emitter.emit(LineBreak())
            self.emitter.emit(BoxClose())
        else:
            logger.debug("heading level %d: %r", level, text)
            self.emitter.emit(HeaderOpen(level))
            self.emitter.write(self.emitter.dialect.heading_text(text))
            self.emitter.emit(HeaderClose(level))

        self._advance_past(end)
        self.context.state = ParserState.AT_LINE_START
        return True

    def _try_list_item(self, line: str, end: int) -> bool:
        stripped = line.lstrip(" \t")
        marker = match_list_marker(stripped)
        if marker is None:
            return False

        kind, written_number, width = marker
        self.emitter.flush(self.buffer)
        start = 1 if written_number is None else written_number
        self._open_item(kind, start, leading_whitespace_columns(line))
        self.pos += len(line) - len(stripped) + width
        self.context.state = ParserState.IN_PROSE
        return True

    def _try_open_fence(self, line: str, end: int) -> bool:
        if not is_fence(line):
            return False

        logger.debug("code block opens")
        self.emitter.flush(self.buffer)
        self.emitter.emit(CodeBlockOpen())
        # The rest of the fence line (an info string) is not output
        self._advance_past(end)
        self.context.state = ParserState.IN_CODE_BLOCK
        return True

    def _try_bare_rule(self, line: str, end: int) -> bool:
        if self.buffer.getvalue().strip(WHITESPACE_CHARS) or not is_rule_line(line):
            return False

        self.emitter.flush(self.buffer)
        self.emitter.emit(SectionRule())
        self._advance_past(end)
        return True

    # Lists

    def _open_item(self, kind: ListKind, start: int, indent: int) -> None:
        top = self.lists.top
        if top is not None and indent > top.indent and self.lists.is_full:
            logger.warning(
                "line %d: lists nested deeper than %d levels; continuing the current list",
                self._line_number(),
                self.lists.max_depth,
            )
            self._close_item()
        elif top is None or indent > top.indent:
            self._push_list(kind, start, indent)
        else:
            while self.lists.depth > 1 and indent < self.lists.top.indent:
                self._close_list()
            # A marker of the other kind continues the open list
            self._close_item()

        frame = self.lists.top
        self.emitter.emit(ItemOpen(frame.kind, self.lists.depth, self.lists.open_item()))

    def _push_list(self, kind: ListKind, start: int, indent: int) -> None:
        self.lists.push(kind, start=start, indent=indent)
        self.emitter.emit(ListOpen(kind, self.lists.depth))

    def _close_item(self) -> None:
        self.emitter.emit(ItemClose(self.lists.top.kind, self.lists.depth))

    def _close_list(self) -> None:
        self._close_item()
        self.emitter.emit(ListClose(self.lists.top.kind, self.lists.depth))
        self.lists.pop()

    # IN_CODE_BLOCK

    def _scan_code_line(self) -> None:
        end = self._line_end(self.pos)
        line = self.source[self.pos : end]
        self._advance_past(end)

        if is_closing_fence(line):
            logger.debug("code block closes")
            self.emitter.emit(CodeBlockClose())
            self.context.state = ParserState.AT_LINE_START
            return

        self.emitter.emit(CodeLine(line))

    # IN_PROSE

    def _scan_prose(self) -> None:
        match = _PROSE_SPECIAL.search(self.source, self.pos)
        special = len(self.source) if match is None else match.start()
        if special > self.pos:
            self.buffer.append(self.source[self.pos : special])
            self.pos = special
            return

        char = self.source[self.pos]
        if char == "\\":
            self._escape()
        elif char == "\n":
            self._newline()
        elif char in "[!":
            self._link()
        else:
            self.pos = self.inline.consume(self.source, self.pos)

    def _escape(self) -> None:
        escaped = self.source[self.pos + 1 : self.pos + 2]
        if not escaped:
            self.buffer.append("\\")
            self.pos += 1
            return
        self.buffer.append(ESCAPES.get(escaped, escaped))
        self.pos += 2

    def _newline(self) -> None:
        next_start = self.pos + 1
        next_end = self._line_end(next_start)
        if is_rule_line(self.source[next_start:next_end]):
            self._setext_heading()
            self._advance_past(next_end)
        else:
            self.buffer.append(" ")
            self.buffer.mark_line()
            self.pos = next_start
        self.context.state = ParserState.AT_LINE_START

    def _setext_heading(self) -> None:
        earlier, current = self.buffer.split_last_line()
        self.buffer.clear()

        title = squeeze(current)
        if not title:
            earlier, title = "", squeeze(earlier)
        earlier = squeeze(earlier)
        if earlier:
            self.emitter.write_line(earlier)

        logger.debug("setext heading: %r", title)
        self.emitter.emit(SectionRule(title))

    def _link(self) -> None:
        link = match_link(self.source, self.pos)
        if link is None:
            self.buffer.append(self.source[self.pos])
            self.pos += 1
            return

        self.emitter.flush(self.buffer)
        self.emitter.emit(link.to_event())
        self.pos = link.end

    # End of document

    def _finish(self) -> None:
        if self.context.in_code_block:
            logger.warning("code block is not closed at end of document")
            self.emitter.emit(CodeBlockClose())
        self.emitter.flush(self.buffer)
        while self.lists:
            self._close_list()
