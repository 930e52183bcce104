"""Roff macro package dialects.

Each dialect is a strategy object that turns an abstract event into the literal
macro text of one macro package. Dialects hold no conversion state: list
glyphs and numbers come from the depth and number carried on the events.
"""

from __future__ import annotations

from .config import RoffConfig
from .events import (
    BoxClose,
    BoxOpen,
    CodeBlockClose,
    CodeBlockOpen,
    CodeLine,
    DocumentStart,
    Event,
    HeaderClose,
    HeaderOpen,
    HyperLink,
    ItemClose,
    ItemOpen,
    LineBreak,
    ListClose,
    ListOpen,
    ManPageRef,
    ParagraphBreak,
    SectionRule,
)
from .models import ListKind

_EVENT_METHODS: dict[type[Event], str] = {
    DocumentStart: "document_start",
    ParagraphBreak: "paragraph_break",
    LineBreak: "line_break",
    HeaderOpen: "header_open",
    HeaderClose: "header_close",
    SectionRule: "section_rule",
    ListOpen: "list_open",
    ListClose: "list_close",
    ItemOpen: "item_open",
    ItemClose: "item_close",
    CodeBlockOpen: "code_block_open",
    CodeLine: "code_line",
    CodeBlockClose: "code_block_close",
    ManPageRef: "man_page_ref",
    HyperLink: "hyperlink",
    BoxOpen: "box_open",
    BoxClose: "box_close",
}

SECTION = 1
SUBSECTION = 2
MINOR = 3


def heading_rank(level: int) -> int:
    """Map a Markdown heading level to a section rank.

    Levels 1 and 2 are sections, level 3 a subsection and anything deeper a
    minor heading.

    Examples:
        heading_rank(2)  # 1
        heading_rank(5)  # 3
    """
    if level <= 2:
        return SECTION
    if level == 3:
        return SUBSECTION
    return MINOR


def quote_argument(text: str) -> str:
    """Escape double quotes inside a quoted macro argument.

    Examples:
        quote_argument('say "hi"')  # 'say \\(dqhi\\(dq'
    """
    return text.replace('"', "\\(dq")


class RoffDialect:
    """Base dialect with the spellings shared by most macro packages."""

    name = ""
    package = ""
    consumes_title = False
    bold_on = "\\fB"
    italic_on = "\\fI"
    font_off = "\\fP"
    code_on = "`\\f[CR]"
    code_off = "\\fP'"

    def __init__(self, config: RoffConfig | None = None):
        self.config = config or RoffConfig()

    def render(self, event: Event) -> str:
        """Render `event` as roff text.

        Raises:
            TypeError: If the event type is unknown.
        """
        try:
            method_name = _EVENT_METHODS[type(event)]
        except KeyError as error:
            raise TypeError(f"Cannot render {type(event).__name__}") from error
        return getattr(self, method_name)(event)

    def document_start(self, event: DocumentStart) -> str:
        lines = ['.\\" x-roff document', f".do mso {self.package}"]
        lines.extend(self.title_lines(event))
        return "".join(f"{line}\n" for line in lines)

    def title_lines(self, event: DocumentStart) -> list[str]:
        return []

    def paragraph_break(self, event: ParagraphBreak) -> str:
        return ".PP\n"

    def line_break(self, event: LineBreak) -> str:
        return ".br\n"

    def header_open(self, event: HeaderOpen) -> str:
        if heading_rank(event.level) == SECTION:
            return ".SH "
        return ".SS "

    def header_close(self, event: HeaderClose) -> str:
        return "\n"

    def heading_text(self, text: str) -> str:
        """Prepare heading text for the header request."""
        return text

    def section_rule(self, event: SectionRule) -> str:
        if not event.text:
            return self.paragraph_break(ParagraphBreak())
        return (
            self.header_open(HeaderOpen(SECTION))
            + self.heading_text(event.text)
            + self.header_close(HeaderClose(SECTION))
        )

    def list_open(self, event: ListOpen) -> str:
        return ""

    def list_close(self, event: ListClose) -> str:
        return ""

    def item_open(self, event: ItemOpen) -> str:
        return ""

    def item_close(self, event: ItemClose) -> str:
        return ""

    def code_block_open(self, event: CodeBlockOpen) -> str:
        return ".RS 4\n.EX\n"

    def code_line(self, event: CodeLine) -> str:
        # A leading dot would be read as a request
        if event.text.startswith("."):
            return f".cc !\n{event.text}\n!cc .\n"
        return f"{event.text}\n"

    def code_block_close(self, event: CodeBlockClose) -> str:
        return ".EE\n.RE\n"

    def man_page_ref(self, event: ManPageRef) -> str:
        if event.section:
            return f"{event.name} {event.section}\n"
        return f"{event.name}\n"

    def hyperlink(self, event: HyperLink) -> str:
        return f"{event.text} <{event.target}>\n"

    def box_open(self, event: BoxOpen) -> str:
        return ".FT B\n"

    def box_close(self, event: BoxClose) -> str:
        return ".FT P\n"


class ManDialect(RoffDialect):
    """Linux man pages (``man.tmac``)."""

    name = "man"
    package = "man.tmac"
    consumes_title = True

    def title_lines(self, event: DocumentStart) -> list[str]:
        if event.heading is not None:
            return [f".TH {event.heading.raw}"]
        return [
            f".TH {event.docname} {self.config.man_section} "
            f"{event.date.isoformat()} {self.config.man_source}"
        ]

    def header_open(self, event: HeaderOpen) -> str:
        if heading_rank(event.level) == MINOR:
            return ".TP\n\\fB"
        return super().header_open(event)

    def header_close(self, event: HeaderClose) -> str:
        if heading_rank(event.level) == MINOR:
            return "\\fR\n"
        return "\n"

    def list_open(self, event: ListOpen) -> str:
        return ".RS 4\n" if event.depth > 1 else ""

    def list_close(self, event: ListClose) -> str:
        return ".RE\n" if event.depth > 1 else ""

    def item_open(self, event: ItemOpen) -> str:
        if event.kind is ListKind.ORDERED:
            return f".IP {event.number}. 4\n"
        return ".IP \\(bu 4\n"

    def man_page_ref(self, event: ManPageRef) -> str:
        if event.section:
            return f"\\fB{event.name}\\fP({event.section})\n"
        return f"\\fB{event.name}\\fP\n"

    def hyperlink(self, event: HyperLink) -> str:
        if event.is_mail:
            return f".MT {event.target}\n{event.text}\n.ME\n"
        return f".UR {event.target}\n{event.text}\n.UE\n"

    def box_open(self, event: BoxOpen) -> str:
        return ".B\n"


class MdocDialect(RoffDialect):
    """BSD manual pages (``mdoc.tmac``)."""

    name = "mdoc"
    package = "mdoc.tmac"
    consumes_title = True

    def title_lines(self, event: DocumentStart) -> list[str]:
        heading = event.heading
        title = heading.title if heading is not None else event.docname
        section = (heading and heading.section) or self.config.man_section
        date = (heading and heading.date) or event.date.isoformat()
        source = (heading and heading.source) or self.config.man_source
        return [f".Dd {date}", f".Dt {title.upper()} {section}", f".Os {source}"]

    def paragraph_break(self, event: ParagraphBreak) -> str:
        return ".Pp\n"

    def header_open(self, event: HeaderOpen) -> str:
        if heading_rank(event.level) == SECTION:
            return ".Sh "
        return ".Ss "

    def list_open(self, event: ListOpen) -> str:
        if event.kind is ListKind.ORDERED:
            return ".Bl -enum -offset indent\n"
        glyph = "bullet" if event.depth % 2 else "dash"
        return f".Bl -{glyph} -offset indent\n"

    def list_close(self, event: ListClose) -> str:
        return ".El\n"

    def item_open(self, event: ItemOpen) -> str:
        return ".It\n"

    def code_block_open(self, event: CodeBlockOpen) -> str:
        return ".Bd -literal -offset indent\n"

    def code_block_close(self, event: CodeBlockClose) -> str:
        return ".Ed\n"

    def man_page_ref(self, event: ManPageRef) -> str:
        if event.section:
            return f".Xr {event.name} {event.section}\n"
        return f".Xr {event.name}\n"

    def hyperlink(self, event: HyperLink) -> str:
        if event.is_mail:
            return f".An {event.text} Aq Mt {event.target}\n"
        return f'.Lk {event.target} "{event.text}"\n'


class MmDialect(RoffDialect):
    """Memorandum macros (``m.tmac``)."""

    name = "mm"
    package = "m.tmac"

    def paragraph_break(self, event: ParagraphBreak) -> str:
        return ".P\n"

    def header_open(self, event: HeaderOpen) -> str:
        return f'.H {heading_rank(event.level)} "'

    def header_close(self, event: HeaderClose) -> str:
        return '"\n'

    def heading_text(self, text: str) -> str:
        return quote_argument(text)

    def list_open(self, event: ListOpen) -> str:
        return ".AL\n" if event.kind is ListKind.ORDERED else ".BL\n"

    def list_close(self, event: ListClose) -> str:
        return ".LE\n"

    def item_open(self, event: ItemOpen) -> str:
        return ".LI\n"


class MomDialect(RoffDialect):
    """The mom typesetting macros (``mom.tmac``)."""

    name = "mom"
    package = "mom.tmac"
    bold_on = "\\*[BD]"
    italic_on = "\\*[IT]"
    font_off = "\\*[PREV]"
    code_on = "`\\*[CODE]"
    code_off = "\\*[CODE OFF]'"

    _ORDERED_STYLES = {1: "DIGIT", 2: "ALPHA", 3: "DIGIT", 4: "alpha"}

    def title_lines(self, event: DocumentStart) -> list[str]:
        return [
            f'.TITLE "{quote_argument(event.docname)}"',
            f'.AUTHOR "{quote_argument(self.config.mom_author)}"',
            f".PAPER {self.config.mom_paper}",
            f".PRINTSTYLE {self.config.mom_printstyle}",
            ".START",
        ]

    def line_break(self, event: LineBreak) -> str:
        return ".BR\n"

    def header_open(self, event: HeaderOpen) -> str:
        return f'.HEADING {heading_rank(event.level)} "'

    def header_close(self, event: HeaderClose) -> str:
        return '"\n'

    def heading_text(self, text: str) -> str:
        return quote_argument(text)

    def list_open(self, event: ListOpen) -> str:
        if event.kind is ListKind.ORDERED:
            return f".LIST {self._ORDERED_STYLES.get(event.depth, 'DIGIT')}\n"
        return f".LIST {'BULLET' if event.depth % 2 else 'DASH'}\n"

    def list_close(self, event: ListClose) -> str:
        return ".LIST OFF\n"

    def item_open(self, event: ItemOpen) -> str:
        return ".ITEM\n"

    def code_block_open(self, event: CodeBlockOpen) -> str:
        return ".CODE\n"

    def code_line(self, event: CodeLine) -> str:
        if event.text.startswith("."):
            return f".ESC_CHAR !\n{event.text}\n.ESC_CHAR .\n"
        return f"{event.text}\n"

    def code_block_close(self, event: CodeBlockClose) -> str:
        return ".CODE OFF\n"

    def hyperlink(self, event: HyperLink) -> str:
        return f"{event.text} \\*[UL]{event.target}\\*[ULX]\n"

    def box_open(self, event: BoxOpen) -> str:
        return ".DRH\n"

    def box_close(self, event: BoxClose) -> str:
        return ".DRH\n"


DIALECTS: dict[str, type[RoffDialect]] = {
    dialect.name: dialect for dialect in (ManDialect, MdocDialect, MmDialect, MomDialect)
}
DIALECT_NAMES = tuple(DIALECTS)


def get_dialect(name: str, config: RoffConfig | None = None) -> RoffDialect:
    """Instantiate the dialect registered under `name`.

    Args:
        name: One of ``man``, ``mdoc``, ``mm`` or ``mom``.
        config: Configuration supplying title defaults.

    Returns:
        RoffDialect: Dialect strategy object.

    Raises:
        ValueError: If `name` is not a known dialect.

    Examples:
        get_dialect("mdoc").render(ParagraphBreak())  # ".Pp\\n"
    """
    try:
        dialect_class = DIALECTS[name]
    except KeyError as error:
        raise ValueError(
            f"Unknown dialect {name!r} (expected one of: {', '.join(DIALECT_NAMES)})"
        ) from error
    return dialect_class(config)
