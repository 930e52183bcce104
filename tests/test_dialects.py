import datetime

import pytest

from md2roff.config import RoffConfig, VALID_DIALECTS
from md2roff.dialects import DIALECT_NAMES, RoffDialect, get_dialect, heading_rank, quote_argument
from md2roff.events import (
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
from md2roff.models import ListKind, TitleHeading

DATE = datetime.date(2019, 2, 10)
ORDERED = ListKind.ORDERED
UNORDERED = ListKind.UNORDERED


def test_dialect_registry_matches_config_choices():
    assert set(DIALECT_NAMES) == set(VALID_DIALECTS)


def test_get_dialect_rejects_unknown_names():
    with pytest.raises(ValueError, match="Unknown dialect"):
        get_dialect("troff")


def test_render_rejects_unknown_events():
    class Stray(Event):
        pass

    with pytest.raises(TypeError):
        get_dialect("man").render(Stray())


def test_heading_rank():
    assert [heading_rank(level) for level in range(1, 7)] == [1, 1, 2, 3, 3, 3]


@pytest.mark.parametrize("name", DIALECT_NAMES)
def test_every_dialect_renders_every_event(name: str):
    dialect = get_dialect(name)
    events = [
        DocumentStart("doc", DATE),
        ParagraphBreak(),
        LineBreak(),
        HeaderOpen(1),
        HeaderClose(1),
        SectionRule("Title"),
        SectionRule(),
        ListOpen(ORDERED, 1),
        ItemOpen(ORDERED, 1, 1),
        ItemClose(ORDERED, 1),
        ListClose(ORDERED, 1),
        CodeBlockOpen(),
        CodeLine("code"),
        CodeBlockClose(),
        ManPageRef("ls", "1"),
        HyperLink("text", "http://x.test"),
        BoxOpen(),
        BoxClose(),
    ]

    for event in events:
        assert isinstance(dialect.render(event), str)


@pytest.mark.parametrize(
    ("name", "package"),
    [("man", "man.tmac"), ("mdoc", "mdoc.tmac"), ("mm", "m.tmac"), ("mom", "mom.tmac")],
)
def test_document_start_loads_macro_package(name: str, package: str):
    lines = get_dialect(name).render(DocumentStart("doc", DATE)).splitlines()

    assert lines[0] == '.\\" x-roff document'
    assert lines[1] == f".do mso {package}"


def test_man_title_from_name_and_date():
    config = RoffConfig(man_section="1", man_source="md2roff")
    text = get_dialect("man", config).render(DocumentStart("doc", DATE))

    assert text.endswith(".TH doc 1 2019-02-10 md2roff\n")


def test_man_title_from_heading_is_verbatim():
    heading = TitleHeading(raw='ls 1 2020-01-01 "GNU" "User"', title="ls")
    text = get_dialect("man").render(DocumentStart("doc", DATE, heading))

    assert text.endswith('.TH ls 1 2020-01-01 "GNU" "User"\n')


def test_mdoc_title_lines():
    heading = TitleHeading(raw="ls 1", title="ls", section="1")
    text = get_dialect("mdoc").render(DocumentStart("doc", DATE, heading))

    assert text.endswith(".Dd 2019-02-10\n.Dt LS 1\n.Os document\n")


def test_mom_preamble_uses_config():
    config = RoffConfig(mom_author="Jane", mom_paper="LETTER", mom_printstyle="TYPEWRITE")
    text = get_dialect("mom", config).render(DocumentStart("notes", DATE))

    assert text.endswith(
        '.TITLE "notes"\n.AUTHOR "Jane"\n.PAPER LETTER\n.PRINTSTYLE TYPEWRITE\n.START\n'
    )


def test_mm_has_no_title_lines():
    text = get_dialect("mm").render(DocumentStart("doc", DATE))

    assert text == '.\\" x-roff document\n.do mso m.tmac\n'


@pytest.mark.parametrize(
    ("name", "expected"),
    [("man", ".PP\n"), ("mdoc", ".Pp\n"), ("mm", ".P\n"), ("mom", ".PP\n")],
)
def test_paragraph_break(name: str, expected: str):
    assert get_dialect(name).render(ParagraphBreak()) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [("man", ".br\n"), ("mdoc", ".br\n"), ("mm", ".br\n"), ("mom", ".BR\n")],
)
def test_line_break(name: str, expected: str):
    assert get_dialect(name).render(LineBreak()) == expected


@pytest.mark.parametrize(
    ("name", "level", "expected"),
    [
        ("man", 1, ".SH Name\n"),
        ("man", 3, ".SS Name\n"),
        ("man", 4, ".TP\n\\fBName\\fR\n"),
        ("mdoc", 2, ".Sh Name\n"),
        ("mdoc", 3, ".Ss Name\n"),
        ("mdoc", 5, ".Ss Name\n"),
        ("mm", 1, '.H 1 "Name"\n'),
        ("mm", 4, '.H 3 "Name"\n'),
        ("mom", 2, '.HEADING 1 "Name"\n'),
        ("mom", 3, '.HEADING 2 "Name"\n'),
    ],
)
def test_headings(name: str, level: int, expected: str):
    dialect = get_dialect(name)

    rendered = dialect.render(HeaderOpen(level)) + "Name" + dialect.render(HeaderClose(level))

    assert rendered == expected


def test_section_rule_without_text_is_paragraph_break():
    assert get_dialect("mdoc").render(SectionRule()) == ".Pp\n"
    assert get_dialect("mom").render(SectionRule("Title")) == '.HEADING 1 "Title"\n'


def test_man_lists():
    man = get_dialect("man")

    assert man.render(ListOpen(ORDERED, 1)) == ""
    assert man.render(ListOpen(UNORDERED, 2)) == ".RS 4\n"
    assert man.render(ListClose(UNORDERED, 2)) == ".RE\n"
    assert man.render(ItemOpen(ORDERED, 1, 7)) == ".IP 7. 4\n"
    assert man.render(ItemOpen(UNORDERED, 1)) == ".IP \\(bu 4\n"
    assert man.render(ItemClose(UNORDERED, 1)) == ""


def test_mdoc_lists_alternate_glyphs():
    mdoc = get_dialect("mdoc")

    assert mdoc.render(ListOpen(ORDERED, 1)) == ".Bl -enum -offset indent\n"
    assert mdoc.render(ListOpen(UNORDERED, 1)) == ".Bl -bullet -offset indent\n"
    assert mdoc.render(ListOpen(UNORDERED, 2)) == ".Bl -dash -offset indent\n"
    assert mdoc.render(ItemOpen(UNORDERED, 1)) == ".It\n"
    assert mdoc.render(ListClose(UNORDERED, 1)) == ".El\n"


def test_mm_lists():
    mm = get_dialect("mm")

    assert mm.render(ListOpen(ORDERED, 1)) == ".AL\n"
    assert mm.render(ListOpen(UNORDERED, 1)) == ".BL\n"
    assert mm.render(ItemOpen(ORDERED, 1, 1)) == ".LI\n"
    assert mm.render(ItemClose(ORDERED, 1)) == ""
    assert mm.render(ListClose(ORDERED, 1)) == ".LE\n"


def test_mom_list_styles_by_depth():
    mom = get_dialect("mom")

    styles = [mom.render(ListOpen(ORDERED, depth)) for depth in range(1, 6)]
    assert styles == [
        ".LIST DIGIT\n",
        ".LIST ALPHA\n",
        ".LIST DIGIT\n",
        ".LIST alpha\n",
        ".LIST DIGIT\n",
    ]
    assert mom.render(ListOpen(UNORDERED, 1)) == ".LIST BULLET\n"
    assert mom.render(ListOpen(UNORDERED, 2)) == ".LIST DASH\n"
    assert mom.render(ItemOpen(UNORDERED, 1)) == ".ITEM\n"
    assert mom.render(ListClose(UNORDERED, 1)) == ".LIST OFF\n"


@pytest.mark.parametrize(
    ("name", "opening", "closing"),
    [
        ("man", ".RS 4\n.EX\n", ".EE\n.RE\n"),
        ("mdoc", ".Bd -literal -offset indent\n", ".Ed\n"),
        ("mm", ".RS 4\n.EX\n", ".EE\n.RE\n"),
        ("mom", ".CODE\n", ".CODE OFF\n"),
    ],
)
def test_code_blocks(name: str, opening: str, closing: str):
    dialect = get_dialect(name)

    assert dialect.render(CodeBlockOpen()) == opening
    assert dialect.render(CodeBlockClose()) == closing


def test_code_line_dot_escape():
    assert get_dialect("man").render(CodeLine(".PP")) == ".cc !\n.PP\n!cc .\n"
    assert get_dialect("mom").render(CodeLine(".PP")) == ".ESC_CHAR !\n.PP\n.ESC_CHAR .\n"
    assert get_dialect("mdoc").render(CodeLine("  .PP")) == "  .PP\n"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("man", ".UR http://x.test\nExample\n.UE\n"),
        ("mdoc", '.Lk http://x.test "Example"\n'),
        ("mm", "Example <http://x.test>\n"),
        ("mom", "Example \\*[UL]http://x.test\\*[ULX]\n"),
    ],
)
def test_hyperlinks(name: str, expected: str):
    assert get_dialect(name).render(HyperLink("Example", "http://x.test")) == expected


def test_mail_links():
    assert get_dialect("man").render(HyperLink("Me", "me@x.test")) == ".MT me@x.test\nMe\n.ME\n"
    assert get_dialect("mdoc").render(HyperLink("Me", "me@x.test")) == ".An Me Aq Mt me@x.test\n"


@pytest.mark.parametrize(
    ("name", "expected", "bare"),
    [
        ("man", "\\fBls\\fP(1)\n", "\\fBls\\fP\n"),
        ("mdoc", ".Xr ls 1\n", ".Xr ls\n"),
        ("mm", "ls 1\n", "ls\n"),
        ("mom", "ls 1\n", "ls\n"),
    ],
)
def test_man_page_refs(name: str, expected: str, bare: str):
    dialect = get_dialect(name)

    assert dialect.render(ManPageRef("ls", "1")) == expected
    assert dialect.render(ManPageRef("ls")) == bare


@pytest.mark.parametrize(
    ("name", "opening", "closing"),
    [
        ("man", ".B\n", ".FT P\n"),
        ("mdoc", ".FT B\n", ".FT P\n"),
        ("mm", ".FT B\n", ".FT P\n"),
        ("mom", ".DRH\n", ".DRH\n"),
    ],
)
def test_boxes(name: str, opening: str, closing: str):
    dialect = get_dialect(name)

    assert dialect.render(BoxOpen()) == opening
    assert dialect.render(BoxClose()) == closing


def test_base_dialect_is_not_registered():
    assert RoffDialect.name not in DIALECT_NAMES


def test_quote_argument_escapes_double_quotes():
    assert quote_argument('say "hi"') == "say \\(dqhi\\(dq"
    assert quote_argument("plain") == "plain"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("mm", '.H 1 "The \\(dqquoted\\(dq word"\n'),
        ("mom", '.HEADING 1 "The \\(dqquoted\\(dq word"\n'),
        ("man", '.SH The "quoted" word\n'),
    ],
)
def test_section_rule_heading_text_is_quoted(name: str, expected: str):
    assert get_dialect(name).render(SectionRule('The "quoted" word')) == expected


def test_mom_preamble_quotes_name_and_author():
    config = RoffConfig(mom_author='Jane "JD" Doe')
    text = get_dialect("mom", config).render(DocumentStart('my "doc"', DATE))

    assert '.TITLE "my \\(dqdoc\\(dq"\n' in text
    assert '.AUTHOR "Jane \\(dqJD\\(dq Doe"\n' in text
