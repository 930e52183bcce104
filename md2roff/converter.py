"""Markdown to roff conversion entry points."""

from __future__ import annotations

import datetime
import io
import logging
from pathlib import Path

from .config import ConfigError, RoffConfig, validate_config
from .constants import STDIN_NAME
from .dialects import get_dialect
from .emitter import Emitter
from .events import DocumentStart
from .exceptions import ConversionError, UnterminatedCodeSpanError
from .filesystem import collect_file_stat, enforce_file_size, get_max_file_size, safe_read
from .scanner import BlockScanner, read_title_line

logger = logging.getLogger(__name__)


def convert_markdown(
    content: str,
    config: RoffConfig | None = None,
    docname: str = STDIN_NAME,
    date: datetime.date | None = None,
) -> str:
    """Convert Markdown content to roff source.

    Each call starts from fresh scanner state; nothing is shared between
    documents.

    Args:
        content: The Markdown document.
        config: Configuration selecting the dialect and title defaults.
            Defaults to a new `RoffConfig` when omitted.
        docname: Name used for generated title headings.
        date: Date used for generated title headings; defaults to today.

    Returns:
        str: The roff document, starting with the macro package directive.

    Raises:
        ConfigError: If the configuration fails validation.
        UnterminatedCodeSpanError: If an inline code span is never closed.

    Examples:
        convert_markdown("# ls 1\\n\\nList files.\\n")
        convert_markdown("**bold** text\\n", RoffConfig(dialect="mom"))
    """
    config = config or RoffConfig()
    validate_config(config)
    dialect = get_dialect(config.dialect, config)

    output = io.StringIO()
    emitter = Emitter(dialect, output)

    heading, start = read_title_line(content) if dialect.consumes_title else (None, 0)
    emitter.emit(DocumentStart(docname, date or datetime.date.today(), heading))

    logger.debug("converting %s with the %s dialect", docname, dialect.name)
    BlockScanner(content, emitter, max_list_depth=config.max_list_depth, start=start).run()
    return output.getvalue()


class ConvertFileError(Exception):
    """Raised when converting a Markdown file fails."""


def convert_file(
    filepath: Path,
    config: RoffConfig | None = None,
    date: datetime.date | None = None,
) -> str:
    """Read a Markdown file and convert it to roff.

    Args:
        filepath: Path to the Markdown file.
        config: Configuration controlling the conversion; defaults to a new
            `RoffConfig` when omitted.
        date: Date used for generated title headings; defaults to today.

    Returns:
        str: The roff document.

    Raises:
        ConvertFileError: If configuration is invalid, the file cannot be read,
            is too large or not UTF-8, or the conversion fails.

    Examples:
        roff = convert_file(Path("md2roff.md"), RoffConfig(dialect="mdoc"))
    """
    config = config or RoffConfig()
    try:
        validate_config(config)
        max_file_size = get_max_file_size(default=config.max_file_size)
    except (ConfigError, ValueError) as error:
        raise ConvertFileError(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), max_file_size, filepath)
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ConvertFileError(error_message) from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error

    try:
        return convert_markdown(content, config, docname=filepath.stem, date=date)
    except UnterminatedCodeSpanError as error:
        error_message = (
            f"{filepath}: inline code (`) opened at line {error.line_number} is never closed."
        )
        raise ConvertFileError(error_message) from error
    except ConversionError as error:
        raise ConvertFileError(f"{filepath}: {error}") from error
