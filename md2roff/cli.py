"""
Converts markdown documents to roff for the man, mdoc, mm or mom macro packages.
Each input is written to stdout in argument order; `-` reads standard input.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import __version__
from .config import ConfigError, build_config
from .constants import STDIN_NAME
from .converter import ConvertFileError, convert_file, convert_markdown
from .exceptions import ConversionError

__all__ = ["cli"]

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
}


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "-v", "--version", prog_name="md2roff")
@click.option("-n", "--man", "dialect", flag_value="man", help="Use the man package (default).")
@click.option("-d", "--mdoc", "dialect", flag_value="mdoc", help="Use the mdoc package (BSD man pages).")
@click.option("-m", "--mm", "dialect", flag_value="mm", help="Use the mm package.")
@click.option("-o", "--mom", "dialect", flag_value="mom", help="Use the mom package.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level.",
)
@click.argument("inputs", nargs=-1, type=click.UNPROCESSED)
def cli(inputs: tuple[str, ...], dialect: str | None = None, log_level: str = "WARNING"):
    """
    Convert markdown FILES to roff on stdout.

    Args:
        inputs: Files to convert, `-` for standard input. Anything else that
            starts with `-` is an unknown option and only produces a warning.
        dialect: Macro package chosen by flag; the configured one when omitted.
        log_level: Logging level name.

    Returns:
        None.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If a file cannot be read or its conversion
            fails; remaining inputs are not processed.

    Examples:
        md2roff --mdoc md2roff.md > md2roff.1
        cat notes.md | md2roff --mom - | groff -Tpdf > notes.pdf
    """
    logging.basicConfig(level=getattr(logging, log_level.upper()), format="%(levelname)s: %(message)s")

    try:
        config = build_config(Path.cwd(), dialect=dialect)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    for argument in inputs:
        if argument == "-":
            try:
                content = click.get_binary_stream("stdin").read().decode("UTF-8")
            except UnicodeDecodeError as error:
                raise click.ClickException(f"{STDIN_NAME}: Invalid UTF-8 sequence: {error}") from error
            try:
                output = convert_markdown(content, config, docname=STDIN_NAME)
            except ConversionError as error:
                raise click.ClickException(f"{STDIN_NAME}: {error}") from error
        elif argument.startswith("-"):
            click.echo(f"unknown option: [{argument}]", err=True)
            continue
        else:
            try:
                output = convert_file(Path(argument), config)
            except ConvertFileError as error:
                raise click.ClickException(str(error)) from error
        click.echo(output, nl=False)


if __name__ == "__main__":
    cli()
