"""
md2roff: convert Markdown documents to roff.

Targets four macro packages: man (default), mdoc, mm and mom. This package can
be used both as a CLI tool and as a library.

CLI Usage:
    md2roff --mdoc md2roff.md > md2roff.1

Library Usage:
    from md2roff import RoffConfig, convert_markdown

    roff = convert_markdown("# ls 1\\n\\nList files.\\n", RoffConfig(dialect="man"))
"""

from .buffer import squeeze
from .config import ConfigError, RoffConfig
from .converter import ConvertFileError, convert_file, convert_markdown
from .dialects import DIALECT_NAMES, get_dialect
from .exceptions import ConversionError, UnterminatedCodeSpanError

__version__ = "1.1.0"

__all__ = [
    # Core functionality
    "convert_markdown",
    "convert_file",
    "get_dialect",
    # Configuration
    "RoffConfig",
    "DIALECT_NAMES",
    # Utilities
    "squeeze",
    # Exceptions
    "ConfigError",
    "ConversionError",
    "ConvertFileError",
    "UnterminatedCodeSpanError",
    # Version
    "__version__",
]
