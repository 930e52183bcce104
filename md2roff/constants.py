"""Constants used across the md2roff package."""

from __future__ import annotations

import re

CODE_FENCE = "```"
FENCE_MAX_INDENT = 3

# Characters that may precede an opening ``*``, ``_``, ``**`` or ``__``
EMPHASIS_OPENERS = frozenset("({[,.;`'\" \t\n")

UNORDERED_MARKERS = frozenset("*+-")
MAX_ORDERED_DIGITS = 9
RULE_CHARS = frozenset("=-*")
RULE_MIN_LENGTH = 3

# Backslash escapes that produce control characters; others pass through
ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "b": "\b",
    "a": "\a",
    "e": "\033",
}

# Whitespace as understood by C's isspace()
WHITESPACE_CHARS = " \t\n\v\f\r"
WHITESPACE_RUN_PATTERN = re.compile(r"[ \t\n\v\f\r]+")

DEFAULT_DIALECT = "man"
DEFAULT_MAX_LIST_DEPTH = 32
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

STDIN_NAME = "stdin"
