"""Package-specific exception types."""

from __future__ import annotations


class ConversionError(ValueError):
    """Base class for conversion-related errors.

    Represents markdown that cannot be turned into roff output.
    """


class UnterminatedCodeSpanError(ConversionError):
    """Raised when an inline code span has no closing backtick.

    Args:
        line_number: One-based line where the span opens.
    """

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"Inline code (`) opened at line {self.line_number} is never closed")
