"""Errors raised while reading patterns."""

from typing import Optional


class FormatError(ValueError):
    """Raised when text is not valid plaintext-format content."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        """Initialize the error.

        Args:
            message: Description of the problem
            line: 1-based line number of the offending text
            column: 1-based column of the offending character
        """
        super().__init__(message, line, column)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message

        location = f"line {self.line}"
        if self.column is not None:
            location += f", column {self.column}"
        return f"{location}: {self.message}"
