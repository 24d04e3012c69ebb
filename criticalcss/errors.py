"""Error types raised by the CSS engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from criticalcss.lexer import Token


class CSSSyntaxError(ValueError):
    """Raised when stylesheet source cannot be tokenized or parsed."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)


class LexerError(CSSSyntaxError):
    pass


class ParseException(CSSSyntaxError):
    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        if token is None:
            super().__init__(message)
        else:
            super().__init__(message, token.line, token.column)


class InvalidFormatError(ValueError):
    """Raised when a document is rendered with an unknown output format."""
