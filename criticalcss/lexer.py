"""CSS tokenizer.

Produces a flat token stream for the parser. Comments are kept as tokens with
their body verbatim so the classifier can inspect them later; strings and
unquoted ``url(...)`` values are kept byte-for-byte, quotes included.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import NotRequired, Optional, TypedDict

from criticalcss.errors import LexerError
from criticalcss.logger import Logger
from criticalcss.utils import resolve_config


class TokenType(Enum):
    WHITESPACE = auto()
    COMMENT = auto()
    STRING = auto()
    URL = auto()
    AT_KEYWORD = auto()
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    OPEN_BRACKET = auto()
    CLOSE_BRACKET = auto()
    SEMICOLON = auto()
    COLON = auto()
    COMMA = auto()
    TEXT = auto()
    EOF = auto()


@dataclass(slots=True)
class Token:
    type: TokenType
    value: str
    line: int
    column: int

    @property
    def text(self) -> str:
        """Source text of the token as it should be re-emitted."""
        if self.type == TokenType.AT_KEYWORD:
            return f"@{self.value}"
        if self.type == TokenType.COMMENT:
            return f"/*{self.value}*/"
        return self.value


PUNCTUATION = {
    "{": TokenType.OPEN_BRACE,
    "}": TokenType.CLOSE_BRACE,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    "[": TokenType.OPEN_BRACKET,
    "]": TokenType.CLOSE_BRACKET,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}

TEXT_STOP_CHARS = set(PUNCTUATION) | {'"', "'", "@"}


class LexerConfig(TypedDict):
    tokenize: NotRequired[bool]
    enable_logger: NotRequired[bool]
    log_level: NotRequired[int]


class LexerConfigRequired(TypedDict):
    tokenize: bool
    enable_logger: bool
    log_level: int


DEFAULT_CONFIG: LexerConfigRequired = {
    "tokenize": True,
    "enable_logger": True,
    "log_level": logging.INFO,
}


class CssLexer:
    def __init__(self, text: str, config: Optional[LexerConfig] = None):
        if text.startswith("\ufeff"):
            text = text[1:]
        # newline normalisation as in css-syntax-3 preprocessing
        self.text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\f", "\n")
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(
            config={"name": "Lexer Logger", "is_enabled": self.config["enable_logger"], "level": self.config["log_level"]}
        ).logger
        self.tokens: list[Token] = []
        self._pos = 0
        self._line = 1
        self._column = 1
        if self.config["tokenize"]:
            self.tokenize()

    def tokenize(self) -> list[Token]:
        self.logger.info("Starting tokenization")
        try:
            while not self._is_eof:
                char = self._peek()
                if char.isspace():
                    self._emit_whitespace()
                elif char == "/" and self._peek(1) == "*":
                    self._emit_comment()
                elif char in ('"', "'"):
                    self._emit_string()
                elif char == "@" and self._starts_identifier(1):
                    self._emit_at_keyword()
                elif char in PUNCTUATION:
                    self._emit_punctuation(char)
                else:
                    self._emit_text()
        except LexerError as e:
            self.logger.error(e)
            raise
        self._add_token(TokenType.EOF, "", self._line, self._column)
        self.logger.info(f"Tokenization complete, {len(self.tokens)} tokens")
        return self.tokens

    def _add_token(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        self.logger.debug(f"Adding token {token_type} with value {value!r} at line {line}, column {column}")
        self.tokens.append(Token(token_type, value, line, column))

    def _emit_whitespace(self) -> None:
        start_line, start_col = self._line, self._column
        buffer: list[str] = []
        while not self._is_eof and self._peek().isspace():
            buffer.append(self._advance())
        self._add_token(TokenType.WHITESPACE, "".join(buffer), start_line, start_col)

    def _emit_comment(self) -> None:
        start_line, start_col = self._line, self._column
        self._advance(2)
        buffer: list[str] = []
        while not (self._peek() == "*" and self._peek(1) == "/"):
            if self._is_eof:
                raise LexerError("Unterminated comment", start_line, start_col)
            buffer.append(self._advance())
        self._advance(2)
        self._add_token(TokenType.COMMENT, "".join(buffer), start_line, start_col)

    def _emit_string(self) -> None:
        start_line, start_col = self._line, self._column
        quote = self._advance()
        buffer = [quote]
        while True:
            if self._is_eof:
                raise LexerError("Unterminated string", start_line, start_col)
            char = self._peek()
            if char == "\n":
                raise LexerError("Unterminated string", start_line, start_col)
            if char == "\\":
                buffer.append(self._advance())
                if self._is_eof:
                    raise LexerError("Unterminated string", start_line, start_col)
                buffer.append(self._advance())
                continue
            buffer.append(self._advance())
            if char == quote:
                break
        self._add_token(TokenType.STRING, "".join(buffer), start_line, start_col)

    def _emit_at_keyword(self) -> None:
        start_line, start_col = self._line, self._column
        self._advance()
        name = self._consume_identifier()
        self._add_token(TokenType.AT_KEYWORD, name, start_line, start_col)

    def _emit_punctuation(self, char: str) -> None:
        self._add_token(PUNCTUATION[char], char, self._line, self._column)
        self._advance()

    def _emit_text(self) -> None:
        start_line, start_col = self._line, self._column
        buffer: list[str] = []
        while not self._is_eof:
            char = self._peek()
            if char.isspace() or (char in TEXT_STOP_CHARS and buffer):
                break
            if char == "/" and self._peek(1) == "*":
                break
            buffer.append(self._advance())
            if char == "\\" and not self._is_eof:
                buffer.append(self._advance())
            elif char in TEXT_STOP_CHARS:
                # lone "@" that does not start an at-keyword
                break
        word = "".join(buffer)
        if word.lower() == "url" and self._peek() == "(" and self._is_unquoted_url():
            self._emit_url(word, start_line, start_col)
            return
        self._add_token(TokenType.TEXT, word, start_line, start_col)

    def _is_unquoted_url(self) -> bool:
        ahead = 1
        while self._peek(ahead).isspace():
            ahead += 1
        return self._peek(ahead) not in ('"', "'")

    def _emit_url(self, word: str, line: int, column: int) -> None:
        buffer = [word, self._advance()]
        while True:
            if self._is_eof:
                raise LexerError("Unterminated url", line, column)
            char = self._advance()
            buffer.append(char)
            if char == "\\" and not self._is_eof:
                buffer.append(self._advance())
            elif char == ")":
                break
        self._add_token(TokenType.URL, "".join(buffer), line, column)

    # Helpers -----------------------------------------------------------------
    def _consume_identifier(self) -> str:
        buffer: list[str] = []
        while not self._is_eof:
            char = self._peek()
            if char.isalnum() or char in "-_" or ord(char) >= 0x80:
                buffer.append(self._advance())
            elif char == "\\" and self._peek(1) != "\0":
                buffer.append(self._advance())
                buffer.append(self._advance())
            else:
                break
        return "".join(buffer)

    def _starts_identifier(self, ahead: int) -> bool:
        char = self._peek(ahead)
        if char == "-":
            char = self._peek(ahead + 1)
            return char.isalpha() or char in "-_\\" or (char != "\0" and ord(char) >= 0x80)
        return char.isalpha() or char in "_\\" or (char != "\0" and ord(char) >= 0x80)

    @property
    def _is_eof(self) -> bool:
        return self._pos >= len(self.text)

    def _peek(self, ahead: int = 0) -> str:
        index = self._pos + ahead
        if index >= len(self.text):
            return "\0"
        return self.text[index]

    def _advance(self, steps: int = 1) -> str:
        consumed = ""
        for _ in range(steps):
            char = self.text[self._pos]
            self._pos += 1
            if char == "\n":
                self._line += 1
                self._column = 1
            else:
                self._column += 1
            consumed += char
        return consumed


__all__ = ["CssLexer", "LexerConfig", "Token", "TokenType"]
