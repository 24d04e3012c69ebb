"""Split stylesheets into critical and non-critical CSS using ``/* !critical */`` markers."""

from .errors import CSSSyntaxError, InvalidFormatError, LexerError, ParseException
from .nodes import (
    Comment,
    ContainerAtRule,
    Declaration,
    DeclarationAtRule,
    Item,
    RuleSet,
    TerminalAtRule,
)
from .document import CssDocument
from .lexer import CssLexer, LexerConfig, Token, TokenType
from .parser import CssParser, ParserConfig, parse
from .classifier import is_critical, normalize_comment
from .splitter import CssSplitter, SplitResult, SplitterConfig, split
from .formatter import CssFormatter, OutputFormat, render
from .pipeline import CriticalCss, CriticalCssConfig, split_stylesheet

__version__ = "0.1.0"

__all__ = [
    "CSSSyntaxError",
    "InvalidFormatError",
    "LexerError",
    "ParseException",
    "Comment",
    "ContainerAtRule",
    "Declaration",
    "DeclarationAtRule",
    "Item",
    "RuleSet",
    "TerminalAtRule",
    "CssDocument",
    "CssLexer",
    "LexerConfig",
    "Token",
    "TokenType",
    "CssParser",
    "ParserConfig",
    "parse",
    "is_critical",
    "normalize_comment",
    "CssSplitter",
    "SplitResult",
    "SplitterConfig",
    "split",
    "CssFormatter",
    "OutputFormat",
    "render",
    "CriticalCss",
    "CriticalCssConfig",
    "split_stylesheet",
]
