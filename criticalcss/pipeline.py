from __future__ import annotations

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from criticalcss.document import CssDocument
from criticalcss.formatter import OutputFormat, render
from criticalcss.lexer import CssLexer, LexerConfig
from criticalcss.parser import CssParser, ParserConfig
from criticalcss.splitter import CssSplitter, SplitterConfig
from criticalcss.utils import resolve_config


class CriticalCssConfig(TypedDict):
    lexer_config: NotRequired[LexerConfig]
    parser_config: NotRequired[ParserConfig]
    splitter_config: NotRequired[SplitterConfig]


class CriticalCssConfigRequired(TypedDict):
    lexer_config: LexerConfig
    parser_config: ParserConfig
    splitter_config: SplitterConfig


DEFAULT_CONFIG: CriticalCssConfigRequired = {
    "lexer_config": {},
    "parser_config": {},
    "splitter_config": {},
}


class CriticalCss:
    """Parses one stylesheet and splits it on construction.

    ```python
    css = CriticalCss.from_path("styles.css")
    css.compiled("pretty")["critical"]
    ```
    """

    def __init__(self, source: str, config: Optional[CriticalCssConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.source = source
        self.lexer = CssLexer(source, config={**self.config["lexer_config"], "tokenize": True})
        self.parser = CssParser(self.lexer.tokens, config={**self.config["parser_config"], "parse": False})
        self.document: CssDocument = self.parser.parse_tokens()
        self.parser.document = self.document
        self.critical, self.non_critical = CssSplitter(self.config["splitter_config"]).split(self.document)

    @classmethod
    def from_path(cls, path: str | Path, config: Optional[CriticalCssConfig] = None) -> CriticalCss:
        return cls(Path(path).read_text(encoding="utf-8-sig"), config=config)

    def parts(self) -> dict[str, CssDocument]:
        return {"critical": self.critical, "non_critical": self.non_critical}

    def compiled(self, format: OutputFormat | str = OutputFormat.COMPACT) -> dict[str, str]:
        return {name: render(document, format) for name, document in self.parts().items()}


def split_stylesheet(
    source: str,
    format: OutputFormat | str = OutputFormat.COMPACT,
    config: Optional[CriticalCssConfig] = None,
) -> tuple[str, str]:
    """Return ``(critical_css, non_critical_css)`` rendered from ``source``."""
    compiled = CriticalCss(source, config=config).compiled(format)
    return compiled["critical"], compiled["non_critical"]


__all__ = ["CriticalCss", "CriticalCssConfig", "split_stylesheet"]
