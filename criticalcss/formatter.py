"""Formatter turning stylesheet documents back into CSS text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .document import CssDocument
from .errors import InvalidFormatError
from .nodes import Declaration, Item


class OutputFormat(str, Enum):
    COMPACT = "compact"
    PRETTY = "pretty"


@dataclass
class CssFormatter:
    indent: str = "\t"
    line_separator: str = "\n"
    block_separator: str = "\n\n"
    space_before_brace: str = " "
    space_after_colon: str = " "
    selector_separator: str = ", "
    semicolon_after_last: bool = True
    trailing_newline: bool = True

    @classmethod
    def compact(cls) -> CssFormatter:
        return cls(
            indent="",
            line_separator="",
            block_separator="",
            space_before_brace="",
            space_after_colon="",
            selector_separator=",",
            semicolon_after_last=False,
            trailing_newline=False,
        )

    @classmethod
    def pretty(cls) -> CssFormatter:
        return cls()

    def format_document(self, document: CssDocument) -> str:
        if not document.items:
            return ""
        blocks = [self.line_separator.join(self.format_item(item, level=0)) for item in document.items]
        output = self.block_separator.join(blocks)
        return output + "\n" if self.trailing_newline else output

    def format_item(self, item: Item, level: int) -> list[str]:
        match item.kind:
            case "rule_set":
                header = self.selector_separator.join(item.selectors)
                return self._format_block(header, item.declarations, level)
            case "declaration_at_rule":
                return self._format_block(self._at_rule_header(item.name, item.prelude), item.declarations, level)
            case "terminal_at_rule":
                return [f"{self._indent(level)}{self._at_rule_header(item.name, item.prelude)};"]
            case "container_at_rule":
                lines = [f"{self._indent(level)}{self._at_rule_header(item.name, item.prelude)}{self.space_before_brace}{{"]
                for child in item.items:
                    lines.extend(self.format_item(child, level + 1))
                lines.append(f"{self._indent(level)}}}")
                return lines
        raise TypeError(f"Cannot format item of kind {item.kind!r}")

    def _format_block(self, header: str, declarations: list[Declaration], level: int) -> list[str]:
        if not declarations:
            return [f"{self._indent(level)}{header}{self.space_before_brace}{{}}"]
        lines = [f"{self._indent(level)}{header}{self.space_before_brace}{{"]
        last = len(declarations) - 1
        for index, declaration in enumerate(declarations):
            terminator = ";" if self.semicolon_after_last or index < last else ""
            lines.append(
                f"{self._indent(level + 1)}{declaration.property}:{self.space_after_colon}{declaration.value}{terminator}"
            )
        lines.append(f"{self._indent(level)}}}")
        return lines

    def _at_rule_header(self, name: str, prelude: str) -> str:
        return f"@{name} {prelude}" if prelude else f"@{name}"

    def _indent(self, level: int) -> str:
        return "" if level <= 0 else self.indent * level


FORMATTERS = {
    OutputFormat.COMPACT: CssFormatter.compact,
    OutputFormat.PRETTY: CssFormatter.pretty,
}


def render(document: CssDocument, format: OutputFormat | str = OutputFormat.COMPACT) -> str:
    """Render ``document`` as CSS text in the ``compact`` or ``pretty`` format."""
    try:
        output_format = OutputFormat(format)
    except ValueError:
        raise InvalidFormatError(
            f"Value for format is invalid, expected values are: compact, pretty (got {format!r})"
        ) from None
    return FORMATTERS[output_format]().format_document(document)


__all__ = ["CssFormatter", "OutputFormat", "render"]
