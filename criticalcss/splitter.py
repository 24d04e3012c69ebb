"""Partition a parsed stylesheet into critical and non-critical documents."""

from __future__ import annotations

import logging
from typing import NamedTuple, NotRequired, Optional, TypedDict

from .classifier import is_critical
from .document import CssDocument
from .logger import Logger
from .nodes import ContainerAtRule, Item
from .utils import resolve_config


class SplitResult(NamedTuple):
    critical: CssDocument
    non_critical: CssDocument


class SplitterConfig(TypedDict):
    enable_logger: NotRequired[bool]
    log_level: NotRequired[int]


class SplitterConfigRequired(TypedDict):
    enable_logger: bool
    log_level: int


DEFAULT_CONFIG: SplitterConfigRequired = {"enable_logger": True, "log_level": logging.INFO}


class CssSplitter:
    """Routes every item of a document to exactly one side.

    Rule sets and declaration at-rules go wholesale to the side their marker
    comments select. Terminal at-rules always go to the non-critical side.
    Container at-rules are partitioned recursively and each side receives a
    shell with the same name and prelude, unless that side's share is empty.
    """

    def __init__(self, config: Optional[SplitterConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(
            config={"name": "Splitter Logger", "is_enabled": self.config["enable_logger"], "level": self.config["log_level"]}
        ).logger

    def split(self, document: CssDocument) -> SplitResult:
        critical, non_critical = self._partition(document.items)
        self.logger.info(f"Split {len(document)} items into {len(critical)} critical and {len(non_critical)} non-critical")
        return SplitResult(CssDocument(items=critical), CssDocument(items=non_critical))

    def _partition(self, items: list[Item]) -> tuple[list[Item], list[Item]]:
        critical: list[Item] = []
        non_critical: list[Item] = []
        for item in items:
            match item.kind:
                case "rule_set" | "declaration_at_rule":
                    if is_critical(item):
                        self.logger.debug(f"Critical: {self._describe(item)}")
                        critical.append(item)
                    else:
                        non_critical.append(item)
                case "terminal_at_rule":
                    non_critical.append(item)
                case "container_at_rule":
                    inner_critical, inner_non_critical = self._partition(item.items)
                    if inner_critical:
                        critical.append(self._shell(item, inner_critical))
                    if inner_non_critical:
                        non_critical.append(self._shell(item, inner_non_critical))
                case _:
                    raise TypeError(f"Unknown item kind {item.kind!r}")
        return critical, non_critical

    @staticmethod
    def _shell(container: ContainerAtRule, items: list[Item]) -> ContainerAtRule:
        return container.model_copy(update={"items": items})

    @staticmethod
    def _describe(item: Item) -> str:
        if item.kind == "rule_set":
            return item.selector
        return f"@{item.name} {item.prelude}".rstrip()


def split(document: CssDocument, config: Optional[SplitterConfig] = None) -> SplitResult:
    """Split ``document`` into ``(critical, non_critical)`` documents.

    The source document is left untouched; the two results share unsplit rule
    sets with it by reference and own freshly built at-rule shells.
    """
    return CssSplitter(config).split(document)


__all__ = ["CssSplitter", "SplitResult", "SplitterConfig", "split"]
