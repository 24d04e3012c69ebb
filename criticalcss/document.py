"""Ordered stylesheet document container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .nodes import Item, RuleLike


@dataclass
class CssDocument:
    items: list[Item] = field(default_factory=list)

    def append(self, item: Item) -> None:
        self.items.append(item)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def rule_likes(self) -> list[RuleLike]:
        """Every leaf rule set or declaration at-rule, depth first in source order."""
        results: list[RuleLike] = []

        def walk(items: list[Item]) -> None:
            for item in items:
                if item.kind == "container_at_rule":
                    walk(item.items)
                elif item.kind in ("rule_set", "declaration_at_rule"):
                    results.append(item)

        walk(self.items)
        return results

    def selectors(self) -> list[str]:
        return [rule.selector for rule in self.rule_likes() if rule.kind == "rule_set"]
