"""Node definitions for the stylesheet document model.

Every item of a document is one of four closed variants, tagged by ``kind`` at
parse time:

- ``RuleSet``: selectors and a declaration block
- ``DeclarationAtRule``: an at-rule whose block holds declarations (``@font-face``)
- ``TerminalAtRule``: an at-rule without a block (``@import``)
- ``ContainerAtRule``: an at-rule whose block holds further items (``@media``)

Nodes are frozen; derived trees are built with ``model_copy``.
"""

from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field


class CssNode(BaseModel):
    model_config = ConfigDict(frozen=True)


class Comment(CssNode):
    text: str


class Declaration(CssNode):
    property: str
    value: str
    comments: list[Comment] = Field(default_factory=list)


class RuleSet(CssNode):
    kind: Literal["rule_set"] = "rule_set"
    selectors: list[str]
    declarations: list[Declaration] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)

    @property
    def selector(self) -> str:
        return ", ".join(self.selectors)


class DeclarationAtRule(CssNode):
    kind: Literal["declaration_at_rule"] = "declaration_at_rule"
    name: str
    prelude: str = ""
    declarations: list[Declaration] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)


class TerminalAtRule(CssNode):
    kind: Literal["terminal_at_rule"] = "terminal_at_rule"
    name: str
    prelude: str = ""
    comments: list[Comment] = Field(default_factory=list)


class ContainerAtRule(CssNode):
    kind: Literal["container_at_rule"] = "container_at_rule"
    name: str
    prelude: str = ""
    items: list["Item"] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)


Item = Annotated[
    Union[RuleSet, DeclarationAtRule, TerminalAtRule, ContainerAtRule],
    Field(discriminator="kind"),
]

RuleLike = RuleSet | DeclarationAtRule

ContainerAtRule.model_rebuild()

__all__ = [
    "Comment",
    "ContainerAtRule",
    "CssNode",
    "Declaration",
    "DeclarationAtRule",
    "Item",
    "RuleLike",
    "RuleSet",
    "TerminalAtRule",
]
