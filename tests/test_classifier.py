"""Tests for marker-comment classification."""

import pytest

from criticalcss.classifier import CRITICAL_MARKER, is_critical, normalize_comment
from criticalcss.nodes import Comment, Declaration, DeclarationAtRule, RuleSet
from criticalcss.parser import parse

QUIET = {"enable_logger": False}


def _first(source: str):
    return parse(source, lexer_config=QUIET, parser_config=QUIET).items[0]


def _rule(*comment_lists: list[str]) -> RuleSet:
    return RuleSet(
        selectors=["a"],
        declarations=[
            Declaration(property=f"p{i}", value="1", comments=[Comment(text=text) for text in comments])
            for i, comments in enumerate(comment_lists)
        ],
    )


class TestNormalizeComment:
    def test_strips_all_whitespace_and_lowercases(self) -> None:
        assert normalize_comment("  ! CRITICAL \n\t") == CRITICAL_MARKER

    def test_interior_whitespace_removed(self) -> None:
        assert normalize_comment("!  c r i t i c a l") == "!critical"

    def test_other_characters_kept(self) -> None:
        assert normalize_comment(" !critical-path ") == "!critical-path"


class TestIsCritical:
    @pytest.mark.parametrize(
        "comment",
        [
            "/*!critical*/",
            "/* !CRITICAL */",
            "/*! critical*/",
            "/*  !  c r i t i c a l */",
            "/*\n\t!Critical\n*/",
        ],
    )
    def test_marker_variants_match(self, comment: str) -> None:
        assert is_critical(_first(f"a {{ color: red; {comment} }}")) is True

    @pytest.mark.parametrize(
        "comment",
        [
            "/* critical */",
            "/* !critical! */",
            "/* !critical-path */",
            "/* !not-critical */",
            "/* ! crit-ical */",
            "/* important */",
        ],
    )
    def test_near_misses_do_not_match(self, comment: str) -> None:
        assert is_critical(_first(f"a {{ color: red; {comment} }}")) is False

    def test_no_comments_is_not_critical(self) -> None:
        assert is_critical(_first("a { color: red }")) is False

    def test_rule_without_declarations_is_not_critical(self) -> None:
        assert is_critical(_first("a {}")) is False

    def test_marker_on_later_declaration(self) -> None:
        assert is_critical(_rule([], ["unrelated"], ["!critical"])) is True

    def test_later_comment_does_not_unmark(self) -> None:
        assert is_critical(_rule(["!critical", "something else"], ["other"])) is True

    def test_marker_in_value(self) -> None:
        assert is_critical(_first("a { color: /* !critical */ red; margin: 0 }")) is True

    def test_comment_outside_declarations_is_ignored(self) -> None:
        assert is_critical(_first("/* !critical */ a { color: red }")) is False
        assert is_critical(_first("a { /* !critical */ }")) is False

    def test_declaration_at_rule(self) -> None:
        item = _first('@font-face { font-family: "X"; /* !critical */ }')
        assert isinstance(item, DeclarationAtRule)
        assert is_critical(item) is True

    def test_pure(self) -> None:
        rule = _rule(["!critical"])
        assert is_critical(rule) == is_critical(rule) is True
        assert rule == _rule(["!critical"])
