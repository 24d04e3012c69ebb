"""Marker-comment classification of rule-like nodes."""

from __future__ import annotations

from .nodes import RuleLike

CRITICAL_MARKER = "!critical"


def normalize_comment(text: str) -> str:
    """Strip every whitespace character and lower-case the comment body."""
    return "".join(text.split()).lower()


def is_critical(rule: RuleLike) -> bool:
    """Return True when any declaration of ``rule`` carries a ``!critical`` comment.

    Declarations and their comments are scanned in source order and the scan
    stops at the first match. ``/*! critical */`` matches, ``/*! crit ical*/``
    matches too (whitespace is dropped), ``/* !critical-ish */`` does not.
    """
    for declaration in rule.declarations:
        for comment in declaration.comments:
            if normalize_comment(comment.text) == CRITICAL_MARKER:
                return True
    return False


__all__ = ["CRITICAL_MARKER", "is_critical", "normalize_comment"]
