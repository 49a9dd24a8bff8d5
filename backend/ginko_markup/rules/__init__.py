"""Rewrite rules and the standard rule order."""
from __future__ import annotations

from typing import Iterable

from ..ids import IdSource
from .base import Rule
from .callout import CalloutRule
from .faq import FaqRule
from .file_tree import FileTreeRule
from .layout import LayoutRule
from .quiz import QuizRule
from .snippet import SnippetRule
from .tabs import StepsRule, TabsRule

RULE_NAMES = ("callout", "tabs", "steps", "layout", "snippet", "file-tree", "faq", "quiz")


def default_rules(*, id_source: IdSource | None = None, enabled: Iterable[str] | None = None) -> list[Rule]:
    """Build the rules in their fixed order, optionally keeping only ``enabled`` names."""

    rules: list[Rule] = [
        CalloutRule(),
        TabsRule(),
        StepsRule(),
        LayoutRule(),
        SnippetRule(),
        FileTreeRule(),
        FaqRule(id_source),
        QuizRule(),
    ]
    if enabled is None:
        return rules
    wanted = set(enabled)
    return [rule for rule in rules if rule.name in wanted]


__all__ = [
    "RULE_NAMES",
    "CalloutRule",
    "FaqRule",
    "FileTreeRule",
    "LayoutRule",
    "QuizRule",
    "Rule",
    "SnippetRule",
    "StepsRule",
    "TabsRule",
    "default_rules",
]
