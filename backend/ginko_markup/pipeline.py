"""Depth-first rewrite pass driving the registered rules over a tree."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from .document_models import Document, Node, children_of, with_children
from .errors import MarkupError, RuleError
from .rules import default_rules
from .rules.base import Rule

logger = logging.getLogger(__name__)


class MarkupModifier:
    """Apply an ordered list of rules to every node of a document.

    At each node the first rule whose ``can_handle`` matches replaces it, then
    the traversal continues into the replacement's children. A rule failure
    aborts the whole pass.
    """

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)

    @property
    def rules(self) -> Sequence[Rule]:
        return self._rules

    # ------------------------------------------------------------------
    def modify(self, ast: Any) -> Document | MarkupError:
        if isinstance(ast, MarkupError):
            return ast
        if not isinstance(ast, Document):
            logger.debug("Received %s instead of a document; returning an empty one", type(ast).__name__)
            return Document()
        try:
            result = self._visit(ast)
        except RuleError as exc:
            logger.warning("Rewrite aborted: %s", exc)
            return exc
        return result

    # ------------------------------------------------------------------
    def _visit(self, node: Node) -> Node:
        for rule in self._rules:
            try:
                if not rule.can_handle(node):
                    continue
                node = rule.apply_rule(node)
            except Exception as exc:
                raise RuleError(rule.name, exc) from exc
            logger.debug("Rule %s rewrote a node into %s", rule.name, type(node).__name__)
            break

        children = children_of(node)
        if not children:
            return node
        return with_children(node, (self._visit(child) for child in children))


def modify(ast: Any, rules: Iterable[Rule] | None = None) -> Document | MarkupError:
    """Run the standard (or the given) rule list over ``ast``."""

    if rules is None:
        rules = default_rules()
    return MarkupModifier(rules).modify(ast)


__all__ = ["MarkupModifier", "modify"]
