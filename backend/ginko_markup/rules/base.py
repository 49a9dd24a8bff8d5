"""Interface shared by all rewrite rules."""
from __future__ import annotations

from typing import Protocol

from ..document_models import Block, Node


class Rule(Protocol):
    """A rewrite unit: ``can_handle`` selects nodes, ``apply_rule`` replaces them."""

    @property
    def name(self) -> str: ...

    def can_handle(self, node: Node) -> bool: ...

    def apply_rule(self, node: Node) -> Node: ...


def is_block(node: Node, *names: str) -> bool:
    return isinstance(node, Block) and node.name in names


__all__ = ["Rule", "is_block"]
