"""Reusable snippets: ``::snippet`` defines one, ``:snippet{id=...}`` embeds it."""
from __future__ import annotations

from ..document_models import Block, InlineBlock, Node, Property

SNIPPET_SOURCE = "ginko-snippet-source"
SNIPPET_REFERENCE = "ginko-snippet"


def _only_id(properties: tuple[Property, ...]) -> tuple[Property, ...]:
    return tuple(item for item in properties if item.key == "id")[:1]


class SnippetRule:
    name = "snippet"

    def can_handle(self, node: Node) -> bool:
        return isinstance(node, (Block, InlineBlock)) and node.name == "snippet"

    def apply_rule(self, node: Node) -> Node:
        if isinstance(node, Block):
            return Block(SNIPPET_SOURCE, _only_id(node.properties), node.children)
        if isinstance(node, InlineBlock):
            return InlineBlock(SNIPPET_REFERENCE, _only_id(node.properties), node.own_line)
        return node


__all__ = ["SNIPPET_REFERENCE", "SNIPPET_SOURCE", "SnippetRule"]
