"""Tab and step containers: every DashElement becomes its own Block."""
from __future__ import annotations

from ..document_models import Block, DashElement, Node, Property
from .base import is_block


def promote_dash_elements(node: Block, container: str, item: str, *, numbered: bool = False) -> Block:
    """Rename ``node`` to ``container`` and turn its DashElements into ``item`` Blocks.

    Other children keep their position. With ``numbered`` set each promoted
    Block gets a 1-based ``step`` property counted in document order.
    """

    children: list[Node] = []
    ordinal = 0
    for child in node.children:
        if not isinstance(child, DashElement):
            children.append(child)
            continue
        ordinal += 1
        properties = list(child.properties)
        if child.label:
            properties.append(Property("label", child.label))
        if numbered:
            properties.append(Property("step", str(ordinal)))
        children.append(Block(item, tuple(properties), child.children))
    return Block(container, node.properties, tuple(children))


class TabsRule:
    name = "tabs"

    def can_handle(self, node: Node) -> bool:
        return is_block(node, "tabs")

    def apply_rule(self, node: Node) -> Node:
        if not isinstance(node, Block):
            return node
        return promote_dash_elements(node, "ginko-tabs", "ginko-tab")


class StepsRule:
    name = "steps"

    def can_handle(self, node: Node) -> bool:
        return is_block(node, "steps")

    def apply_rule(self, node: Node) -> Node:
        if not isinstance(node, Block):
            return node
        return promote_dash_elements(node, "ginko-steps", "ginko-step", numbered=True)


__all__ = ["StepsRule", "TabsRule", "promote_dash_elements"]
