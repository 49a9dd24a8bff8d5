"""Column layouts built from ``--col`` items."""
from __future__ import annotations

from ..document_models import Block, DashElement, Node, Property, Text

COLUMN_ITEM = "col"


def _is_column(node: Node) -> bool:
    return isinstance(node, DashElement) and node.name == COLUMN_ITEM


def _column_content(column: DashElement) -> tuple[Node, ...]:
    if not column.label:
        return column.children
    return (Text(f"{column.label}\n"), *column.children)


def _merge(base: tuple[Property, ...], extra: tuple[Property, ...]) -> tuple[Property, ...]:
    keys = {item.key for item in base}
    return base + tuple(item for item in extra if item.key not in keys)


class LayoutRule:
    """One column collapses to ``ginko-center``; more become ``ginko-layout``."""

    name = "layout"

    def can_handle(self, node: Node) -> bool:
        return isinstance(node, Block) and node.name == "layout" and any(_is_column(child) for child in node.children)

    def apply_rule(self, node: Node) -> Node:
        if not isinstance(node, Block):
            return node
        columns = [child for child in node.children if _is_column(child)]

        if len(columns) == 1:
            column = columns[0]
            children: list[Node] = []
            for child in node.children:
                if child is column:
                    children.extend(_column_content(column))
                elif not (isinstance(child, Text) and not child.content.strip()):
                    children.append(child)
            return Block("ginko-center", _merge(node.properties, column.properties), tuple(children))

        children = []
        for child in node.children:
            if isinstance(child, DashElement) and child.name == COLUMN_ITEM:
                children.append(Block("ginko-column", child.properties, _column_content(child)))
            elif isinstance(child, Text) and not child.content.strip():
                continue
            else:
                children.append(child)
        return Block("ginko-layout", node.properties, tuple(children))


__all__ = ["LayoutRule"]
