"""Render a markup tree back into component (MDC) syntax."""
from __future__ import annotations

from typing import Iterable

from .document_models import (
    Block,
    CodeBlock,
    DashElement,
    Divider,
    Document,
    InlineBlock,
    InlineCode,
    Node,
    Property,
    Table,
    TableCell,
    TableRow,
    Text,
)
from .errors import MarkupError


def format_properties(properties: Iterable[Property]) -> str:
    """Render a property list without the surrounding braces.

    ``True`` renders as a bare key and ``False`` is dropped. Values holding a
    double quote are wrapped in single quotes so JSON payloads survive; any
    single quote inside such a value is written as ``&apos;``.
    """

    parts: list[str] = []
    for item in properties:
        if item.value is True:
            parts.append(item.key)
        elif item.value is False:
            continue
        elif '"' in item.value:
            escaped = item.value.replace("'", "&apos;")
            parts.append(f"{item.key}='{escaped}'")
        else:
            parts.append(f'{item.key}="{item.value}"')
    return " ".join(parts)


class Serializer:
    """Tree to text renderer.

    With ``nested_fence_colons`` enabled a Block that contains other Blocks
    gets one extra colon per nested level, the way MDC documents are usually
    written by hand.
    """

    def __init__(self, *, nested_fence_colons: bool = False) -> None:
        self._nested_fence_colons = nested_fence_colons

    # ------------------------------------------------------------------
    def serialize(self, ast: Document | Node | MarkupError) -> str | MarkupError:
        if isinstance(ast, MarkupError):
            return ast
        return self.render(ast)

    def render(self, node: Node) -> str:
        if isinstance(node, Document):
            return self.render_nodes(node.children)
        if isinstance(node, Text):
            return node.content
        if isinstance(node, Block):
            return self._render_block(node)
        if isinstance(node, DashElement):
            heading = f"--{node.name}{self._braced(node.properties)}"
            if node.label:
                heading = f"{heading} {node.label}"
            return f"{heading}\n{self.render_nodes(node.children)}"
        if isinstance(node, InlineBlock):
            rendered = f":{node.name}{{{format_properties(node.properties)}}}"
            return f"{rendered}\n" if node.own_line else rendered
        if isinstance(node, CodeBlock):
            content = node.content
            if content and not content.endswith("\n"):
                content += "\n"
            return f"{node.fence}{node.language or ''}\n{content}{node.fence}\n"
        if isinstance(node, InlineCode):
            return f"`{node.content}`"
        if isinstance(node, Divider):
            return "---\n"
        if isinstance(node, Table):
            return "".join(self._render_row(row) for row in node.rows)
        if isinstance(node, TableRow):
            return self._render_row(node)
        if isinstance(node, TableCell):
            return self.render_nodes(node.children)
        raise TypeError(f"Cannot serialize {type(node).__name__}")

    def render_nodes(self, nodes: Iterable[Node]) -> str:
        return "".join(self.render(node) for node in nodes)

    # ------------------------------------------------------------------
    def _render_block(self, node: Block) -> str:
        fence = ":" * (2 + self._block_depth(node)) if self._nested_fence_colons else "::"
        content = self.render_nodes(node.children)
        if content and not content.endswith("\n"):
            content += "\n"
        return f"{fence}{node.name}{self._braced(node.properties)}\n{content}{fence}\n"

    def _render_row(self, row: TableRow) -> str:
        cells = [self.render_nodes(cell.children).strip() for cell in row.cells]
        return "| " + " | ".join(cells) + " |\n"

    @staticmethod
    def _braced(properties: Iterable[Property]) -> str:
        rendered = format_properties(properties)
        return f"{{{rendered}}}" if rendered else ""

    @classmethod
    def _block_depth(cls, node: Node) -> int:
        """Number of Block levels nested below ``node``."""

        depth = 0
        children: tuple[Node, ...] = ()
        if isinstance(node, (Block, DashElement, Document)):
            children = node.children
        for child in children:
            child_depth = cls._block_depth(child)
            if isinstance(child, Block):
                child_depth += 1
            depth = max(depth, child_depth)
        return depth


def serialize(ast: Document | Node | MarkupError, *, nested_fence_colons: bool = False) -> str | MarkupError:
    """Render ``ast`` to text; an upstream :class:`MarkupError` is returned unchanged."""

    return Serializer(nested_fence_colons=nested_fence_colons).serialize(ast)


__all__ = ["Serializer", "format_properties", "serialize"]
