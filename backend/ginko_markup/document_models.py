"""Node definitions for the markup tree shared by the parser, rules and serializer."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Union

PropertyValue = Union[str, bool]


@dataclass(frozen=True, slots=True)
class Property:
    """A single ``key=value`` entry of a property list.

    Parameters
    ----------
    key:
        Identifier written before ``=`` (or alone for boolean flags).
    value:
        String value, or ``True``/``False`` for flags. ``False`` is treated as
        absent when the tree is serialized.
    """

    key: str
    value: PropertyValue


@dataclass(frozen=True, slots=True)
class Text:
    content: str


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced code kept verbatim; ``fence`` is the opening backtick run."""

    content: str
    language: str | None = None
    fence: str = "```"


@dataclass(frozen=True, slots=True)
class InlineCode:
    content: str


@dataclass(frozen=True, slots=True)
class Divider:
    pass


@dataclass(frozen=True, slots=True)
class InlineBlock:
    """Self-closing ``:name{props}`` component.

    ``own_line`` is set when the component occupied a whole source line, so
    the serializer can restore the line break after it.
    """

    name: str
    properties: tuple[Property, ...] = ()
    own_line: bool = False


@dataclass(frozen=True, slots=True)
class TableCell:
    children: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class TableRow:
    cells: tuple[TableCell, ...] = ()
    separator: bool = False


@dataclass(frozen=True, slots=True)
class Table:
    rows: tuple[TableRow, ...] = ()


@dataclass(frozen=True, slots=True)
class DashElement:
    """``--name(props) label`` item living directly inside a Block."""

    name: str
    properties: tuple[Property, ...] = ()
    label: str | None = None
    children: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Block:
    """Fenced ``::name ... ::`` container."""

    name: str
    properties: tuple[Property, ...] = ()
    children: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Document:
    children: tuple[Node, ...] = field(default_factory=tuple)


Node = Union[
    Document,
    Text,
    Block,
    DashElement,
    InlineBlock,
    CodeBlock,
    InlineCode,
    Divider,
    Table,
    TableRow,
    TableCell,
]

CONTAINER_TYPES = (Document, Block, DashElement, TableCell)


def get_property(properties: Iterable[Property], key: str) -> PropertyValue | None:
    """Return the value of the first property named ``key`` or ``None``."""

    for item in properties:
        if item.key == key:
            return item.value
    return None


def children_of(node: Node) -> tuple[Node, ...]:
    """Return the direct child nodes of ``node`` (rows and cells included)."""

    if isinstance(node, CONTAINER_TYPES):
        return node.children
    if isinstance(node, Table):
        return node.rows
    if isinstance(node, TableRow):
        return node.cells
    return ()


def with_children(node: Node, children: Iterable[Node]) -> Node:
    """Return a copy of ``node`` holding ``children`` instead of its current ones."""

    items = tuple(children)
    if isinstance(node, CONTAINER_TYPES):
        return replace(node, children=items)
    if isinstance(node, Table):
        return replace(node, rows=items)
    if isinstance(node, TableRow):
        return replace(node, cells=items)
    return node


def text_content(nodes: Iterable[Node]) -> str:
    """Concatenate the raw text of leaf nodes, restoring inline code backticks."""

    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.content)
        elif isinstance(node, InlineCode):
            parts.append(f"`{node.content}`")
        elif isinstance(node, CodeBlock):
            parts.append(node.content)
        else:
            parts.append(text_content(children_of(node)))
    return "".join(parts)


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert a tree into plain dictionaries suitable for JSON responses."""

    kind = type(node).__name__
    payload: dict[str, Any] = {"type": kind}
    if isinstance(node, (Block, DashElement, InlineBlock)):
        payload["name"] = node.name
        payload["properties"] = {item.key: item.value for item in node.properties}
    if isinstance(node, DashElement):
        payload["label"] = node.label
    if isinstance(node, InlineBlock):
        payload["own_line"] = node.own_line
    if isinstance(node, (Text, InlineCode)):
        payload["content"] = node.content
    if isinstance(node, CodeBlock):
        payload["content"] = node.content
        payload["language"] = node.language
        payload["fence"] = node.fence
    if isinstance(node, TableRow):
        payload["separator"] = node.separator
    nested = children_of(node)
    if nested or isinstance(node, (Document, Block, DashElement, Table, TableRow, TableCell)):
        payload["children"] = [node_to_dict(child) for child in nested]
    return payload


__all__ = [
    "Block",
    "CodeBlock",
    "DashElement",
    "Divider",
    "Document",
    "InlineBlock",
    "InlineCode",
    "Node",
    "Property",
    "PropertyValue",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "children_of",
    "get_property",
    "node_to_dict",
    "text_content",
    "with_children",
]
