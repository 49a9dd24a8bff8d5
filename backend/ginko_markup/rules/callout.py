"""``::note`` style admonitions and ``> [!note]`` quotes rewritten to ``ginko-callout``."""
from __future__ import annotations

from ..document_models import Block, DashElement, Node, Property, Text
from ..document_parser import CALLOUT_QUOTE_RE, parse_inline

CALLOUT_NAME = "ginko-callout"
CALLOUT_TYPES = ("note", "info", "tip", "warning", "danger", "quote", "question")


def _is_blank(children: list[Node]) -> bool:
    return all(isinstance(child, Text) and not child.content.strip() for child in children)


def _quote_body(lines: list[str]) -> tuple[Node, ...]:
    """Drop the ``>`` markers and empty lines, then read the rest as prose."""

    nodes: list[Node] = []
    for line in lines:
        content = line.lstrip().removeprefix(">").strip()
        if not content:
            continue
        for node in parse_inline(content + "\n"):
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(nodes[-1].content + node.content)
            else:
                nodes.append(node)
    return tuple(nodes)


class CalloutRule:
    """A trailing ``-`` on the block name marks the callout as collapsed.

    Quote callouts (``> [!tip]- Title``) take the first of pipe separated
    types, fold with ``-`` and may carry a title after the marker. Either
    form gets a ``title-only`` flag when it has a title and no content.
    """

    name = "callout"

    def can_handle(self, node: Node) -> bool:
        if isinstance(node, Text):
            return CALLOUT_QUOTE_RE.match(node.content.split("\n", 1)[0]) is not None
        return isinstance(node, Block) and self._base_name(node.name) in CALLOUT_TYPES

    def apply_rule(self, node: Node) -> Node:
        if isinstance(node, Text):
            return self._from_quote(node)
        if not isinstance(node, Block):
            return node
        collapsed = node.name.endswith("-")
        properties = [Property("type", self._base_name(node.name))]
        if collapsed:
            properties.append(Property("collapsed", True))

        title: str | None = None
        children: list[Node] = []
        for child in node.children:
            if title is None and isinstance(child, DashElement) and child.name == "title":
                title = child.label or ""
                children.extend(child.children)
                continue
            children.append(child)
        if title:
            properties.append(Property("title", title))
            if _is_blank(children):
                properties.append(Property("title-only", True))

        taken = {item.key for item in properties}
        for item in node.properties:
            if item.key in taken:
                continue
            properties.append(item)
            taken.add(item.key)

        return Block(CALLOUT_NAME, tuple(properties), tuple(children))

    # ------------------------------------------------------------------
    @staticmethod
    def _from_quote(node: Text) -> Block:
        header, *body = node.content.splitlines()
        match = CALLOUT_QUOTE_RE.match(header)
        if match is None:
            raise ValueError(f"Not a callout quote: {header!r}")
        properties = [Property("type", match.group("kind").split("|")[0].strip().lower())]
        if match.group("fold") == "-":
            properties.append(Property("collapsed", True))
        children = _quote_body(body)
        title = (match.group("title") or "").strip()
        if title:
            properties.append(Property("title", title))
            if not children:
                properties.append(Property("title-only", True))
        return Block(CALLOUT_NAME, tuple(properties), children)

    @staticmethod
    def _base_name(name: str) -> str:
        return name[:-1] if name.endswith("-") else name


__all__ = ["CALLOUT_NAME", "CALLOUT_TYPES", "CalloutRule"]
