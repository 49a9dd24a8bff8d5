"""Directory listings rewritten to a ``file-tree`` component with YAML props."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

from ..document_models import Block, Node, Property, Text
from ..document_text import body_lines
from .base import is_block

FILE_TREE_NAMES = ("dirtree", "filetree")
# Paired toggles: the key written last decides the combined flag.
TOGGLES = {
    "showArrow": ("showArrow", True),
    "hideArrow": ("showArrow", False),
    "autoSlash": ("autoSlash", True),
    "noSlash": ("autoSlash", False),
}

_TREE_PREFIX_RE = re.compile(r"^[\s│├└─┬┼|`+\\-]*?(?:[-*+] )?(?=\S)")
_GLYPHS_ONLY_RE = re.compile(r"^[\s│├└─┬┼|`+\\-]*$")


@dataclass(slots=True)
class _Entry:
    name: str
    column: int
    children: list[_Entry] = field(default_factory=list)

    def to_yaml(self) -> Any:
        if not self.children:
            return self.name
        return {self.name: [child.to_yaml() for child in self.children]}


def _as_flag(value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    return value.strip().lower() not in {"false", "0", "no", "off"}


def parse_options(properties: tuple[Property, ...]) -> dict[str, Any]:
    options: dict[str, Any] = {}
    for item in properties:
        if item.key in ("title", "icon") and isinstance(item.value, str):
            options[item.key] = item.value
        elif item.key in TOGGLES:
            target, polarity = TOGGLES[item.key]
            options[target] = _as_flag(item.value) == polarity
    return options


def parse_tree(lines: list[str]) -> list[Any]:
    """Nest an indented listing by the column where each entry name starts."""

    root = _Entry("", -1)
    stack = [root]
    for line in lines:
        if not line.strip() or _GLYPHS_ONLY_RE.match(line):
            continue
        prefix = _TREE_PREFIX_RE.match(line)
        column = prefix.end() if prefix else 0
        entry = _Entry(line[column:].strip(), column)
        while stack[-1].column >= column:
            stack.pop()
        stack[-1].children.append(entry)
        stack.append(entry)
    return [child.to_yaml() for child in root.children]


class FileTreeRule:
    name = "file-tree"

    def can_handle(self, node: Node) -> bool:
        return is_block(node, *FILE_TREE_NAMES)

    def apply_rule(self, node: Node) -> Node:
        if not isinstance(node, Block):
            return node
        payload = parse_options(node.properties)
        payload["tree"] = parse_tree(body_lines(node.children))
        front = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True, default_flow_style=False)
        return Block("file-tree", (), (Text(f"---\n{front}---\n"),))


__all__ = ["FILE_TREE_NAMES", "FileTreeRule", "parse_options", "parse_tree"]
