"""Turn authoring markup into a tree of :mod:`document_models` nodes."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Literal

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
from .errors import ParseError

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64

FrameKind = Literal["document", "block", "dash"]

_NAME = r"[A-Za-z][\w-]*"
_BLOCK_OPEN_RE = re.compile(rf"^\s*(?P<colons>:{{2,}})(?P<name>{_NAME})(?P<rest>.*?)\s*$")
_BLOCK_CLOSE_RE = re.compile(r"^\s*:{2,}\s*$")
_DASH_RE = re.compile(rf"^\s*--(?P<name>{_NAME})(?P<rest>.*?)\s*$")
_FENCE_RE = re.compile(r"^\s*(?P<ticks>`{3,})(?P<info>[^`]*)$")
_DIVIDER_RE = re.compile(r"^\s*-{3,}\s*$")
_TABLE_SEPARATOR_RE = re.compile(r"^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$")
CALLOUT_QUOTE_RE = re.compile(r"^\s*>\s*\[!(?P<kind>[\w\s|]+)\](?P<fold>[-+])?(?:\s+(?P<title>.*?))?\s*$")
_QUOTE_LINE_RE = re.compile(r"^\s*>")
_INLINE_RE = re.compile(rf"`(?P<code>[^`\n]+)`|(?<![\w:]):(?P<name>{_NAME})[{{(]")
_KEY_RE = re.compile(r"[A-Za-z_:@#.][\w.:-]*")
_BARE_VALUE_RE = re.compile(r"[^\s,)}\]]+")


@dataclass(slots=True)
class _Frame:
    """Open container on the scanner stack."""

    kind: FrameKind
    name: str = ""
    properties: tuple[Property, ...] = ()
    label: str | None = None
    line: int = 0
    children: list[Node] = field(default_factory=list)
    merge_text: bool = True

    def append(self, node: Node, *, merge: bool = True) -> None:
        """Add ``node``, joining adjacent Text unless either side opts out."""

        if (
            merge
            and self.merge_text
            and isinstance(node, Text)
            and self.children
            and isinstance(self.children[-1], Text)
        ):
            self.children[-1] = Text(self.children[-1].content + node.content)
            return
        self.children.append(node)
        self.merge_text = merge

    def close(self) -> Node:
        children = tuple(self.children)
        if self.kind == "dash":
            return DashElement(self.name, self.properties, self.label, children)
        if self.kind == "block":
            return Block(self.name, self.properties, children)
        return Document(children)


def read_property_list(text: str, start: int, line: int | None = None) -> tuple[tuple[Property, ...], int]:
    """Parse the ``(...)`` or ``{...}`` list opening at ``text[start]``.

    Returns the parsed properties and the index just past the closing
    bracket. Quoted values may use either quote style; ``true``/``false``
    bare values become booleans and a key without ``=`` is a ``True`` flag.
    """

    opener = text[start]
    if opener not in "({":
        raise ParseError(f"Expected property list, found {opener!r}", line)
    closer = ")" if opener == "(" else "}"
    properties: list[Property] = []
    pos = start + 1
    length = len(text)

    while True:
        while pos < length and (text[pos].isspace() or text[pos] == ","):
            pos += 1
        if pos >= length:
            raise ParseError("Unclosed property list", line)
        if text[pos] == closer:
            return tuple(properties), pos + 1

        key_match = _KEY_RE.match(text, pos)
        if key_match is None:
            raise ParseError(f"Unexpected character {text[pos]!r} in property list", line)
        key = key_match.group(0)
        pos = key_match.end()
        while pos < length and text[pos] == " ":
            pos += 1

        if pos >= length or text[pos] != "=":
            properties.append(Property(key, True))
            continue

        pos += 1
        while pos < length and text[pos] == " ":
            pos += 1
        if pos >= length:
            raise ParseError(f"Missing value for property '{key}'", line)

        quote = text[pos]
        if quote in "\"'":
            end = text.find(quote, pos + 1)
            if end == -1:
                raise ParseError(f"Unterminated value for property '{key}'", line)
            properties.append(Property(key, text[pos + 1 : end]))
            pos = end + 1
            continue

        value_match = _BARE_VALUE_RE.match(text, pos)
        if value_match is None:
            raise ParseError(f"Missing value for property '{key}'", line)
        raw = value_match.group(0)
        pos = value_match.end()
        if raw == "true":
            properties.append(Property(key, True))
        elif raw == "false":
            properties.append(Property(key, False))
        else:
            properties.append(Property(key, raw))


def _read_heading(rest: str, line: int) -> tuple[tuple[Property, ...], str]:
    """Split what follows a block or dash name into properties and trailing text."""

    if rest[:1] in ("(", "{"):
        properties, end = read_property_list(rest, 0, line)
        return properties, rest[end:].strip()
    return (), rest.strip()


def parse_inline(text: str, line: int | None = None, *, standalone: bool = True) -> list[Node]:
    """Split one line of prose into Text, InlineCode and InlineBlock nodes.

    With ``standalone`` set, a component that is alone on its line is marked
    ``own_line`` and the surrounding whitespace is dropped.
    """

    nodes: list[Node] = []
    text_start = 0
    pos = 0
    while True:
        match = _INLINE_RE.search(text, pos)
        if match is None:
            break
        if match.group("code") is not None:
            if match.start() > text_start:
                nodes.append(Text(text[text_start : match.start()]))
            nodes.append(InlineCode(match.group("code")))
            text_start = pos = match.end()
            continue
        try:
            properties, end = read_property_list(text, match.end() - 1, line)
        except ParseError:
            # Prose that only looks like a component stays text.
            pos = match.end()
            continue
        if match.start() > text_start:
            nodes.append(Text(text[text_start : match.start()]))
        nodes.append(InlineBlock(match.group("name"), properties))
        text_start = pos = end

    if text_start < len(text):
        nodes.append(Text(text[text_start:]))

    if not standalone:
        return nodes
    blocks = [node for node in nodes if not isinstance(node, Text)]
    others = [node for node in nodes if isinstance(node, Text)]
    if (
        len(blocks) == 1
        and isinstance(blocks[0], InlineBlock)
        and all(not node.content.strip() for node in others)
    ):
        return [InlineBlock(blocks[0].name, blocks[0].properties, own_line=True)]
    return nodes


def _split_row(line: str) -> list[str]:
    body = line.strip()
    if body.startswith("|"):
        body = body[1:]
    if body.endswith("|"):
        body = body[:-1]
    return [cell.strip() for cell in body.split("|")]


def _is_table_start(lines: list[str], index: int) -> bool:
    if not lines[index].lstrip().startswith("|") or index + 1 >= len(lines):
        return False
    candidate = lines[index + 1]
    return "|" in candidate and _TABLE_SEPARATOR_RE.match(candidate.rstrip("\r\n")) is not None


class MarkupParser:
    """Single pass, stack based scanner for the authoring dialect.

    Parameters
    ----------
    max_depth:
        Maximum number of nested Blocks and DashElements. Deeper input is
        rejected with :class:`ParseError`.
    """

    def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._max_depth = max_depth

    # ------------------------------------------------------------------
    def parse(self, text: str) -> Document:
        """Parse ``text`` or raise :class:`ParseError` for the whole document."""

        lines = text.splitlines(keepends=True)
        stack: list[_Frame] = [_Frame("document")]
        index = 0

        while index < len(lines):
            raw = lines[index]
            line_no = index + 1
            stripped = raw.rstrip("\r\n")
            current = stack[-1]

            fence = _FENCE_RE.match(stripped)
            if fence:
                index = self._consume_code_block(lines, index, fence, current)
                continue

            if _BLOCK_CLOSE_RE.match(stripped):
                if current.kind == "dash":
                    stack.pop()
                    stack[-1].append(current.close())
                    current = stack[-1]
                if current.kind != "block":
                    raise ParseError("Unexpected block end", line_no)
                stack.pop()
                stack[-1].append(current.close())
                index += 1
                continue

            opening = _BLOCK_OPEN_RE.match(stripped)
            if opening:
                properties, trailing = _read_heading(opening.group("rest").lstrip(), line_no)
                # Text after the name makes the line prose.
                if not trailing:
                    self._check_depth(stack, line_no)
                    stack.append(_Frame("block", opening.group("name"), properties, line=line_no))
                    index += 1
                    continue

            dash = _DASH_RE.match(stripped)
            if dash and current.kind in ("block", "dash"):
                properties, label = _read_heading(dash.group("rest"), line_no)
                if current.kind == "dash":
                    stack.pop()
                    stack[-1].append(current.close())
                self._check_depth(stack, line_no)
                stack.append(_Frame("dash", dash.group("name"), properties, label or None, line_no))
                index += 1
                continue

            if CALLOUT_QUOTE_RE.match(stripped):
                index = self._consume_callout_quote(lines, index, current)
                continue

            if _DIVIDER_RE.match(stripped):
                current.append(Divider())
                index += 1
                continue

            if _is_table_start(lines, index):
                index = self._consume_table(lines, index, current)
                continue

            for node in parse_inline(raw, line_no):
                current.append(node)
            index += 1

        for frame in reversed(stack):
            if frame.kind == "block":
                raise ParseError(f"Unclosed block: {frame.name}", frame.line)

        document = stack[0].close()
        logger.debug("Parsed %d lines into %d top-level nodes", len(lines), len(document.children))
        return document

    # ------------------------------------------------------------------
    def _check_depth(self, stack: list[_Frame], line_no: int) -> None:
        if len(stack) > self._max_depth:
            raise ParseError(f"Nesting deeper than {self._max_depth} levels", line_no)

    @staticmethod
    def _consume_code_block(lines: list[str], index: int, fence: re.Match[str], frame: _Frame) -> int:
        ticks = fence.group("ticks")
        language = fence.group("info").strip() or None
        content: list[str] = []
        cursor = index + 1
        while cursor < len(lines):
            candidate = lines[cursor].strip()
            if candidate.startswith(ticks) and not candidate[len(ticks) :].strip("`").strip():
                cursor += 1
                break
            content.append(lines[cursor])
            cursor += 1
        frame.append(CodeBlock("".join(content), language, ticks))
        return cursor

    @staticmethod
    def _consume_callout_quote(lines: list[str], index: int, frame: _Frame) -> int:
        """Keep a ``> [!type]`` quote and its ``>`` lines as one separate Text."""

        cursor = index + 1
        while (
            cursor < len(lines)
            and _QUOTE_LINE_RE.match(lines[cursor])
            and not CALLOUT_QUOTE_RE.match(lines[cursor].rstrip("\r\n"))
        ):
            cursor += 1
        frame.append(Text("".join(lines[index:cursor])), merge=False)
        return cursor

    @staticmethod
    def _consume_table(lines: list[str], index: int, frame: _Frame) -> int:
        rows: list[TableRow] = []
        cursor = index
        while cursor < len(lines) and lines[cursor].lstrip().startswith("|"):
            line = lines[cursor].rstrip("\r\n")
            separator = cursor == index + 1
            cells: list[TableCell] = []
            for cell in _split_row(line):
                if separator or not cell:
                    cells.append(TableCell((Text(cell),) if cell else ()))
                else:
                    cells.append(TableCell(tuple(parse_inline(cell, cursor + 1, standalone=False))))
            rows.append(TableRow(tuple(cells), separator=separator))
            cursor += 1
        frame.append(Table(tuple(rows)))
        return cursor


def parse(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Document:
    """Parse ``text`` into a :class:`Document`, raising :class:`ParseError`."""

    return MarkupParser(max_depth=max_depth).parse(text)


def parse_markdown(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Document | ParseError:
    """Like :func:`parse` but returns the error instead of raising it."""

    try:
        return parse(text, max_depth=max_depth)
    except ParseError as exc:
        logger.warning("Rejected document: %s", exc)
        return exc


__all__ = [
    "CALLOUT_QUOTE_RE",
    "DEFAULT_MAX_DEPTH",
    "MarkupParser",
    "parse",
    "parse_inline",
    "parse_markdown",
    "read_property_list",
]
