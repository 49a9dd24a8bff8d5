"""Line level helpers shared by the rewrite rules."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Iterable

from .document_models import Node
from .serializer import Serializer

CHECKBOX_RE = re.compile(r"^\s*- \[([ xX])\] (.*)$")
IMAGE_RE = re.compile(r"!\[(.*?)\]\((.*?)\)(?:<br>)?([^|]*)?")
HIGHLIGHT_RE = re.compile(r"\+\+([^+]+)\+\+")
TABLE_ROW_RE = re.compile(r"^\s*\|(.+)\|\s*$")
TABLE_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")
BULLET_RE = re.compile(r"^(?P<indent>[ \t]*)[-*+] (?P<text>.*)$")
NUMBERED_RE = re.compile(r"^(?P<indent>[ \t]*)(?P<number>\d+)[.)] (?P<text>.*)$")
HEADING_RE = re.compile(r"^(?P<hashes>#{2,4})\s+(?P<text>.+?)\s*#*\s*$")
FEEDBACK_CORRECT = "=>"
FEEDBACK_HINT = "=<"

_MARKDOWN_NOISE_RE = re.compile(r"[#*_\[\]`~]")


@dataclass(slots=True)
class Figure:
    """Text of a table cell, split into caption and image source."""

    figure: str
    src: str | None = None


def body_text(nodes: Iterable[Node]) -> str:
    """Render child nodes back to source text so rules can scan them line by line."""

    return Serializer().render_nodes(nodes)


def body_lines(nodes: Iterable[Node]) -> list[str]:
    return body_text(nodes).splitlines()


def strip_markdown(text: str) -> str:
    """Drop emphasis, heading and link punctuation and collapse whitespace."""

    return re.sub(r"\s+", " ", _MARKDOWN_NOISE_RE.sub("", text)).strip()


def highlighted_terms(text: str) -> list[str]:
    return [term.strip() for term in HIGHLIGHT_RE.findall(text) if term.strip()]


def indent_width(indent: str) -> int:
    return len(indent.replace("\t", "    "))


def is_feedback_line(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(FEEDBACK_CORRECT) or stripped.startswith(FEEDBACK_HINT)


def parse_feedback(lines: Iterable[str]) -> tuple[str, str]:
    """Return the ``(correct, hint)`` feedback messages found in ``lines``."""

    correct = ""
    hint = ""
    for line in lines:
        stripped = line.strip()
        if stripped.startswith(FEEDBACK_CORRECT):
            correct = stripped[len(FEEDBACK_CORRECT) :].strip()
        elif stripped.startswith(FEEDBACK_HINT):
            hint = stripped[len(FEEDBACK_HINT) :].strip()
    return correct, hint


def split_table_row(line: str) -> list[str] | None:
    """Return trimmed cells of a pipe row, or ``None`` for non rows and separators."""

    match = TABLE_ROW_RE.match(line)
    if match is None:
        return None
    cells = [cell.strip() for cell in match.group(1).split("|")]
    if all(TABLE_SEPARATOR_CELL_RE.match(cell) for cell in cells if cell) and any(cells):
        return None
    return cells


def is_table_line(line: str) -> bool:
    return TABLE_ROW_RE.match(line) is not None


def parse_figure(cell: str) -> Figure:
    """Decompose ``![alt](src)<br>caption`` cells; plain cells keep their text."""

    match = IMAGE_RE.search(cell)
    if match is None:
        return Figure(cell.strip())
    alt, src, caption = match.group(1), match.group(2), match.group(3) or ""
    outside = IMAGE_RE.sub("", cell).strip()
    return Figure(outside or caption.strip() or alt.strip(), src.strip() or None)


def encode_attribute_json(payload: Any) -> str:
    """Compact JSON ready for a single quoted attribute value."""

    encoded = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return encoded.replace("'", "&apos;").replace('\\"', "&quot;")


__all__ = [
    "BULLET_RE",
    "CHECKBOX_RE",
    "HEADING_RE",
    "HIGHLIGHT_RE",
    "IMAGE_RE",
    "NUMBERED_RE",
    "Figure",
    "body_lines",
    "body_text",
    "encode_attribute_json",
    "highlighted_terms",
    "indent_width",
    "is_feedback_line",
    "is_table_line",
    "parse_feedback",
    "parse_figure",
    "split_table_row",
    "strip_markdown",
]
