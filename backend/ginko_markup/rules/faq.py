"""Question/answer lists rewritten to a single ``ginko-faq`` component."""
from __future__ import annotations

import logging
import re

from ..document_models import Block, InlineBlock, Node, Property
from ..document_text import (
    BULLET_RE,
    HEADING_RE,
    body_text,
    encode_attribute_json,
    indent_width,
    strip_markdown,
)
from ..ids import IdSource, random_ids
from ..schemas.faq import FaqItem
from .base import is_block

logger = logging.getLogger(__name__)

FAQ_NAME = "ginko-faq"
_IMAGE_COMPONENT_RE = re.compile(r":ginko-image\{([^}]*)\}")


def _no_bleed(answer: str) -> str:
    """Images inside answers must not bleed out of the accordion panel."""

    def _mark(match: re.Match[str]) -> str:
        props = match.group(1)
        if re.search(r"(?:^|\s)nobleed(?:\s|$)", props):
            return match.group(0)
        return f":ginko-image{{{props} nobleed}}" if props.strip() else ":ginko-image{nobleed}"

    return _IMAGE_COMPONENT_RE.sub(_mark, answer)


def parse_bullet_items(lines: list[str]) -> list[tuple[str, str]]:
    """Top level bullets are questions, deeper bullets their answer lines."""

    items: list[tuple[str, str]] = []
    question: str | None = None
    answer: list[str] = []
    base: int | None = None

    def _flush() -> None:
        if question and answer:
            items.append((question, "\n".join(answer).strip()))

    for line in lines:
        match = BULLET_RE.match(line)
        if match is None:
            continue
        width = indent_width(match.group("indent"))
        if base is None:
            base = width
        if width <= base:
            _flush()
            question = match.group("text").strip()
            answer = []
        elif question is not None:
            answer.append(match.group("text").strip())
    _flush()
    return items


def parse_heading_items(lines: list[str]) -> list[tuple[str, str]]:
    """``##`` to ``####`` headings are questions, the following lines the answer."""

    items: list[tuple[str, str]] = []
    question: str | None = None
    answer: list[str] = []

    def _flush() -> None:
        body = "\n".join(answer).strip()
        if question and body:
            items.append((question, body))

    for line in lines:
        match = HEADING_RE.match(line)
        if match:
            _flush()
            question = match.group("text").strip()
            answer = []
        elif question is not None:
            answer.append(line)
    _flush()
    return items


class FaqRule:
    """Bullet style is tried first; heading sections are the fallback."""

    name = "faq"

    def __init__(self, id_source: IdSource | None = None) -> None:
        self._id_source = id_source or random_ids()

    def can_handle(self, node: Node) -> bool:
        return is_block(node, "faq")

    def apply_rule(self, node: Node) -> Node:
        if not isinstance(node, Block):
            return node
        lines = body_text(node.children).splitlines()
        pairs = parse_bullet_items(lines) or parse_heading_items(lines)
        if not pairs:
            logger.debug("FAQ block without question/answer pairs")
        items = [
            FaqItem(id=self._id_source(), question=strip_markdown(question), answer=_no_bleed(answer))
            for question, answer in pairs
        ]
        payload = encode_attribute_json([item.model_dump() for item in items])
        return InlineBlock(FAQ_NAME, (Property("items", payload),), own_line=True)


__all__ = ["FAQ_NAME", "FaqRule", "parse_bullet_items", "parse_heading_items"]
