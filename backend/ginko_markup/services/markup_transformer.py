"""Service running parse, rewrite and serialize over a single document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ginko_markup.document_models import Document
from ginko_markup.document_parser import DEFAULT_MAX_DEPTH, MarkupParser
from ginko_markup.errors import MarkupError
from ginko_markup.ids import IdSource
from ginko_markup.pipeline import MarkupModifier
from ginko_markup.rules import default_rules
from ginko_markup.serializer import Serializer

logger = logging.getLogger(__name__)


@dataclass
class TransformResult:
    """Rewritten text together with the trees it was produced from."""

    output: str
    source_tree: Document
    rewritten_tree: Document


class MarkupTransformer:
    """Turn authoring markup into component markup.

    Failures are raised as :class:`MarkupError`; callers keep the original
    text untouched in that case since no partial output is ever produced.
    """

    def __init__(
        self,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        nested_fence_colons: bool = False,
        enabled_rules: Optional[Iterable[str]] = None,
        id_source: Optional[IdSource] = None,
    ) -> None:
        self._parser = MarkupParser(max_depth=max_depth)
        self._modifier = MarkupModifier(default_rules(id_source=id_source, enabled=enabled_rules))
        self._serializer = Serializer(nested_fence_colons=nested_fence_colons)

    # ------------------------------------------------------------------
    def parse(self, text: str) -> Document:
        """Parse ``text`` without rewriting it."""

        return self._parser.parse(text)

    def transform(self, text: str) -> TransformResult:
        """Parse, rewrite and serialize ``text``."""

        tree = self._parser.parse(text)
        rewritten = self._modifier.modify(tree)
        if isinstance(rewritten, MarkupError):
            raise rewritten
        output = self._serializer.render(rewritten)
        logger.info(
            "Transformed document: %d -> %d characters, %d top-level nodes",
            len(text),
            len(output),
            len(rewritten.children),
        )
        return TransformResult(output=output, source_tree=tree, rewritten_tree=rewritten)


def transform(text: str) -> str:
    """Parse, rewrite with the standard rules and serialize ``text``."""

    return MarkupTransformer().transform(text).output


__all__ = ["MarkupTransformer", "TransformResult", "transform"]
