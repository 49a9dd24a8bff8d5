"""Rewrite authoring markup (callouts, tabs, quizzes, ...) into MDC component syntax."""

from ginko_markup.document_parser import parse, parse_markdown
from ginko_markup.errors import MarkupError, ParseError, RuleError
from ginko_markup.pipeline import MarkupModifier, modify
from ginko_markup.serializer import serialize
from ginko_markup.services.markup_transformer import MarkupTransformer, transform

__all__ = [
    "MarkupError",
    "MarkupModifier",
    "MarkupTransformer",
    "ParseError",
    "RuleError",
    "modify",
    "parse",
    "parse_markdown",
    "serialize",
    "transform",
]
