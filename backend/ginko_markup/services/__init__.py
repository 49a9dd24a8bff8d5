"""Service layer for the application."""

from ginko_markup.services.markup_transformer import MarkupTransformer, TransformResult, transform

__all__ = [
    "MarkupTransformer",
    "TransformResult",
    "transform",
]
