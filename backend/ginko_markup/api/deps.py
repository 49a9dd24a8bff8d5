"""Common dependency functions for API routes."""

from functools import lru_cache
from typing import Generator

from fastapi import Depends

from ginko_markup.core.config import Settings, get_settings
from ginko_markup.ids import random_ids
from ginko_markup.services.markup_transformer import MarkupTransformer


def get_app_settings() -> Generator:
    yield get_settings()


@lru_cache
def _build_transformer(
    max_depth: int,
    nested_fence_colons: bool,
    enabled_rules: tuple[str, ...],
    faq_id_length: int,
) -> MarkupTransformer:
    return MarkupTransformer(
        max_depth=max_depth,
        nested_fence_colons=nested_fence_colons,
        enabled_rules=enabled_rules,
        id_source=random_ids(faq_id_length),
    )


def get_markup_transformer(settings: Settings = Depends(get_app_settings)) -> MarkupTransformer:
    return _build_transformer(
        settings.max_nesting_depth,
        settings.nested_fence_colons,
        tuple(settings.enabled_rules),
        settings.faq_id_length,
    )
