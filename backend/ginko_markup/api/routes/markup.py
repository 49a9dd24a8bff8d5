"""Endpoints that expose the markup transformer."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from ginko_markup.api.deps import get_markup_transformer
from ginko_markup.document_models import node_to_dict
from ginko_markup.errors import MarkupError, ParseError, RuleError
from ginko_markup.schemas.api import MarkupErrorDetail, MarkupRequest, ParseResponse, TransformResponse
from ginko_markup.services.markup_transformer import MarkupTransformer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/markup", tags=["markup"])


def _error_detail(exc: MarkupError) -> dict:
    detail = MarkupErrorDetail(message=str(exc))
    if isinstance(exc, ParseError):
        detail.line = exc.line
    if isinstance(exc, RuleError):
        detail.rule = exc.rule
    return detail.model_dump(exclude_none=True)


@router.post("/transform", response_model=TransformResponse)
def transform_markup(
    payload: MarkupRequest,
    transformer: MarkupTransformer = Depends(get_markup_transformer),
) -> TransformResponse:
    try:
        result = transformer.transform(payload.text)
    except MarkupError as exc:
        raise HTTPException(status_code=422, detail=_error_detail(exc)) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Failed to transform document")
        raise HTTPException(status_code=400, detail="Document could not be processed") from exc
    return TransformResponse(output=result.output)


@router.post("/parse", response_model=ParseResponse)
def parse_markup(
    payload: MarkupRequest,
    transformer: MarkupTransformer = Depends(get_markup_transformer),
) -> ParseResponse:
    try:
        tree = transformer.parse(payload.text)
    except ParseError as exc:
        raise HTTPException(status_code=422, detail=_error_detail(exc)) from exc
    return ParseResponse(ast=node_to_dict(tree))
