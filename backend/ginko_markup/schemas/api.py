"""Schemas for the markup transformation endpoints."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class MarkupRequest(BaseModel):
    text: str = Field(..., description="Authoring markup with front-matter already removed")


class TransformResponse(BaseModel):
    output: str = Field(..., description="Document rewritten into component syntax")


class ParseResponse(BaseModel):
    ast: dict[str, Any] = Field(..., description="Parsed tree as nested dictionaries")


class MarkupErrorDetail(BaseModel):
    message: str = Field(..., description="Why the document was rejected")
    line: Optional[int] = Field(default=None, description="1-based source line of a parse failure")
    rule: Optional[str] = Field(default=None, description="Rule that failed while rewriting")


__all__ = ["MarkupErrorDetail", "MarkupRequest", "ParseResponse", "TransformResponse"]
