"""Records embedded in the ``items`` attribute of ``ginko-faq``."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FaqItem(BaseModel):
    id: str = Field(..., description="Identifier produced by the configured id source")
    question: str = Field(..., description="Question with markdown emphasis removed")
    answer: str = Field(..., description="Answer body as written in the source")


__all__ = ["FaqItem"]
