"""Records embedded in the ``questions`` attribute of ``ginko-quiz``."""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class QuizModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Dump by alias in declaration order, leaving out unset optional fields."""

        return self.model_dump(by_alias=True, exclude_none=True)


class QuizOption(QuizModel):
    text: str = Field(..., description="Option label shown to the learner")
    correct: bool = Field(default=False, description="Whether choosing the option is right")


class QuizAnswer(QuizModel):
    text: str = Field(..., description="Expected answer text")
    correct: Optional[bool] = Field(default=None, description="Correctness flag when relevant")
    position: Optional[int] = Field(default=None, description="1-based target position for ordering kinds")


class QuizFigure(QuizModel):
    figure: str = Field(default="", description="Caption or text of a table cell")
    src: Optional[str] = Field(default=None, description="Image source when the cell holds an image")


class MatchPair(QuizModel):
    term: QuizFigure
    definition: QuizFigure


class LinkPair(QuizModel):
    id: int = Field(..., description="1-based pair identifier")
    image: Optional[str] = Field(default=None, description="Image shown next to the text")
    text: str
    match: str


class QuizFeedback(QuizModel):
    correct: str = Field(default="", description="Message shown after a right answer")
    hint: str = Field(default="", description="Hint shown after a wrong answer")


class QuizQuestion(QuizModel):
    type: str = Field(..., description="Question kind emitted for the renderer")
    difficulty: str = Field(default="medium")
    question: str = Field(default="", description="Prompt text")
    options: Optional[List[QuizOption]] = None
    answers: Optional[List[QuizAnswer]] = None
    pairs: Optional[List[Union[MatchPair, LinkPair]]] = None
    items: Optional[List[str]] = None
    additional_choices: Optional[List[str]] = Field(default=None, alias="additionalChoices")
    choose_options: Optional[str] = Field(default=None, alias="chooseOptions")
    feedback: QuizFeedback = Field(default_factory=QuizFeedback)


__all__ = [
    "LinkPair",
    "MatchPair",
    "QuizAnswer",
    "QuizFeedback",
    "QuizFigure",
    "QuizOption",
    "QuizQuestion",
]
