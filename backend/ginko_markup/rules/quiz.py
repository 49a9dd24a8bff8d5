"""``::quiz`` blocks decoded into the JSON payload of ``ginko-quiz``.

Every ``--kind(props) label`` item of the block is one question. The label
is the prompt; when it is empty the first prose line of the body is used.
Each kind reads its own line grammar from the body:

``select``  ``- [ ] text`` / ``- [x] text`` options
``blank``   ``++term++`` markers become the expected answers
``choose``  ``options="a|b"`` plus the ``++term++`` words of the prompt
``find``    like ``choose``, markers may also sit in the body
``sort``    bullet or numbered lines, document order is the solution
``order``   numbered lines carry their target position
``match``   two level bullets or a table (first row is the prompt)
``pair``    two level bullets, ``- text | match`` lines or a table

``=>`` and ``=<`` lines are the feedback shown on success and as a hint.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..document_models import Block, DashElement, InlineBlock, Node, Property, get_property
from ..document_text import (
    BULLET_RE,
    CHECKBOX_RE,
    NUMBERED_RE,
    body_lines,
    encode_attribute_json,
    highlighted_terms,
    indent_width,
    is_feedback_line,
    is_table_line,
    parse_feedback,
    parse_figure,
    split_table_row,
)
from ..schemas.quiz import (
    LinkPair,
    MatchPair,
    QuizAnswer,
    QuizFeedback,
    QuizFigure,
    QuizOption,
    QuizQuestion,
)

logger = logging.getLogger(__name__)

QUIZ_NAME = "ginko-quiz"
DEFAULT_DIFFICULTY = "medium"


@dataclass(slots=True)
class QuestionSource:
    """Prompt and body lines of one quiz item."""

    kind: str
    properties: tuple[Property, ...]
    question: str
    question_line: int | None
    lines: list[str]

    @property
    def difficulty(self) -> str:
        value = get_property(self.properties, "difficulty")
        return value if isinstance(value, str) and value.strip() else DEFAULT_DIFFICULTY

    @property
    def feedback(self) -> QuizFeedback:
        correct, hint = parse_feedback(self.lines)
        return QuizFeedback(correct=correct, hint=hint)

    def prose_lines(self) -> list[str]:
        """Body lines that are neither list items, table rows nor feedback."""

        return [
            line
            for index, line in enumerate(self.lines)
            if index != self.question_line and _is_prose(line)
        ]

    def base(self, kind: str | None = None) -> dict:
        return {
            "type": kind or self.kind,
            "difficulty": self.difficulty,
            "question": self.question,
            "feedback": self.feedback,
        }


def _is_prose(line: str) -> bool:
    if not line.strip():
        return False
    return not (
        CHECKBOX_RE.match(line)
        or BULLET_RE.match(line)
        or NUMBERED_RE.match(line)
        or is_table_line(line)
        or is_feedback_line(line)
    )


def _unique(values: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def _explicit_options(source: QuestionSource) -> tuple[str | None, list[str]]:
    raw = get_property(source.properties, "options")
    if not isinstance(raw, str):
        return None, []
    return raw, [option.strip() for option in raw.split("|") if option.strip()]


def _list_entries(lines: list[str]) -> list[tuple[int | None, str]]:
    """``(number, text)`` of every bullet or numbered line; bullets have no number."""

    entries: list[tuple[int | None, str]] = []
    for line in lines:
        if CHECKBOX_RE.match(line):
            continue
        numbered = NUMBERED_RE.match(line)
        if numbered:
            entries.append((int(numbered.group("number")), numbered.group("text").strip()))
            continue
        bullet = BULLET_RE.match(line)
        if bullet:
            entries.append((None, bullet.group("text").strip()))
    return entries


def _nested_pairs(lines: list[str]) -> list[tuple[str, str]]:
    """``- term`` followed by a deeper ``- definition`` line."""

    pairs: list[tuple[str, str]] = []
    index = 0
    while index < len(lines):
        outer = BULLET_RE.match(lines[index])
        if outer and index + 1 < len(lines):
            inner = BULLET_RE.match(lines[index + 1])
            if inner and indent_width(inner.group("indent")) > indent_width(outer.group("indent")):
                pairs.append((outer.group("text").strip(), inner.group("text").strip()))
                index += 2
                continue
        index += 1
    return pairs


def _table_rows(lines: list[str]) -> list[list[str]]:
    rows: list[list[str]] = []
    for line in lines:
        cells = split_table_row(line)
        if cells is not None:
            rows.append(cells)
    return rows


def _table_question(source: QuestionSource) -> tuple[str | None, list[list[str]]]:
    """Header prompt and data rows of a table question.

    The header row is either the dash label itself (``--match | Q | |``) or
    the first pipe row of the body. Without any table the prompt is ``None``.
    """

    header = split_table_row(source.question) if source.question.startswith("|") else None
    rows = _table_rows(source.lines)
    if header is not None:
        return header[0], rows
    if not rows:
        return None, []
    return (rows[0][0] if rows[0] else source.question), rows[1:]


def _figure(cell: str) -> QuizFigure:
    figure = parse_figure(cell)
    return QuizFigure(figure=figure.figure, src=figure.src)


# ----------------------------------------------------------------------
# Question kinds


def parse_select(source: QuestionSource) -> QuizQuestion:
    options = []
    for line in source.lines:
        match = CHECKBOX_RE.match(line)
        if match:
            options.append(QuizOption(text=match.group(2).strip(), correct=match.group(1) in "xX"))
    return QuizQuestion(**source.base(), options=options)


def parse_blank(source: QuestionSource) -> QuizQuestion:
    terms = highlighted_terms(source.question)
    for line in source.prose_lines():
        terms.extend(highlighted_terms(line))
    return QuizQuestion(**source.base(), answers=[QuizAnswer(text=term) for term in terms])


def _choose_record(source: QuestionSource, highlighted: list[str]) -> QuizQuestion:
    raw, explicit = _explicit_options(source)
    highlighted = _unique(highlighted)
    choices = _unique(explicit + highlighted)
    return QuizQuestion(
        **source.base("choose"),
        options=[QuizOption(text=choice, correct=choice in highlighted) for choice in choices],
        items=highlighted,
        additional_choices=[option for option in explicit if option not in highlighted],
        choose_options=raw,
    )


def parse_choose(source: QuestionSource) -> QuizQuestion:
    return _choose_record(source, highlighted_terms(source.question))


def parse_find(source: QuestionSource) -> QuizQuestion:
    terms = highlighted_terms(source.question)
    for line in source.prose_lines():
        terms.extend(highlighted_terms(line))
    return _choose_record(source, terms)


def parse_sort(source: QuestionSource) -> QuizQuestion:
    items = [text for _, text in _list_entries(source.lines)]
    answers = [QuizAnswer(text=text, position=index) for index, text in enumerate(items, start=1)]
    return QuizQuestion(**source.base(), items=items, answers=answers)


def parse_order(source: QuestionSource) -> QuizQuestion:
    entries = _list_entries(source.lines)
    items = [text for _, text in entries]
    positioned = [
        (number if number is not None else index, text)
        for index, (number, text) in enumerate(entries, start=1)
    ]
    positioned.sort(key=lambda entry: entry[0])
    answers = [QuizAnswer(text=text, position=position) for position, text in positioned]
    return QuizQuestion(**source.base(), items=items, answers=answers)


def parse_match(source: QuestionSource) -> QuizQuestion:
    record = source.base()
    question, rows = _table_question(source)
    if question is not None:
        record["question"] = question
        candidates = [(row[0], row[1]) for row in rows if len(row) >= 2]
    else:
        candidates = _nested_pairs(source.lines)

    pairs: list[MatchPair] = []
    seen: set[tuple[str, str]] = set()
    for term, definition in candidates:
        if (term, definition) in seen:
            continue
        seen.add((term, definition))
        pairs.append(MatchPair(term=_figure(term), definition=_figure(definition)))
    return QuizQuestion(**record, pairs=pairs)


def parse_pair(source: QuestionSource) -> QuizQuestion:
    record = source.base()
    question, rows = _table_question(source)
    if question is not None:
        if source.question.startswith("|"):
            record["question"] = question
        candidates = [(row[0], row[1]) for row in rows if len(row) >= 2]
    else:
        candidates = _nested_pairs(source.lines)
        if not candidates:
            for line in source.lines:
                bullet = BULLET_RE.match(line)
                if bullet and "|" in bullet.group("text"):
                    text, _, match = bullet.group("text").partition("|")
                    candidates.append((text.strip(), match.strip()))

    pairs: list[LinkPair] = []
    seen: set[tuple[str, str]] = set()
    for text, match in candidates:
        if (text, match) in seen:
            continue
        seen.add((text, match))
        figure = parse_figure(text)
        pairs.append(LinkPair(id=len(pairs) + 1, image=figure.src, text=figure.figure, match=match))
    return QuizQuestion(**record, pairs=pairs)


QUESTION_PARSERS: dict[str, Callable[[QuestionSource], QuizQuestion]] = {
    "select": parse_select,
    "blank": parse_blank,
    "choose": parse_choose,
    "sort": parse_sort,
    "match": parse_match,
    "pair": parse_pair,
    "order": parse_order,
    "find": parse_find,
}


def question_source(element: DashElement) -> QuestionSource:
    lines = body_lines(element.children)
    question = (element.label or "").strip()
    question_line: int | None = None
    if not question:
        for index, line in enumerate(lines):
            if _is_prose(line):
                question, question_line = line.strip(), index
                break
    return QuestionSource(element.name, element.properties, question, question_line, lines)


class QuizRule:
    """Only DashElement children are read; unknown kinds are skipped."""

    name = "quiz"

    def can_handle(self, node: Node) -> bool:
        if not isinstance(node, Block):
            return False
        if node.name == "quiz":
            return True
        return node.name == "ginko-callout" and get_property(node.properties, "type") == "quiz"

    def apply_rule(self, node: Node) -> Node:
        if not isinstance(node, Block):
            return node
        questions: list[QuizQuestion] = []
        for child in node.children:
            if not isinstance(child, DashElement):
                continue
            parser = QUESTION_PARSERS.get(child.name)
            if parser is None:
                logger.debug("Skipping unknown quiz item kind '%s'", child.name)
                continue
            questions.append(parser(question_source(child)))
        payload = encode_attribute_json([question.to_payload() for question in questions])
        return InlineBlock(QUIZ_NAME, (Property("questions", payload),), own_line=True)


__all__ = ["QUESTION_PARSERS", "QUIZ_NAME", "QuestionSource", "QuizRule", "question_source"]
