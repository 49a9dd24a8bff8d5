"""Unit tests for the end-to-end transformer service."""

from __future__ import annotations

import pytest

from ginko_markup import transform
from ginko_markup.errors import ParseError, RuleError
from ginko_markup.ids import SequentialIdSource
from ginko_markup.rules import quiz as quiz_rules
from ginko_markup.services.markup_transformer import MarkupTransformer


@pytest.fixture
def transformer() -> MarkupTransformer:
    return MarkupTransformer(id_source=SequentialIdSource("q"))


def test_callout_scenario(transformer: MarkupTransformer) -> None:
    result = transformer.transform("::note\nHello\n::")

    assert result.output == '::ginko-callout{type="note"}\nHello\n::\n'
    assert result.source_tree.children[0].name == "note"
    assert result.rewritten_tree.children[0].name == "ginko-callout"


def test_steps_scenario(transformer: MarkupTransformer) -> None:
    output = transformer.transform("::steps\n--step Step 1\nA\n--step Step 2\nB\n::").output

    assert output == (
        "::ginko-steps\n"
        '::ginko-step{label="Step 1" step="1"}\nA\n::\n'
        '::ginko-step{label="Step 2" step="2"}\nB\n::\n'
        "::\n"
    )


def test_unclosed_block_raises(transformer: MarkupTransformer) -> None:
    with pytest.raises(ParseError):
        transformer.transform("::note\nHello")


def test_quiz_and_faq_are_inline_components(transformer: MarkupTransformer) -> None:
    source = "Intro\n\n::quiz\n--select Pick one\n- [x] A\n- [ ] B\n::\n\n::faq\n- Why?\n  - Because.\n::\n"

    output = transformer.transform(source).output

    assert output.startswith("Intro\n\n:ginko-quiz{questions='[")
    assert ']\'}\n\n:ginko-faq{items=\'[{"id":"q1"' in output
    assert output.endswith("}]'}\n")


def test_enabled_rules_limit_the_pass() -> None:
    transformer = MarkupTransformer(enabled_rules=["callout"])

    output = transformer.transform("::note\nA\n::\n::tabs\n--tab T\nB\n::\n").output

    assert output == '::ginko-callout{type="note"}\nA\n::\n::tabs\n--tab T\nB\n::\n'


def test_nested_fence_colons_option() -> None:
    transformer = MarkupTransformer(nested_fence_colons=True)

    output = transformer.transform("::layout\n--col\nL\n--col\nR\n::\n").output

    assert output == ":::ginko-layout\n::ginko-column\nL\n::\n::ginko-column\nR\n::\n:::\n"


def test_max_depth_is_configurable() -> None:
    with pytest.raises(ParseError):
        MarkupTransformer(max_depth=1).transform("::tabs\n--tab A\nx\n::\n")


def test_rule_errors_are_raised(monkeypatch: pytest.MonkeyPatch, transformer: MarkupTransformer) -> None:
    def _fail(source):
        raise RuntimeError("broken table")

    monkeypatch.setitem(quiz_rules.QUESTION_PARSERS, "select", _fail)

    with pytest.raises(RuleError) as info:
        transformer.transform("::quiz\n--select Pick\n- [x] A\n::\n")

    assert info.value.rule == "quiz"


def test_module_level_transform() -> None:
    assert transform("::tip\nX\n::\n") == '::ginko-callout{type="tip"}\nX\n::\n'
