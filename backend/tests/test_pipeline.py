"""Unit tests for the rewrite pass."""

from __future__ import annotations

from ginko_markup.document_models import Block, Document, InlineBlock, Node, Property, Table, Text
from ginko_markup.document_parser import parse
from ginko_markup.errors import ParseError, RuleError
from ginko_markup.ids import SequentialIdSource
from ginko_markup.pipeline import MarkupModifier, modify
from ginko_markup.rules import default_rules
from ginko_markup.serializer import serialize


class RenameRule:
    """Test rule renaming one block name to another."""

    def __init__(self, source: str, target: str) -> None:
        self.name = f"{source}->{target}"
        self._source = source
        self._target = target
        self.calls = 0

    def can_handle(self, node: Node) -> bool:
        return isinstance(node, Block) and node.name == self._source

    def apply_rule(self, node: Node) -> Node:
        self.calls += 1
        return Block(self._target, node.properties, node.children)


class ExplodingRule:
    name = "exploding"

    def can_handle(self, node: Node) -> bool:
        return isinstance(node, Block) and node.name == "boom"

    def apply_rule(self, node: Node) -> Node:
        raise ValueError("cannot rewrite")


def test_error_input_is_returned_unchanged() -> None:
    error = ParseError("Unclosed block: note", 1)

    assert modify(error) is error


def test_missing_or_malformed_input_yields_empty_document() -> None:
    assert modify(None) == Document()
    assert modify("::note\n::") == Document()
    assert modify(Block("note")) == Document()


def test_first_matching_rule_wins() -> None:
    first = RenameRule("a", "b")
    second = RenameRule("a", "c")

    result = MarkupModifier([first, second]).modify(parse("::a\n::\n"))

    assert result == Document((Block("b"),))
    assert (first.calls, second.calls) == (1, 0)


def test_replacement_children_are_visited() -> None:
    outer = RenameRule("outer", "done")
    inner = RenameRule("inner", "done-inner")

    result = MarkupModifier([outer, inner]).modify(parse("::outer\n::inner\nx\n::\n::\n"))

    assert result == Document((Block("done", (), (Block("done-inner", (), (Text("x\n"),)),)),))


def test_table_cells_are_visited() -> None:
    source = '| :snippet{id="a"} | x |\n|---|---|\n'

    result = modify(parse(source))

    table = result.children[0]
    assert isinstance(table, Table)
    assert table.rows[0].cells[0].children == (InlineBlock("ginko-snippet", (Property("id", "a"),)),)


def test_rule_failure_aborts_the_whole_pass() -> None:
    tree = parse("::a\n::\n::wrapper\n::boom\n::\n::\n")

    result = MarkupModifier([RenameRule("a", "b"), ExplodingRule()]).modify(tree)

    assert isinstance(result, RuleError)
    assert result.rule == "exploding"
    assert isinstance(result.cause, ValueError)


def test_callout_scenarios() -> None:
    assert serialize(modify(parse("::note\nHello\n::"))) == '::ginko-callout{type="note"}\nHello\n::\n'
    assert serialize(modify(parse("::info-\nBody\n::"))) == '::ginko-callout{type="info" collapsed}\nBody\n::\n'


def test_nested_components_compose() -> None:
    source = "::tabs\n--tab First\n::warning\n--title Careful\nInside\n::\n--tab Second\nPlain\n::\n"

    output = serialize(modify(parse(source)))

    assert output == (
        "::ginko-tabs\n"
        '::ginko-tab{label="First"}\n'
        '::ginko-callout{type="warning" title="Careful"}\n'
        "Inside\n"
        "::\n"
        "::\n"
        '::ginko-tab{label="Second"}\n'
        "Plain\n"
        "::\n"
        "::\n"
    )


def test_prose_passes_through_untouched() -> None:
    source = "# Title\n\nSome *prose* with `code`.\n\n```js\n::note\n```\n---\n"

    assert serialize(modify(parse(source))) == source


def test_modify_is_idempotent() -> None:
    source = (
        "::note-\nA\n::\n"
        "::tabs\n--tab One\nx\n::\n"
        "::steps\n--step S\ny\n::\n"
        "::layout\n--col\nL\n--col\nR\n::\n"
        "::faq\n- Q?\n  - A.\n::\n"
        "::quiz\n--select Pick\n- [x] A\n::\n"
        "::dirtree\nsrc/\n::\n"
        ":snippet{id=\"s\"}\n"
    )
    rules = default_rules(id_source=SequentialIdSource())

    once = MarkupModifier(rules).modify(parse(source))
    twice = MarkupModifier(rules).modify(once)

    assert isinstance(once, Document)
    assert twice == once
