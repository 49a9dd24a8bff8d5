"""Unit tests for the block scanner."""

from __future__ import annotations

import pytest

from ginko_markup.document_models import (
    Block,
    CodeBlock,
    DashElement,
    Divider,
    Document,
    InlineBlock,
    InlineCode,
    Property,
    Table,
    Text,
)
from ginko_markup.document_parser import MarkupParser, parse, parse_markdown, read_property_list
from ginko_markup.errors import ParseError


def test_block_keeps_text_verbatim() -> None:
    document = parse("::note\nHello\n::")

    assert document == Document((Block("note", (), (Text("Hello\n"),)),))


def test_collapsed_suffix_stays_part_of_the_name() -> None:
    document = parse("::info-\nBody\n::\n")

    assert document.children[0].name == "info-"


def test_nested_blocks_inside_dash_elements() -> None:
    source = "::tabs\n--tab One\n::note\nInner\n::\nAfter\n--tab Two\nB\n::\n"

    document = parse(source)

    tabs = document.children[0]
    assert tabs == Block(
        "tabs",
        (),
        (
            DashElement("tab", (), "One", (Block("note", (), (Text("Inner\n"),)), Text("After\n"))),
            DashElement("tab", (), "Two", (Text("B\n"),)),
        ),
    )


def test_dash_properties_and_label() -> None:
    document = parse('::quiz\n--select(difficulty="easy") What is it?\n- [x] A\n::\n')

    item = document.children[0].children[0]
    assert isinstance(item, DashElement)
    assert item.properties == (Property("difficulty", "easy"),)
    assert item.label == "What is it?"
    assert item.children == (Text("- [x] A\n"),)


def test_dash_line_outside_block_is_text() -> None:
    assert parse("--tab One\n") == Document((Text("--tab One\n"),))


def test_property_list_grammar() -> None:
    source = "{title=\"Hi\" open, count=3 hidden=false mode='a b'}"
    properties, end = read_property_list(source, 0)

    assert properties == (
        Property("title", "Hi"),
        Property("open", True),
        Property("count", "3"),
        Property("hidden", False),
        Property("mode", "a b"),
    )
    assert end == len(source)


@pytest.mark.parametrize(
    "source",
    [
        '::note{title="oops}\n::\n',
        "::note(open\n::\n",
        "::note{=x}\n::\n",
    ],
)
def test_malformed_block_heading_raises(source: str) -> None:
    with pytest.raises(ParseError) as info:
        parse(source)

    assert info.value.line == 1


def test_unclosed_block_is_rejected() -> None:
    with pytest.raises(ParseError) as info:
        parse("::note\nHello")

    assert info.value.line == 1
    assert "Unclosed block: note" in str(info.value)


def test_unclosed_dash_element_reports_its_block() -> None:
    with pytest.raises(ParseError) as info:
        parse("intro\n::tabs\n--tab A\ntext\n")

    assert info.value.line == 2


def test_close_without_open_block() -> None:
    with pytest.raises(ParseError) as info:
        parse("text\n::\n")

    assert info.value.line == 2
    assert "Unexpected block end" in str(info.value)


def test_parse_markdown_returns_error_value() -> None:
    result = parse_markdown("::note\nHello")

    assert isinstance(result, ParseError)


def test_depth_cap() -> None:
    parser = MarkupParser(max_depth=2)

    assert parser.parse("::a\n::b\n::\n::\n").children[0].children[0].name == "b"
    with pytest.raises(ParseError):
        parser.parse("::a\n::b\n::c\n::\n::\n::\n")


def test_code_fence_content_is_not_scanned() -> None:
    document = parse("::note\n```python\n::inner\n--tab x\n```\n::\n")

    assert document.children[0].children == (CodeBlock("::inner\n--tab x\n", "python"),)


def test_unterminated_code_fence_runs_to_end() -> None:
    document = parse("```\n::note\n")

    assert document == Document((CodeBlock("::note\n", None),))


def test_inline_code_and_inline_blocks() -> None:
    document = parse('Use `x` and :badge{text="new"} here\n')

    assert document.children == (
        Text("Use "),
        InlineCode("x"),
        Text(" and "),
        InlineBlock("badge", (Property("text", "new"),)),
        Text(" here\n"),
    )


def test_inline_block_on_its_own_line() -> None:
    document = parse(':snippet{id="abc"}\nNext\n')

    assert document.children == (
        InlineBlock("snippet", (Property("id", "abc"),), own_line=True),
        Text("Next\n"),
    )


def test_prose_resembling_component_stays_text() -> None:
    document = parse("time:now{ unclosed\n")

    assert document.children == (Text("time:now{ unclosed\n"),)


def test_divider() -> None:
    assert parse("a\n---\nb\n").children == (Text("a\n"), Divider(), Text("b\n"))


def test_table_rows_and_cells() -> None:
    document = parse("| a | `b` |\n|---|---|\n| 1 | 2 |\nafter\n")

    table, tail = document.children
    assert isinstance(table, Table)
    assert [row.separator for row in table.rows] == [False, True, False]
    assert table.rows[0].cells[1].children == (InlineCode("b"),)
    assert table.rows[2].cells[0].children == (Text("1"),)
    assert tail == Text("after\n")


def test_pipe_rows_without_separator_are_text() -> None:
    assert parse("| a | b |\n| c | d |\n").children == (Text("| a | b |\n| c | d |\n"),)


def test_block_name_followed_by_text_is_prose() -> None:
    document = parse("::note Some title\nBody\n")

    assert document.children == (Text("::note Some title\nBody\n"),)


def test_inline_block_with_parenthesised_properties() -> None:
    document = parse('See :snippet(id="abc") here\n')

    assert document.children == (
        Text("See "),
        InlineBlock("snippet", (Property("id", "abc"),)),
        Text(" here\n"),
    )


def test_callout_quote_is_kept_as_its_own_text() -> None:
    document = parse("Intro\n> [!tip]- Heads up\n> Body\nAfter\n")

    assert document.children == (
        Text("Intro\n"),
        Text("> [!tip]- Heads up\n> Body\n"),
        Text("After\n"),
    )
