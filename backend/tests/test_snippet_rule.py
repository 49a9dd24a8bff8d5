"""Unit tests for snippet sources and references."""

from __future__ import annotations

from ginko_markup.document_models import Block, InlineBlock, Property, Text
from ginko_markup.document_parser import parse
from ginko_markup.pipeline import modify
from ginko_markup.rules.snippet import SNIPPET_REFERENCE, SNIPPET_SOURCE, SnippetRule
from ginko_markup.serializer import serialize


def test_block_becomes_source_keeping_id_and_body() -> None:
    block = Block("snippet", (Property("lang", "en"), Property("id", "intro")), (Text("Hi\n"),))

    result = SnippetRule().apply_rule(block)

    assert result == Block(SNIPPET_SOURCE, (Property("id", "intro"),), (Text("Hi\n"),))


def test_inline_block_becomes_reference_keeping_id_only() -> None:
    node = InlineBlock("snippet", (Property("id", "intro"), Property("extra", True)), own_line=True)

    result = SnippetRule().apply_rule(node)

    assert result == InlineBlock(SNIPPET_REFERENCE, (Property("id", "intro"),), own_line=True)


def test_other_nodes_are_ignored() -> None:
    rule = SnippetRule()

    assert not rule.can_handle(Block(SNIPPET_SOURCE))
    assert not rule.can_handle(InlineBlock(SNIPPET_REFERENCE))
    assert not rule.can_handle(Text("snippet"))


def test_parenthesised_reference_in_prose_is_rewritten() -> None:
    output = serialize(modify(parse('See :snippet(id="abc") here\n')))

    assert output == 'See :ginko-snippet{id="abc"} here\n'
