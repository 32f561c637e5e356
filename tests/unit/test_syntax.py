"""Unit tests for the template tokenizer and parser."""

import pytest

from folio.contexts.templating.syntax import (
    EACH_OPEN,
    IF_CLOSE,
    TEXT,
    VARIABLE,
    Block,
    Text,
    Variable,
    parse,
    render_source,
    tokenize,
)


@pytest.mark.unit
def test_tokenize_classifies_tags():
    tokens = tokenize("A {{ name }}{{#each items}}{{/if}}")

    assert [t.kind for t in tokens] == [TEXT, VARIABLE, EACH_OPEN, IF_CLOSE]
    assert tokens[1].value == "name"
    assert tokens[2].value == "items"


@pytest.mark.unit
def test_tokenize_ignores_braced_bodies():
    """Tag bodies cannot contain braces; empty tags are plain text."""
    assert [t.kind for t in tokenize("{{}}")] == [TEXT]
    assert tokenize("{{{x}}}")[1].value == "x"


@pytest.mark.unit
def test_parse_variables_and_text():
    assert parse("Hi {{user.name}}!") == [
        Text("Hi "),
        Variable("user.name", "{{user.name}}"),
        Text("!"),
    ]


@pytest.mark.unit
def test_parse_nested_blocks():
    nodes = parse("{{#if a}}x{{#each list}}{{item}}{{/each}}{{/if}}")

    assert len(nodes) == 1
    outer = nodes[0]
    assert isinstance(outer, Block)
    assert outer.kind == "if"
    assert outer.argument == "a"
    inner = outer.children[1]
    assert isinstance(inner, Block)
    assert inner.kind == "each"
    assert inner.children == [Variable("item", "{{item}}")]


@pytest.mark.unit
def test_unclosed_block_is_literal():
    nodes = parse("{{#if a}}text {{name}}")

    assert nodes[0] == Text("{{#if a}}")
    assert nodes[2] == Variable("name", "{{name}}")


@pytest.mark.unit
def test_stray_closer_is_literal():
    nodes = parse("text{{/each}}")
    assert nodes == [Text("text"), Text("{{/each}}")]


@pytest.mark.unit
def test_inner_unclosed_block_yields_to_outer_closer():
    """An unterminated inner block does not swallow its parent's closer."""
    nodes = parse("{{#if a}}{{#each b}}x{{/if}}")

    assert len(nodes) == 1
    block = nodes[0]
    assert block.kind == "if"
    assert block.children == [Text("{{#each b}}"), Text("x")]


@pytest.mark.unit
def test_unknown_control_tags_are_text():
    nodes = parse("{{#with user}}{{/with}}{{#if}}")
    assert all(isinstance(node, Text) for node in nodes)


@pytest.mark.unit
@pytest.mark.parametrize(
    "source",
    [
        "plain",
        "{{ a }} and {{b}}",
        "{{#each items}}[{{item}}]{{/each}}",
        "{{#if x === 'y'}}{{#if z}}q{{/if}}{{/if}}",
        "{{#if open}} never closed",
        "{{/if}} stray",
    ],
)
def test_render_source_reproduces_input(source):
    assert render_source(parse(source)) == source


@pytest.mark.unit
def test_thousands_of_unclosed_openers_stay_literal():
    source = "{{#each xs}}{{#if a}}" * 3000

    nodes = parse(source)

    assert len(nodes) == 6000
    assert all(isinstance(node, Text) for node in nodes)
    assert render_source(nodes) == source


@pytest.mark.unit
def test_outer_closer_unwinds_thousands_of_open_blocks():
    source = "{{#if a}}" + "{{#each xs}}" * 3000 + "{{/if}}"

    [block] = parse(source)

    assert block.kind == "if"
    assert len(block.children) == 3000
    assert render_source([block]) == source
