"""Tests for smart_wrap.core.html_tree: fragment parse and serialize."""

import pytest

from smart_wrap.core.html_tree import (
    SHARED_PARSER,
    CommentNode,
    Element,
    TextNode,
    parse_fragment,
    serialize_children,
    text_content,
    walk_text_nodes,
)


@pytest.mark.parametrize(
    "fragment",
    [
        "plain text",
        '<span class="hl-kw">def</span> parse(<span class="hl-arg">text</span>):',
        '<a href="src/app.py?line=1&amp;col=2">src/app.py</a>',
        "a &amp; b &lt;c&gt;",
        'say "hi" and \'bye\'',
        "line<br>break",
        "<!-- marker -->visible",
        '<input disabled value="x">',
        "",
    ],
)
def test_round_trip(fragment):
    assert serialize_children(parse_fragment(fragment)) == fragment


def test_unclosed_tag_is_closed():
    assert serialize_children(parse_fragment("<b>bold")) == "<b>bold</b>"


def test_mismatched_end_tag_closes_nearest_match():
    root = parse_fragment("<b><i>x</b>y")
    assert serialize_children(root) == "<b><i>x</i></b>y"


def test_stray_end_tag_dropped_and_text_merged():
    root = parse_fragment("a</b>c")
    assert len(root.children) == 1
    assert isinstance(root.children[0], TextNode)
    assert root.children[0].value == "ac"


def test_self_closing_void_element():
    root = parse_fragment("a<br/>b")
    assert [type(node) for node in root.children] == [TextNode, Element, TextNode]
    assert serialize_children(root) == "a<br>b"


def test_text_nodes_in_document_order():
    root = parse_fragment('<span>-</span> <span><b>path</b>/file</span>')
    assert [node.value for node in walk_text_nodes(root)] == ["-", " ", "path", "/file"]


def test_text_content_decodes_entities():
    assert text_content(parse_fragment("<span>a &amp; b</span>&gt;")) == "a & b>"


def test_comments_are_not_text():
    root = parse_fragment("<!--x-->y")
    assert isinstance(root.children[0], CommentNode)
    assert text_content(root) == "y"


def test_element_get():
    root = parse_fragment('<span class="tok" data-x="1">t</span>')
    span = root.children[0]
    assert span.get("class") == "tok"
    assert span.get("data-x") == "1"
    assert span.get("missing") is None


def test_deep_nesting_is_not_recursive():
    depth = 5000
    fragment = "<span>" * depth + "x" + "</span>" * depth
    root = SHARED_PARSER.parse(fragment)
    assert [node.value for node in SHARED_PARSER.walk_text_nodes(root)] == ["x"]
    assert SHARED_PARSER.serialize(root) == fragment


def test_mutated_text_is_escaped():
    root = parse_fragment("<span>x</span>")
    next(walk_text_nodes(root)).value = "<&>"
    assert serialize_children(root) == "<span>&lt;&amp;&gt;</span>"
