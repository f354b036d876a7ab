"""Minimal HTML fragment tree for inline line markup.

Captured lines arrive as inline HTML (highlight spans, file-reference links).
The decorator needs three things from that markup: a tree, the text nodes in
document order, and a faithful re-serialization. This module provides exactly
those on top of the standard library tokenizer.

Traversal and serialization use explicit stacks; nesting depth never turns
into Python recursion.

// [LAW:single-enforcer] FragmentParser is the only place markup is parsed.
"""

from __future__ import annotations

import html
from collections.abc import Iterator
from dataclasses import dataclass, field
from html.parser import HTMLParser


VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})


class HtmlParseError(ValueError):
    """Raised when a fragment cannot be turned into a tree."""


@dataclass(eq=False)
class TextNode:
    value: str


@dataclass(eq=False)
class CommentNode:
    value: str


@dataclass(eq=False)
class Element:
    tag: str
    attrs: list[tuple[str, str | None]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def get(self, name: str) -> str | None:
        for key, value in self.attrs:
            if key == name:
                return value
        return None


Node = TextNode | CommentNode | Element

# Root tag for parsed fragments; it is never serialized.
FRAGMENT_TAG = "#fragment"


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = Element(FRAGMENT_TAG)
        self._open: list[Element] = [self.root]

    def _append(self, node: Node) -> None:
        self._open[-1].children.append(node)

    def handle_starttag(self, tag, attrs):
        element = Element(tag, list(attrs))
        self._append(element)
        if tag not in VOID_ELEMENTS:
            self._open.append(element)

    def handle_startendtag(self, tag, attrs):
        self._append(Element(tag, list(attrs)))

    def handle_endtag(self, tag):
        # Close up to the nearest matching open element; stray end tags are dropped.
        for depth in range(len(self._open) - 1, 0, -1):
            if self._open[depth].tag == tag:
                del self._open[depth:]
                return

    def handle_data(self, data):
        children = self._open[-1].children
        if children and isinstance(children[-1], TextNode):
            children[-1].value += data
        else:
            children.append(TextNode(data))

    def handle_comment(self, data):
        self._append(CommentNode(data))


def parse_fragment(fragment: str) -> Element:
    """Parse an inline HTML fragment into a detached root element."""
    builder = _TreeBuilder()
    try:
        builder.feed(fragment)
        builder.close()
    except (AssertionError, ValueError) as exc:
        raise HtmlParseError(f"cannot parse fragment: {exc}") from exc
    return builder.root


def walk_text_nodes(root: Element) -> Iterator[TextNode]:
    """Yield text nodes under root in document order."""
    stack: list[Node] = list(reversed(root.children))
    while stack:
        node = stack.pop()
        if isinstance(node, TextNode):
            yield node
        elif isinstance(node, Element):
            stack.extend(reversed(node.children))


def text_content(root: Element) -> str:
    return "".join(node.value for node in walk_text_nodes(root))


def _start_tag(element: Element) -> str:
    parts = [element.tag]
    for name, value in element.attrs:
        if value is None:
            parts.append(name)
        else:
            parts.append(f'{name}="{html.escape(value, quote=True)}"')
    return "<" + " ".join(parts) + ">"


def serialize_children(root: Element) -> str:
    """Serialize root's content (its inner HTML)."""
    out: list[str] = []
    # Entries are nodes to emit or literal closing tags.
    stack: list[Node | str] = list(reversed(root.children))
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        elif isinstance(item, TextNode):
            out.append(html.escape(item.value, quote=False))
        elif isinstance(item, CommentNode):
            out.append(f"<!--{item.value}-->")
        else:
            out.append(_start_tag(item))
            if item.tag in VOID_ELEMENTS:
                continue
            stack.append(f"</{item.tag}>")
            stack.extend(reversed(item.children))
    return "".join(out)


class FragmentParser:
    """Tree capability handed to the decorator.

    Passing None instead of a FragmentParser selects the decorator's
    string-only path.
    """

    def parse(self, fragment: str) -> Element:
        return parse_fragment(fragment)

    def walk_text_nodes(self, root: Element) -> Iterator[TextNode]:
        return walk_text_nodes(root)

    def serialize(self, root: Element) -> str:
        return serialize_children(root)


SHARED_PARSER = FragmentParser()
