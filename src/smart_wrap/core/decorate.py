"""Apply a line's Classification to its rendered HTML.

The decorator never changes what the user sees or copies. It only
  - picks the row CSS class for the rule,
  - swaps the space after a list marker for a no-break space (with a word
    joiner after a hyphen, so "- " is not a hyphenation point),
  - wraps the content in a hanging-indent span.

Tree-based patching needs a FragmentParser; with parser=None the decorator
falls back to string edits and skips the hanging indent.

// [LAW:single-enforcer] decorate() is the only writer of smart-wrap markup.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from smart_wrap.core.html_tree import (
    SHARED_PARSER,
    Element,
    FragmentParser,
    HtmlParseError,
)
from smart_wrap.core.rules import is_prompt_prefix
from smart_wrap.core.text import NO_BREAK_SPACE, WORD_JOINER
from smart_wrap.core.types import (
    HANGING_INDENT_RULES,
    Classification,
    DecoratedLine,
    RuleTag,
)

logger = logging.getLogger(__name__)


PRESERVE_ROW_CLASS = "smart-wrap-preserve-row"
DIVIDER_CLASS = "smart-wrap-divider"
DIFF_BLOCK_CLASS = "smart-wrap-diff-block"
CLAUDE_BLOCK_CLASS = "smart-wrap-claude-block"
HANG_CLASS = "smart-wrap-hang"
INDENT_PROPERTY = "--smart-wrap-indent-ch"

# [LAW:one-type-per-behavior] Every RuleTag has an explicit entry.
CLASS_NAMES: dict[RuleTag, str] = {
    RuleTag.STATUSLINE_PRESERVE: PRESERVE_ROW_CLASS,
    RuleTag.TABLE_PRESERVE: PRESERVE_ROW_CLASS,
    RuleTag.STARTUP_BANNER_BLOCK: PRESERVE_ROW_CLASS,
    RuleTag.DIVIDER_CLIP: DIVIDER_CLASS,
    RuleTag.CODEX_DIFF_BLOCK: DIFF_BLOCK_CLASS,
    RuleTag.CLAUDE_TOOL_BLOCK: CLAUDE_BLOCK_CLASS,
    RuleTag.DEFAULT: "",
    RuleTag.LIST_LONG_WORD: "",
    RuleTag.LABEL_INDENT: "",
    RuleTag.GENERIC_INDENT: "",
}

_TRAILING_WS_RE = re.compile(r"^(.*?)(\s+)$", re.DOTALL)


def resolve_class_name(rule: RuleTag) -> str:
    return CLASS_NAMES[rule]


def _non_break_gap(preceding: str) -> str:
    return (WORD_JOINER if preceding == "-" else "") + NO_BREAK_SPACE


def _apply_non_break_gap(parser: FragmentParser, root: Element, list_prefix: str) -> None:
    """Replace the space between list marker and first word, wherever it lives.

    The marker and the space may sit in different nodes (a highlighted "-"
    followed by a bare text node), so the gap is located by absolute text
    offset across text nodes in document order.
    """
    nodes = list(parser.walk_text_nodes(root))
    text = "".join(node.value for node in nodes)
    if not text.startswith(list_prefix):
        return
    gap_offset = len(list_prefix) - 1
    if text[gap_offset] != " ":
        return
    preceding = text[gap_offset - 1] if gap_offset > 0 else ""
    node_start = 0
    for node in nodes:
        node_end = node_start + len(node.value)
        if gap_offset < node_end:
            local = gap_offset - node_start
            node.value = node.value[:local] + _non_break_gap(preceding) + node.value[local + 1:]
            return
        node_start = node_end


def _wrap_hanging_indent(root: Element, indent_ch: int) -> None:
    wrapper = Element(
        "span",
        [("class", HANG_CLASS), ("style", f"{INDENT_PROPERTY}: {indent_ch}ch")],
        root.children,
    )
    root.children = [wrapper]


def _fallback_non_break_gap(line_html: str, list_prefix: str) -> str:
    if not line_html.startswith(list_prefix):
        return line_html
    match = _TRAILING_WS_RE.match(list_prefix)
    if not match:
        return line_html
    body, trailing = match.group(1), match.group(2)
    preceding = trailing[-2] if len(trailing) > 1 else body[-1:]
    replacement = body + trailing[:-1] + _non_break_gap(preceding)
    return replacement + line_html[len(list_prefix):]


def decorate(
    line_html: str,
    classification: Classification,
    parser: FragmentParser | None = SHARED_PARSER,
) -> DecoratedLine:
    """Return the row class and adjusted HTML for one classified line."""
    rule = classification.rule
    class_name = resolve_class_name(rule)
    list_prefix = classification.list_prefix if rule is RuleTag.LIST_LONG_WORD else None

    # Indenting under a prompt glyph looks wrong; prompt lines are left alone.
    if list_prefix is not None and is_prompt_prefix(list_prefix):
        return DecoratedLine(line_html, class_name)

    wants_gap = bool(list_prefix)
    wants_hang = rule in HANGING_INDENT_RULES and (classification.indent_ch or 0) > 0
    if not (wants_gap or wants_hang):
        return DecoratedLine(line_html, class_name)

    if parser is None:
        adjusted = _fallback_non_break_gap(line_html, list_prefix) if wants_gap else line_html
        return DecoratedLine(adjusted, class_name)

    try:
        root = parser.parse(line_html)
    except HtmlParseError as exc:
        logger.debug("smart-wrap decoration skipped: %s", exc)
        return DecoratedLine(line_html, "")

    if wants_gap:
        _apply_non_break_gap(parser, root, list_prefix)
    if wants_hang:
        _wrap_hanging_indent(root, classification.indent_ch)
    return DecoratedLine(parser.serialize(root), class_name)


def decorate_lines(
    lines_html: Sequence[str],
    classifications: Sequence[Classification],
    parser: FragmentParser | None = SHARED_PARSER,
) -> list[DecoratedLine]:
    """Decorate index-aligned lines; extra entries on either side are ignored."""
    return [
        decorate(line_html, classification, parser)
        for line_html, classification in zip(lines_html, classifications)
    ]
