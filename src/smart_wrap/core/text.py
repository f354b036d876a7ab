"""Text helpers shared by the classifier and the decorator.

Every captured line is line HTML: the upstream highlighter escapes plain
text and wraps colored runs in spans. Callers holding raw terminal text
escape it first (see viewport.text_to_line_html).
"""

from __future__ import annotations

import re

from rich.cells import cell_len

from smart_wrap.core.html_tree import HtmlParseError, parse_fragment, text_content


ZERO_WIDTH_SPACE = "\u200b"
BYTE_ORDER_MARK = "\ufeff"
WORD_JOINER = "\u2060"
NO_BREAK_SPACE = "\u00a0"

_INVISIBLE_RE = re.compile(f"[{ZERO_WIDTH_SPACE}{BYTE_ORDER_MARK}]")

_LEADING_WS_RE = re.compile("^[ \\t\u3000]*")


def strip_invisible(value: str) -> str:
    return _INVISIBLE_RE.sub("", value)


def is_blank_like(value: str) -> bool:
    """True when nothing visible remains after dropping zero-width characters."""
    return strip_invisible(value).strip() == ""


def count_ch(value: str) -> int:
    """Terminal cell width of value (wide glyphs count as two)."""
    return cell_len(value)


def leading_whitespace_ch(value: str) -> int:
    match = _LEADING_WS_RE.match(value)
    return count_ch(match.group(0)) if match else 0


def visible_text(line_html: str) -> str:
    """Return the text a viewer sees for one line of line HTML.

    Tags and comments are dropped and character references decoded. A line
    the parser rejects is returned unchanged.
    """
    try:
        return text_content(parse_fragment(line_html))
    except HtmlParseError:
        return line_html


def sanitize_copy_text(raw: str) -> str:
    """Undo wrap decoration in copied text: no-break gaps become spaces, joiners vanish."""
    cleaned = raw.replace(NO_BREAK_SPACE, " ")
    for ch in (WORD_JOINER, ZERO_WIDTH_SPACE, BYTE_ORDER_MARK):
        cleaned = cleaned.replace(ch, "")
    return cleaned
