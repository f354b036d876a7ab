"""Line-shape detectors for smart wrapping.

Every pattern and width threshold the classifier relies on lives here. The
detectors take visible text (markup already removed) except is_table_line,
which also looks at the raw line for marker classes emitted by the table
renderer.

// [LAW:one-source-of-truth] Tunable thresholds and signatures are module constants.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from smart_wrap.core.text import count_ch, is_blank_like, leading_whitespace_ch
from smart_wrap.core.types import AgentId


# ─── Tunables ────────────────────────────────────────────────────────────────

LONG_TOKEN_MIN_CH = 12
MIN_INDENT_CH = 2
MAX_INDENT_CH = 24
MIN_DIVIDER_CH = 3
MIN_CLAUDE_RULE_CH = 20
MAX_CODEX_WRAPPED_FRAGMENT_LINES = 3
MAX_BANNER_LINES = 14

TABLE_MARKER_CLASSES = ("unicode-table-wrap", "markdown-pipe-table-wrap")
BANNER_SIGNATURES = ("OpenAI Codex", "Claude Code", ">_ ")
PROMPT_MARKERS = ("›", "❯")

CLAUDE_TOOL_NAMES = (
    "Read", "Bash", "Write", "Update", "Edit", "MultiEdit", "Search", "Grep",
    "Glob", "Task", "WebFetch", "WebSearch", "NotebookEdit", "TodoWrite",
)


# ─── Patterns ────────────────────────────────────────────────────────────────

_UNICODE_TABLE_BORDER_RE = re.compile(r"^\s*[┌├└╒╞╘][─━═┬┼┴╤╪╧]*[┬┼┴╤╪╧][─━═┬┼┴╤╪╧]*[┐┤┘╕╡╛]\s*$")
_UNICODE_TABLE_ROW_RE = re.compile(r"^\s*│(?:[^│]*│){2,}\s*$")
_PIPE_TABLE_ROW_RE = re.compile(r"^\s*\|(?:[^|]*\|){2,}\s*$")

_BANNER_TOP_RE = re.compile(r"^\s*╭─.*╮\s*$")
_BANNER_ROW_RE = re.compile(r"^\s*│.*│\s*$")
_BANNER_BOTTOM_RE = re.compile(r"^\s*╰─.*╯\s*$")
# Rows of the claude startup mascot, with the version and model text beside them.
_CLAUDE_MASCOT_RE = re.compile(r"^\s*(?:▐▛███▜▌|▝▜█████▛▘|▘▘ ▝▝)(?:\s|$)")

_CODEX_PLAIN_DIVIDER_RE = re.compile(r"^[-=_*─━]+$")
_CODEX_LABELED_DIVIDER_RE = re.compile(r"^[─━-]\s+Worked for\b.+[─━-]{8,}$")
_CLAUDE_RULE_RE = re.compile(r"^─{%d,}$" % MIN_CLAUDE_RULE_CH)
_CLAUDE_FRAME_EDGE_RE = re.compile(r"^[╭╰]─{10,}[╮╯]$")
_ALNUM_RE = re.compile(r"[A-Za-z0-9]")
_WORD_CHAR_RE = re.compile(r"[^\W_]")

CODEX_DIFF_START_PATTERNS = (
    re.compile(r"^\s*•\s+(Edited|Added|Deleted|Renamed)\s+.+\(\+\d+\s+-\d+\)\s*$"),
    re.compile(r"^\s*•\s+(Edited|Added|Deleted|Renamed)\s+.+\(\+\d+\)\s*$"),
    re.compile(
        r"^\s*•\s+(Edited|Added|Deleted|Renamed)\s+\S*(?:/|\\|\.)\S*(?:\s+\(\+\d+(?:\s+-\d+)?\))?\s*$"
    ),
)
CODEX_DIFF_ROW_PATTERNS = (
    re.compile(r"^\s*\d+\s{2,}.*$"),  # context row
    re.compile(r"^\s*\d+\s+[+-]\s?.*$"),  # numbered add/remove row
    re.compile(r"^\s+[+-]\s.*$"),
    re.compile(r"^\s+(?:⋮|:)\s*$"),  # elided hunk gap
)

_CLAUDE_TOOL_START_RE = re.compile(
    r"^\s*⏺\s+(?:(?:%s)\b|[A-Z][\w.:-]*\()" % "|".join(CLAUDE_TOOL_NAMES)
)
_CLAUDE_TOOL_CONTINUATION_RE = re.compile(r"^(?:\s+\S|\s*⎿)")

_LIST_PREFIX_RE = re.compile(r"^(\s*(?:[-*+]\s+|\d+[.)]\s+|[›❯]\s+))(\S+)")
_CODEX_LABEL_RE = re.compile(r"^\s*(?:[│└├]\s*)?(?:Search|Read)\s+")
_TOKEN_RE = re.compile(r"\S+")

GENERIC_INDENT_PATTERNS = (
    re.compile(r"^\s*(?:[-*+•]\s+|\d+[.)]\s+|[A-Za-z]\)\s+)"),
    re.compile(r"^\s*>\s+"),
    re.compile(r"^\s*(?:\[\d{1,2}:\d{2}:\d{2}\]\s+)?(?:TRACE|DEBUG|INFO|WARN|ERROR|FATAL)\s+"),
    re.compile(r"^[ \t]+(?=\S)"),
)


@dataclass(frozen=True)
class ListLongWord:
    indent_ch: int
    list_prefix: str


def _matches_any(text: str, patterns) -> bool:
    return any(pattern.match(text) for pattern in patterns)


def _indent_in_range(indent_ch: int) -> bool:
    return MIN_INDENT_CH <= indent_ch <= MAX_INDENT_CH


# ─── Structural ──────────────────────────────────────────────────────────────


def is_table_line(raw_line: str, text: str) -> bool:
    if any(marker in raw_line for marker in TABLE_MARKER_CLASSES):
        return True
    return bool(
        _UNICODE_TABLE_BORDER_RE.match(text)
        or _UNICODE_TABLE_ROW_RE.match(text)
        or _PIPE_TABLE_ROW_RE.match(text)
    )


def _banner_frame_end(text_lines: list[str], start: int) -> int | None:
    """Index one past the closing edge of a box frame opened at start."""
    limit = min(len(text_lines), start + MAX_BANNER_LINES)
    for index in range(start + 1, limit):
        text = text_lines[index]
        if _BANNER_BOTTOM_RE.match(text):
            return index + 1
        if not _BANNER_ROW_RE.match(text):
            return None
    return None


def detect_startup_banner_lines(text_lines: list[str]) -> set[int]:
    """Indexes of lines that belong to an agent startup banner."""
    result: set[int] = set()
    index = 0
    while index < len(text_lines):
        text = text_lines[index]
        if _CLAUDE_MASCOT_RE.match(text):
            result.add(index)
            index += 1
            continue
        if not _BANNER_TOP_RE.match(text):
            index += 1
            continue
        end = _banner_frame_end(text_lines, index)
        if end is None:
            index += 1
            continue
        frame_text = "\n".join(text_lines[index:end])
        if any(signature in frame_text for signature in BANNER_SIGNATURES):
            result.update(range(index, end))
        index = end
    return result


def _is_codex_divider(text: str) -> bool:
    trimmed = text.strip()
    if len(trimmed) < MIN_DIVIDER_CH:
        return False
    if _CODEX_LABELED_DIVIDER_RE.match(trimmed):
        return True
    if _ALNUM_RE.search(trimmed):
        return False
    return bool(_CODEX_PLAIN_DIVIDER_RE.match(trimmed))


def _is_claude_divider(text: str) -> bool:
    trimmed = text.strip()
    return bool(_CLAUDE_RULE_RE.match(trimmed) or _CLAUDE_FRAME_EDGE_RE.match(trimmed))


_DIVIDER_DETECTORS = {
    AgentId.CODEX: _is_codex_divider,
    AgentId.CLAUDE: _is_claude_divider,
}


def is_divider(agent: AgentId, text: str) -> bool:
    detector = _DIVIDER_DETECTORS.get(agent)
    return detector(text) if detector is not None else False


# ─── Blocks ──────────────────────────────────────────────────────────────────


def is_codex_diff_start(text: str) -> bool:
    return _matches_any(text, CODEX_DIFF_START_PATTERNS)


def is_codex_diff_row(text: str) -> bool:
    return _matches_any(text, CODEX_DIFF_ROW_PATTERNS)


def is_claude_tool_start(text: str) -> bool:
    return _CLAUDE_TOOL_START_RE.match(text) is not None


def is_claude_tool_continuation(text: str) -> bool:
    return _CLAUDE_TOOL_CONTINUATION_RE.match(text) is not None


def codex_wrapped_fragment_end(text_lines: list[str], start: int) -> int | None:
    """Where a soft-wrapped diff fragment starting at start ends, if it is one.

    A fragment is 1..MAX_CODEX_WRAPPED_FRAGMENT_LINES unindented plain lines
    that sit between diff rows. Returns the index of the diff row that follows
    the fragment, or None when the lines are ordinary commentary.
    """
    limit = min(len(text_lines), start + MAX_CODEX_WRAPPED_FRAGMENT_LINES)
    index = start
    while index < limit:
        text = text_lines[index]
        if (
            is_blank_like(text)
            or text[:1].isspace()
            or _is_codex_divider(text)
            or is_codex_diff_start(text)
            or is_codex_diff_row(text)
        ):
            break
        index += 1
    if index == start or index >= len(text_lines):
        return None
    return index if is_codex_diff_row(text_lines[index]) else None


# ─── Hanging indent ──────────────────────────────────────────────────────────


def resolve_list_long_word(text: str) -> ListLongWord | None:
    match = _LIST_PREFIX_RE.match(text)
    if not match:
        return None
    list_prefix, first_token = match.group(1), match.group(2)
    if count_ch(first_token) < LONG_TOKEN_MIN_CH:
        return None
    indent_ch = count_ch(list_prefix)
    if not _indent_in_range(indent_ch):
        return None
    return ListLongWord(indent_ch=indent_ch, list_prefix=list_prefix)


def has_long_word(text: str) -> bool:
    """True when text holds an unbreakable run of at least LONG_TOKEN_MIN_CH cells.

    Pure glyph runs (rules, box art) are not words.
    """
    return any(
        count_ch(token) >= LONG_TOKEN_MIN_CH and _WORD_CHAR_RE.search(token)
        for token in _TOKEN_RE.findall(text)
    )


def resolve_label_indent(agent: AgentId, text: str) -> int | None:
    """Hanging indent for a line carrying an unbreakable long token.

    Codex tool labels (``Search``, ``Read``) anchor the indent at the label
    tail; every other line anchors at its leading whitespace.
    """
    if not has_long_word(text):
        return None
    if agent is AgentId.CODEX:
        label = _CODEX_LABEL_RE.match(text)
        if label:
            return count_ch(label.group(0))
    return leading_whitespace_ch(text)


def resolve_generic_indent(text: str) -> int | None:
    for pattern in GENERIC_INDENT_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        indent_ch = count_ch(match.group(0))
        if _indent_in_range(indent_ch):
            return indent_ch
    return None


def is_prompt_prefix(list_prefix: str) -> bool:
    return list_prefix.strip() in PROMPT_MARKERS
