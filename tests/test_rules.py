"""Tests for smart_wrap.core.rules line-shape detectors."""

import pytest

from smart_wrap.core.rules import (
    MAX_BANNER_LINES,
    ListLongWord,
    codex_wrapped_fragment_end,
    detect_startup_banner_lines,
    has_long_word,
    is_claude_tool_start,
    is_codex_diff_row,
    is_codex_diff_start,
    is_divider,
    is_prompt_prefix,
    is_table_line,
    resolve_generic_indent,
    resolve_label_indent,
    resolve_list_long_word,
)
from smart_wrap.core.types import AgentId


# ─── Tables ──────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "text, expected",
    [
        ("┌──────┬──────┐", True),
        ("├──────┼──────┤", True),
        ("└──────┴──────┘", True),
        ("┌──────────────┐", False),
        ("│ a │ b │", True),
        ("│ a │", False),
        ("| a | b |", True),
        ("| a |", False),
    ],
)
def test_table_shapes(text, expected):
    assert is_table_line(text, text) is expected


def test_table_marker_in_raw_line():
    raw = '<span class="vde-unicode-table-wrap">cell</span>'
    assert is_table_line(raw, "cell")


# ─── Banners ─────────────────────────────────────────────────────────────────


def test_banner_frame_with_signature():
    lines = ["x", "╭──╮", "│ Claude Code │", "╰──╯", "y"]
    assert detect_startup_banner_lines(lines) == {1, 2, 3}


def test_banner_frame_must_close():
    assert detect_startup_banner_lines(["╭──╮", "│ Claude Code │"]) == set()


def test_banner_frame_length_is_bounded():
    lines = ["╭──╮"] + ["│ Claude Code │"] * MAX_BANNER_LINES + ["╰──╯"]
    assert detect_startup_banner_lines(lines) == set()


def test_two_banners():
    frame = ["╭──╮", "│ >_ OpenAI Codex │", "╰──╯"]
    assert detect_startup_banner_lines(frame + ["mid"] + frame) == {0, 1, 2, 4, 5, 6}


# ─── Dividers ────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "agent, text, expected",
    [
        (AgentId.CODEX, "────", True),
        (AgentId.CODEX, "  ======  ", True),
        (AgentId.CODEX, "--", False),
        (AgentId.CODEX, "abc---", False),
        (AgentId.CODEX, "─ Worked for 12s ──────────", True),
        (AgentId.CLAUDE, "─" * 19, False),
        (AgentId.CLAUDE, "─" * 20, True),
        (AgentId.CLAUDE, "╭" + "─" * 10 + "╮", True),
        (AgentId.CLAUDE, "-" * 40, False),
        (AgentId.OTHER, "─" * 40, False),
    ],
)
def test_is_divider(agent, text, expected):
    assert is_divider(agent, text) is expected


# ─── Block shapes ────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "text, expected",
    [
        ("• Edited src/app.py (+1 -1)", True),
        ("• Added notes (+12)", True),
        ("• Deleted old/file.txt", True),
        ("  • Renamed a.py (+0 -0)", True),
        ("• Edited things", False),
        ("Edited src/app.py (+1 -1)", False),
    ],
)
def test_codex_diff_start(text, expected):
    assert is_codex_diff_start(text) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("    10  context", True),
        ("    11 - removed", True),
        ("11 +added", True),
        ("    + bare add", True),
        ("    ⋮", True),
        ("plain", False),
        ("43% left", False),
    ],
)
def test_codex_diff_row(text, expected):
    assert is_codex_diff_row(text) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("⏺ Bash(ls -la)", True),
        ("⏺ Task", True),
        ("⏺ Update(src/x.py)", True),
        ("⏺ mcp_fetch", False),
        ("⏺ I will read the file", False),
        ("Bash(ls)", False),
    ],
)
def test_claude_tool_start(text, expected):
    assert is_claude_tool_start(text) is expected


def test_wrapped_fragment_followed_by_row():
    assert codex_wrapped_fragment_end(["  1 + a", "frag", "  2 + b"], 1) == 2


def test_wrapped_fragment_needs_closing_row():
    assert codex_wrapped_fragment_end(["frag", "  x"], 0) is None


def test_indented_line_is_not_a_fragment():
    assert codex_wrapped_fragment_end(["  indented", "  1 + a"], 0) is None


# ─── Hanging indent ──────────────────────────────────────────────────────────


def test_list_long_word_uses_cell_width():
    assert resolve_list_long_word("- 日本語日本語日本") == ListLongWord(2, "- ")


def test_list_long_word_prefix_too_wide():
    assert resolve_list_long_word(" " * 30 + "- configuration-management") is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("abcdefghijkl", True),
        ("abcdefghijk", False),
        ("short words https://example.com/x", True),
        ("─" * 20, False),
        ("_" * 20, False),
        ("日本語日本語", True),
    ],
)
def test_has_long_word(text, expected):
    assert has_long_word(text) is expected


def test_label_indent_codex_tree_label():
    assert resolve_label_indent(AgentId.CODEX, "└ Read very-long-filename.txt") == 7


def test_label_indent_label_only_anchors_for_codex():
    assert resolve_label_indent(AgentId.CLAUDE, "Search very-long-keyword-list") == 0


def test_label_indent_needs_long_word():
    assert resolve_label_indent(AgentId.CODEX, "Search short") is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("  x", 2),
        (" x", None),
        (" " * 30 + "x", None),
        ("1) first", 3),
        ("a) first", 3),
        ("DEBUG loaded", 6),
        ("plain", None),
    ],
)
def test_generic_indent(text, expected):
    assert resolve_generic_indent(text) == expected


@pytest.mark.parametrize("prefix, expected", [("› ", True), ("  ❯ ", True), ("- ", False)])
def test_prompt_prefix(prefix, expected):
    assert is_prompt_prefix(prefix) is expected
