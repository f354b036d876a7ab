"""Classify captured pane lines into smart-wrap rules.

One forward pass over the whole buffer with a single piece of state, the
block currently open (none, a codex diff, a claude tool transcript). Per line
the checks run in precedence order:

    table / startup banner  >  divider  >  blank handling
      >  block continuation  >  block start  >  hanging-indent rules  >  default

After the pass, codex and claude panes get their last line pinned as the
status line.

// [LAW:dataflow-not-control-flow] classify() is a pure function: lines in, Classifications out.
// [LAW:one-source-of-truth] Rule precedence lives in this loop only; shapes live in rules.py.
"""

from __future__ import annotations

from collections.abc import Sequence

from smart_wrap.core.rules import (
    codex_wrapped_fragment_end,
    detect_startup_banner_lines,
    is_claude_tool_continuation,
    is_claude_tool_start,
    is_codex_diff_row,
    is_codex_diff_start,
    is_divider,
    is_table_line,
    resolve_generic_indent,
    resolve_label_indent,
    resolve_list_long_word,
)
from smart_wrap.core.text import is_blank_like, visible_text
from smart_wrap.core.types import (
    STATUSLINE_AGENTS,
    AgentId,
    BlockKind,
    Classification,
    RuleTag,
    resolve_agent,
)


_DEFAULT = Classification(RuleTag.DEFAULT)
_TABLE = Classification(RuleTag.TABLE_PRESERVE)
_BANNER = Classification(RuleTag.STARTUP_BANNER_BLOCK)
_DIVIDER = Classification(RuleTag.DIVIDER_CLIP)
_CODEX_DIFF = Classification(RuleTag.CODEX_DIFF_BLOCK)
_CLAUDE_TOOL = Classification(RuleTag.CLAUDE_TOOL_BLOCK)
_STATUSLINE = Classification(RuleTag.STATUSLINE_PRESERVE)

_BLOCK_RESULTS = {
    BlockKind.CODEX_DIFF: _CODEX_DIFF,
    BlockKind.CLAUDE_TOOL: _CLAUDE_TOOL,
}


def _block_start(agent: AgentId, text: str) -> BlockKind:
    if agent is AgentId.CODEX and is_codex_diff_start(text):
        return BlockKind.CODEX_DIFF
    if agent is AgentId.CLAUDE and is_claude_tool_start(text):
        return BlockKind.CLAUDE_TOOL
    return BlockKind.NONE


def _classify_unblocked(agent: AgentId, text: str) -> Classification:
    list_long_word = resolve_list_long_word(text)
    if list_long_word is not None:
        return Classification(
            RuleTag.LIST_LONG_WORD,
            indent_ch=list_long_word.indent_ch,
            list_prefix=list_long_word.list_prefix,
        )
    label_indent = resolve_label_indent(agent, text)
    if label_indent is not None:
        return Classification(RuleTag.LABEL_INDENT, indent_ch=label_indent)
    generic_indent = resolve_generic_indent(text)
    if generic_indent is not None:
        return Classification(RuleTag.GENERIC_INDENT, indent_ch=generic_indent)
    return _DEFAULT


def classify(lines: Sequence[str], agent: object) -> list[Classification]:
    """Return one Classification per line, index-aligned with lines.

    lines are line HTML (escaped text plus highlighter spans); shapes are
    matched on their visible text. agent is resolved with resolve_agent();
    anything unrecognized behaves as OTHER.
    """
    agent_id = resolve_agent(agent)
    text_lines = [visible_text(line) for line in lines]
    banner_lines = detect_startup_banner_lines(text_lines)

    results: list[Classification] = []
    block = BlockKind.NONE
    fragment_end = 0  # lines before this index are an absorbed wrapped diff fragment

    for index, raw_line in enumerate(lines):
        text = text_lines[index]

        if is_table_line(raw_line, text):
            block = BlockKind.NONE
            results.append(_TABLE)
            continue
        if index in banner_lines:
            block = BlockKind.NONE
            results.append(_BANNER)
            continue
        if is_divider(agent_id, text):
            block = BlockKind.NONE
            results.append(_DIVIDER)
            continue

        if is_blank_like(text):
            # Claude pads tool output with blank rows; codex separates hunks with them.
            if block is BlockKind.CLAUDE_TOOL:
                results.append(_CLAUDE_TOOL)
            else:
                block = BlockKind.NONE
                results.append(_DEFAULT)
            continue

        if block is BlockKind.CODEX_DIFF:
            if is_codex_diff_row(text) or index < fragment_end:
                results.append(_CODEX_DIFF)
                continue
            wrapped_end = codex_wrapped_fragment_end(text_lines, index)
            if wrapped_end is not None:
                fragment_end = wrapped_end
                results.append(_CODEX_DIFF)
                continue
            block = BlockKind.NONE
        elif block is BlockKind.CLAUDE_TOOL:
            if is_claude_tool_continuation(text):
                results.append(_CLAUDE_TOOL)
                continue
            block = BlockKind.NONE

        block = _block_start(agent_id, text)
        if block is not BlockKind.NONE:
            fragment_end = 0
            results.append(_BLOCK_RESULTS[block])
            continue

        results.append(_classify_unblocked(agent_id, text))

    if results and agent_id in STATUSLINE_AGENTS:
        results[-1] = _STATUSLINE
    return results
