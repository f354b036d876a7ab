"""Closed vocabularies and per-line records for smart wrapping.

// [LAW:one-source-of-truth] Agent ids and rule tags are defined here only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AgentId(Enum):
    CODEX = "codex"
    CLAUDE = "claude"
    OTHER = "other"


class RuleTag(Enum):
    DEFAULT = "default"
    CODEX_DIFF_BLOCK = "codex-diff-block"
    CLAUDE_TOOL_BLOCK = "claude-tool-block"
    DIVIDER_CLIP = "divider-clip"
    TABLE_PRESERVE = "table-preserve"
    STARTUP_BANNER_BLOCK = "startup-banner-block"
    STATUSLINE_PRESERVE = "statusline-preserve"
    LIST_LONG_WORD = "list-long-word"
    LABEL_INDENT = "label-indent"
    GENERIC_INDENT = "generic-indent"


class BlockKind(Enum):
    NONE = "none"
    CODEX_DIFF = "codex_diff"
    CLAUDE_TOOL = "claude_tool"


# Agents whose panes end in a live status footer.
STATUSLINE_AGENTS = frozenset({AgentId.CODEX, AgentId.CLAUDE})

HANGING_INDENT_RULES = frozenset(
    {RuleTag.LIST_LONG_WORD, RuleTag.LABEL_INDENT, RuleTag.GENERIC_INDENT}
)


@dataclass(frozen=True)
class Classification:
    rule: RuleTag
    indent_ch: int | None = None  # hanging indent width in cells
    list_prefix: str | None = None  # exact marker text, list-long-word only


@dataclass(frozen=True)
class DecoratedLine:
    line_html: str
    class_name: str


_AGENTS_BY_NAME: dict[str, AgentId] = {agent.value: agent for agent in AgentId}


def resolve_agent(value: object) -> AgentId:
    """Map any producer identifier onto AgentId; unknown values become OTHER."""
    if isinstance(value, AgentId):
        return value
    if not isinstance(value, str):
        return AgentId.OTHER
    return _AGENTS_BY_NAME.get(value.strip().lower(), AgentId.OTHER)
