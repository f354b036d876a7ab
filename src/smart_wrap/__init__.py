"""Smart line wrapping for captured AI agent terminal panes."""

from smart_wrap.core.classify import classify
from smart_wrap.core.decorate import decorate, decorate_lines
from smart_wrap.core.text import sanitize_copy_text
from smart_wrap.core.types import (
    AgentId,
    Classification,
    DecoratedLine,
    RuleTag,
    resolve_agent,
)

__version__ = "0.1.0"

__all__ = [
    "AgentId",
    "Classification",
    "DecoratedLine",
    "RuleTag",
    "classify",
    "decorate",
    "decorate_lines",
    "resolve_agent",
    "sanitize_copy_text",
]
