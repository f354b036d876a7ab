"""Render-pass seam between a pane viewer and the smart-wrap core.

A viewer calls render_pass() whenever the visible window changes: the buffer
is classified once, then every line is decorated. The result is thrown away
on the next pass.

// [LAW:one-way-deps] Depends on core only. Nothing in core imports this module.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from smart_wrap.core.classify import classify
from smart_wrap.core.decorate import decorate_lines
from smart_wrap.core.html_tree import SHARED_PARSER, FragmentParser
from smart_wrap.core.text import sanitize_copy_text, visible_text
from smart_wrap.core.types import AgentId, Classification, DecoratedLine, resolve_agent
from smart_wrap.io.perf_logging import monitor_slow_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderPass:
    agent: AgentId
    classifications: tuple[Classification, ...]
    lines: tuple[DecoratedLine, ...]


def text_to_line_html(text: str) -> str:
    """Escape one captured plain-text line for use as line HTML."""
    return html.escape(text.rstrip("\r\n"), quote=False)


def render_pass(
    lines_html: Sequence[str],
    agent: object,
    parser: FragmentParser | None = SHARED_PARSER,
) -> RenderPass:
    agent_id = resolve_agent(agent)

    def _context():
        return {"agent": agent_id.value, "lines": len(lines_html)}

    with monitor_slow_path("smart_wrap.render_pass", logger=logger, context=_context):
        with monitor_slow_path("smart_wrap.classify", logger=logger, context=_context):
            classifications = classify(lines_html, agent_id)
        with monitor_slow_path("smart_wrap.decorate_lines", logger=logger, context=_context):
            decorated = decorate_lines(lines_html, classifications, parser)
    logger.debug("render pass agent=%s lines=%d", agent_id.value, len(decorated))
    return RenderPass(agent_id, tuple(classifications), tuple(decorated))


def copy_text(rendered: RenderPass) -> str:
    """Text a select-all copy of the rendered rows puts on the clipboard."""
    return "\n".join(
        sanitize_copy_text(visible_text(line.line_html)) for line in rendered.lines
    )


# ─── Standalone document ────────────────────────────────────────────────────

STYLESHEET = """\
.smart-wrap-screen {
    font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace;
    font-size: 13px;
    line-height: 1.4;
    white-space: pre-wrap;
    overflow-wrap: anywhere;
    margin: 0;
    padding: 12px;
}
.smart-wrap-row { min-height: 1.4em; }
.smart-wrap-preserve-row,
.smart-wrap-diff-block,
.smart-wrap-claude-block {
    white-space: pre;
    overflow-wrap: normal;
    overflow-x: auto;
}
.smart-wrap-divider {
    white-space: pre;
    overflow: hidden;
    text-overflow: clip;
}
.smart-wrap-hang {
    display: block;
    padding-left: var(--smart-wrap-indent-ch, 0ch);
    text-indent: calc(-1 * var(--smart-wrap-indent-ch, 0ch));
}
"""

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{{TITLE}}</title>
<style>
{{STYLESHEET}}</style>
</head>
<body>
<div class="smart-wrap-screen" data-agent="{{AGENT}}">
{{ROWS}}
</div>
</body>
</html>
"""


def render_row(line: DecoratedLine, classification: Classification) -> str:
    classes = " ".join(filter(None, ["smart-wrap-row", line.class_name]))
    return (
        f'<div class="{classes}" data-rule="{classification.rule.value}">'
        f"{line.line_html}</div>"
    )


def build_html_document(rendered: RenderPass, title: str) -> str:
    """Produce a complete standalone HTML page for a render pass."""
    rows = "\n".join(
        render_row(line, classification)
        for line, classification in zip(rendered.lines, rendered.classifications)
    )
    return (
        HTML_TEMPLATE.replace("{{TITLE}}", html.escape(title))
        .replace("{{STYLESHEET}}", STYLESHEET)
        .replace("{{AGENT}}", rendered.agent.value)
        .replace("{{ROWS}}", rows)
    )
