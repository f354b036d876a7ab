"""CLI entry point for smart-wrap.

Works on captured pane text (one screen line per input line):

    smart-wrap inspect capture.txt --agent codex
    smart-wrap render capture.txt --agent claude -o preview.html
    smart-wrap config --set-agent codex
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

import smart_wrap.io.logging_setup
import smart_wrap.io.settings
from smart_wrap.core.types import AgentId, RuleTag, resolve_agent
from smart_wrap.viewport import build_html_document, copy_text, render_pass, text_to_line_html

logger = logging.getLogger(__name__)

RULE_STYLES: dict[RuleTag, str] = {
    RuleTag.DEFAULT: "dim",
    RuleTag.CODEX_DIFF_BLOCK: "green",
    RuleTag.CLAUDE_TOOL_BLOCK: "magenta",
    RuleTag.DIVIDER_CLIP: "blue",
    RuleTag.TABLE_PRESERVE: "cyan",
    RuleTag.STARTUP_BANNER_BLOCK: "cyan",
    RuleTag.STATUSLINE_PRESERVE: "bold yellow",
    RuleTag.LIST_LONG_WORD: "red",
    RuleTag.LABEL_INDENT: "yellow",
    RuleTag.GENERIC_INDENT: "white",
}

AGENT_CHOICES = [agent.value for agent in AgentId]


def _read_lines(source: str | None) -> list[str]:
    if source is None or source == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(source).read_text(encoding="utf-8", errors="replace")
    return raw.splitlines()


def _resolve_cli_agent(value: str | None) -> AgentId:
    if value is None:
        return smart_wrap.io.settings.load_default_agent()
    return resolve_agent(value)


def cmd_inspect(args, console: Console) -> int:
    lines = _read_lines(args.file)
    agent = _resolve_cli_agent(args.agent)
    rendered = render_pass([text_to_line_html(line) for line in lines], agent)

    table = Table(title=f"smart-wrap ({agent.value}, {len(lines)} lines)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("rule")
    table.add_column("indent", justify="right")
    table.add_column("prefix")
    table.add_column("text", overflow="fold")
    for index, (line, classification) in enumerate(zip(lines, rendered.classifications)):
        rule = classification.rule
        table.add_row(
            str(index),
            Text(rule.value, style=RULE_STYLES[rule]),
            "" if classification.indent_ch is None else str(classification.indent_ch),
            Text(repr(classification.list_prefix)) if classification.list_prefix else "",
            Text(line),
        )
    console.print(table)
    return 0


def cmd_render(args, console: Console) -> int:
    lines = _read_lines(args.file)
    agent = _resolve_cli_agent(args.agent)
    rendered = render_pass([text_to_line_html(line) for line in lines], agent)

    if args.plain:
        output = copy_text(rendered) + "\n"
    else:
        title = args.title or smart_wrap.io.settings.load_document_title()
        output = build_html_document(rendered, title)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.info("wrote %d rows to %s", len(rendered.lines), args.output)
    else:
        sys.stdout.write(output)
    return 0


def cmd_config(args, console: Console) -> int:
    if args.set_agent:
        smart_wrap.io.settings.save_default_agent(resolve_agent(args.set_agent))
    if args.set_title:
        smart_wrap.io.settings.save_document_title(args.set_title)
    console.print(f"settings: {smart_wrap.io.settings.get_config_path()}", markup=False)
    console.print(f"default_agent: {smart_wrap.io.settings.load_default_agent().value}", markup=False)
    console.print(f"document_title: {smart_wrap.io.settings.load_document_title()}", markup=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smart-wrap",
        description="Classify and decorate captured agent pane lines for proportional wrapping",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser("inspect", help="Print the rule chosen for every line")
    render_parser = subparsers.add_parser("render", help="Write a standalone HTML preview")
    for sub in (inspect_parser, render_parser):
        sub.add_argument("file", nargs="?", default=None, help="Captured pane text (default: stdin)")
        sub.add_argument(
            "--agent",
            choices=AGENT_CHOICES,
            default=None,
            help="Producing agent (default: settings default_agent)",
        )
    render_parser.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    render_parser.add_argument("--title", default=None, help="Document title")
    render_parser.add_argument(
        "--plain",
        action="store_true",
        help="Emit the copy-text of the decorated rows instead of HTML",
    )

    config_parser = subparsers.add_parser("config", help="Show or update settings")
    config_parser.add_argument("--set-agent", choices=AGENT_CHOICES, default=None)
    config_parser.add_argument("--set-title", default=None)
    return parser


_COMMANDS = {
    "inspect": cmd_inspect,
    "render": cmd_render,
    "config": cmd_config,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    smart_wrap.io.logging_setup.configure(
        session_name=args.command, level="DEBUG" if args.verbose else None
    )
    console = Console()
    try:
        return _COMMANDS[args.command](args, console)
    except OSError as exc:
        logger.error("smart-wrap %s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
