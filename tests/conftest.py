"""Pytest configuration and shared fixtures for smart-wrap tests."""

import pytest

import smart_wrap.io.logging_setup
import smart_wrap.io.perf_logging


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point settings and log files at tmp_path; undo logger wiring afterwards."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("SMART_WRAP_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("SMART_WRAP_LOG_FILE", str(tmp_path / "logs" / "smart-wrap.log"))
    monkeypatch.delenv("SMART_WRAP_LOG_LEVEL", raising=False)
    yield
    smart_wrap.io.logging_setup.reset()
    smart_wrap.io.perf_logging.set_enabled(True)


# ---------------------------------------------------------------------------
# Captured pane samples
# ---------------------------------------------------------------------------

@pytest.fixture
def codex_pane():
    """A codex screen: banner, commentary, an edit hunk, a divider, the footer."""
    return [
        "╭───────────────────────────────╮",
        "│ >_ OpenAI Codex (v0.104.0)    │",
        "╰───────────────────────────────╯",
        "• I'll update the parser first.",
        "• Edited src/parser.py (+2 -1)",
        "    10  def parse(text):",
        "    11 -    return text",
        "    11 +    return text.strip()",
        "    12 +    # normalized",
        "",
        "─ Worked for 1m 17s ──────────────────────────────",
        "- supercalifragilisticexpialidocious token",
        "43% context left",
    ]


@pytest.fixture
def claude_pane():
    """A claude screen: a tool call with padded output, prose, the prompt."""
    return [
        "⏺ Bash(ls -la)",
        "  ⎿  total 8",
        "      drwxr-xr-x  4 user staff  128 .",
        "      ",
        "⏺ The directory holds two entries.",
        "────────────────────────────────",
        "❯ ",
    ]
