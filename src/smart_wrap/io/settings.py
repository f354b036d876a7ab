"""Persistent CLI defaults.

$XDG_CONFIG_HOME/smart-wrap/settings.json holds two keys:

    default_agent   agent id used when --agent is omitted ("other")
    document_title  <title> of rendered previews ("smart-wrap preview")

classify() and decorate() never read this file.
"""

import json
import os
import tempfile
from pathlib import Path

from smart_wrap.core.types import AgentId, resolve_agent


DEFAULT_DOCUMENT_TITLE = "smart-wrap preview"


def get_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "smart-wrap" / "settings.json"


def load_settings() -> dict:
    """Read the settings object; a missing, unreadable or non-object file reads as {}."""
    try:
        data = json.loads(get_config_path().read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: dict) -> None:
    """Replace the settings file atomically (temp file in the same directory, then rename)."""
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _update(key: str, value) -> None:
    data = load_settings()
    data[key] = value
    save_settings(data)


def load_default_agent() -> AgentId:
    return resolve_agent(load_settings().get("default_agent"))


def save_default_agent(agent: AgentId) -> None:
    _update("default_agent", agent.value)


def load_document_title() -> str:
    title = load_settings().get("document_title")
    return title if isinstance(title, str) and title else DEFAULT_DOCUMENT_TITLE


def save_document_title(title: str) -> None:
    _update("document_title", title)
