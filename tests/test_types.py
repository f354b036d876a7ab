"""Tests for smart_wrap.core.types."""

import dataclasses

import pytest

from smart_wrap.core.types import AgentId, Classification, RuleTag, resolve_agent


@pytest.mark.parametrize(
    "value, expected",
    [
        ("codex", AgentId.CODEX),
        ("Claude", AgentId.CLAUDE),
        ("  other ", AgentId.OTHER),
        ("gemini", AgentId.OTHER),
        ("", AgentId.OTHER),
        (None, AgentId.OTHER),
        (42, AgentId.OTHER),
        (AgentId.CLAUDE, AgentId.CLAUDE),
    ],
)
def test_resolve_agent(value, expected):
    assert resolve_agent(value) is expected


def test_rule_tag_values():
    assert [tag.value for tag in RuleTag] == [
        "default",
        "codex-diff-block",
        "claude-tool-block",
        "divider-clip",
        "table-preserve",
        "startup-banner-block",
        "statusline-preserve",
        "list-long-word",
        "label-indent",
        "generic-indent",
    ]


def test_classification_is_frozen():
    classification = Classification(RuleTag.DEFAULT)
    with pytest.raises(dataclasses.FrozenInstanceError):
        classification.rule = RuleTag.LABEL_INDENT
