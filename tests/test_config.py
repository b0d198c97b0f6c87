from __future__ import annotations

from pathlib import Path

import pytest

from command_templates.models.diagnostic import Severity
from command_templates.utils.config import (
    DEFAULT_POLICY,
    DEFAULT_UNSAFE_CHARACTERS,
    ENV_ALLOW_BACKTICK_PROMPTS,
    ENV_UNSAFE_CHARACTERS,
    load_policy,
    policy_from_settings,
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv(ENV_UNSAFE_CHARACTERS, raising=False)
    monkeypatch.delenv(ENV_ALLOW_BACKTICK_PROMPTS, raising=False)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_policy_defaults():
    assert load_policy() == DEFAULT_POLICY
    assert DEFAULT_POLICY.unsafe_characters == DEFAULT_UNSAFE_CHARACTERS


def test_load_policy_from_yaml(tmp_path):
    path = _write(
        tmp_path,
        "validation:\n"
        "  unsafe_characters: ';|'\n"
        "  allow_backtick_prompts: false\n"
        "  leading_placeholder_severity: error\n",
    )
    policy = load_policy(path)
    assert policy.unsafe_characters == frozenset(";|")
    assert policy.allow_backtick_prompts is False
    assert policy.leading_placeholder_severity == Severity.ERROR
    assert policy.placeholder == "$@"


def test_empty_settings_file(tmp_path):
    assert load_policy(_write(tmp_path, "")) == DEFAULT_POLICY


def test_invalid_settings_raise(tmp_path):
    path = _write(tmp_path, "validation:\n  leading_placeholder_severity: fatal\n  colour: red\n")
    with pytest.raises(ValueError) as excinfo:
        load_policy(path)
    message = str(excinfo.value)
    assert "validation.leading_placeholder_severity" in message
    assert "colour" in message


def test_non_mapping_settings_raise(tmp_path):
    with pytest.raises(ValueError):
        load_policy(_write(tmp_path, "- validation\n"))


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv(ENV_UNSAFE_CHARACTERS, ";")
    monkeypatch.setenv(ENV_ALLOW_BACKTICK_PROMPTS, "no")
    policy = load_policy(_write(tmp_path, "validation:\n  unsafe_characters: '|&'\n"))
    assert policy.unsafe_characters == frozenset(";")
    assert policy.allow_backtick_prompts is False


def test_env_overrides_without_file(monkeypatch):
    monkeypatch.setenv(ENV_ALLOW_BACKTICK_PROMPTS, "0")
    assert load_policy().allow_backtick_prompts is False


def test_policy_from_settings_rejects_bad_section():
    with pytest.raises(ValueError):
        policy_from_settings({"validation": ["placeholder"]})


def test_shipped_settings_match_defaults():
    path = Path(__file__).resolve().parent.parent / "config" / "settings.yaml"
    assert load_policy(path) == DEFAULT_POLICY
