from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

import yaml

from command_templates.models.diagnostic import Severity
from command_templates.models.template import PLACEHOLDER
from command_templates.utils.json_schema import validate_json

logger = logging.getLogger(__name__)

DEFAULT_UNSAFE_CHARACTERS = frozenset(";|&<>\n\r")

ENV_UNSAFE_CHARACTERS = "COMMAND_TEMPLATES_UNSAFE_CHARACTERS"
ENV_ALLOW_BACKTICK_PROMPTS = "COMMAND_TEMPLATES_ALLOW_BACKTICK_PROMPTS"

_FALSE_VALUES = {"0", "false", "no", "off"}

POLICY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "validation": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "placeholder": {"type": "string", "minLength": 1},
                "unsafe_characters": {"type": "string"},
                "allow_backtick_prompts": {"type": "boolean"},
                "leading_placeholder_severity": {"type": "string", "enum": ["error", "warning"]},
            },
        },
    },
}


@dataclass(frozen=True)
class ValidationPolicy:
    """
    Tunable parts of template validation.

    Attributes:
        placeholder: The sanctioned substitution token
        unsafe_characters: Shell metacharacters rejected outside quotes
        allow_backtick_prompts: Accept standalone backtick spans as prompt delimiters
        leading_placeholder_severity: Severity of the "starts with placeholder" finding
    """
    placeholder: str = PLACEHOLDER
    unsafe_characters: FrozenSet[str] = field(default=DEFAULT_UNSAFE_CHARACTERS)
    allow_backtick_prompts: bool = True
    leading_placeholder_severity: Severity = Severity.WARNING


DEFAULT_POLICY = ValidationPolicy()


def policy_from_settings(settings: Dict[str, Any]) -> ValidationPolicy:
    validate_json(settings, POLICY_SCHEMA, label="validation settings")
    section = settings.get("validation") or {}
    kwargs: Dict[str, Any] = {}
    if "placeholder" in section:
        kwargs["placeholder"] = section["placeholder"]
    if "unsafe_characters" in section:
        kwargs["unsafe_characters"] = frozenset(section["unsafe_characters"])
    if "allow_backtick_prompts" in section:
        kwargs["allow_backtick_prompts"] = section["allow_backtick_prompts"]
    if "leading_placeholder_severity" in section:
        kwargs["leading_placeholder_severity"] = Severity(section["leading_placeholder_severity"])
    return ValidationPolicy(**kwargs)


def apply_env_overrides(settings: Dict[str, Any]) -> Dict[str, Any]:
    unsafe = os.environ.get(ENV_UNSAFE_CHARACTERS)
    backticks = os.environ.get(ENV_ALLOW_BACKTICK_PROMPTS)
    if unsafe is None and not backticks:
        return settings
    validation = settings.setdefault("validation", {})
    if not isinstance(validation, dict):
        # Left for the schema to report.
        return settings
    if unsafe is not None:
        logger.info("Overriding unsafe characters from %s", ENV_UNSAFE_CHARACTERS)
        validation["unsafe_characters"] = unsafe
    if backticks:
        logger.info("Overriding backtick prompt policy from %s", ENV_ALLOW_BACKTICK_PROMPTS)
        validation["allow_backtick_prompts"] = backticks.strip().lower() not in _FALSE_VALUES
    return settings


def load_settings(path: str | Path) -> Dict[str, Any]:
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        settings = yaml.safe_load(handle) or {}
    if not isinstance(settings, dict):
        raise ValueError(f"Settings file {path.name} must contain a mapping")
    return apply_env_overrides(settings)


def load_policy(path: Optional[str | Path] = None) -> ValidationPolicy:
    """Build a policy from a YAML settings file plus environment overrides."""
    if path is None:
        return policy_from_settings(apply_env_overrides({}))
    return policy_from_settings(load_settings(path))
