from __future__ import annotations

from command_templates.utils.config import (
    DEFAULT_POLICY,
    ValidationPolicy,
    load_policy,
    load_settings,
    policy_from_settings,
)
from command_templates.utils.json_schema import validate_json

__all__ = [
    "DEFAULT_POLICY",
    "ValidationPolicy",
    "load_policy",
    "load_settings",
    "policy_from_settings",
    "validate_json",
]
