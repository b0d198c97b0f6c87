"""Validation of user-authored shell command templates."""

from command_templates.models import PLACEHOLDER, CommandTemplate, Diagnostic, Severity
from command_templates.utils.config import DEFAULT_POLICY, ValidationPolicy, load_policy
from command_templates.validation import (
    TemplateValidationError,
    ensure_valid,
    find_template,
    format_diagnostics,
    has_errors,
    has_warnings,
    parse_template,
    validate_template,
    validate_templates,
)

__all__ = [
    "CommandTemplate",
    "DEFAULT_POLICY",
    "Diagnostic",
    "PLACEHOLDER",
    "Severity",
    "TemplateValidationError",
    "ValidationPolicy",
    "ensure_valid",
    "find_template",
    "format_diagnostics",
    "has_errors",
    "has_warnings",
    "load_policy",
    "parse_template",
    "validate_template",
    "validate_templates",
]
