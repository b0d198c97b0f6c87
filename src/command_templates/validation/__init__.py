"""Template validation entry points."""

from .collection import (
    TemplateValidationError,
    ensure_valid,
    find_template,
    format_diagnostics,
    has_errors,
    has_warnings,
    parse_template,
    validate_templates,
)
from .shell_scan import FindingKind, ShellFinding, scan_command
from .template_validator import validate_template

__all__ = [
    "FindingKind",
    "ShellFinding",
    "TemplateValidationError",
    "ensure_valid",
    "find_template",
    "format_diagnostics",
    "has_errors",
    "has_warnings",
    "parse_template",
    "scan_command",
    "validate_template",
    "validate_templates",
]
