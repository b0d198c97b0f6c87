from __future__ import annotations

from command_templates.models.diagnostic import Diagnostic, Severity
from command_templates.models.template import PLACEHOLDER, CommandTemplate

__all__ = [
    "CommandTemplate",
    "Diagnostic",
    "PLACEHOLDER",
    "Severity",
]
