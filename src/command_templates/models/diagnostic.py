from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Severity(Enum):
    """How serious a validation finding is."""
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single validation finding addressed to a template field.

    Attributes:
        path: Location of the finding, e.g. ``templates[0].command``
        message: Human-readable description of the problem
        severity: ERROR or WARNING. Callers that treat any diagnostic as a
            rejection stay correct regardless of severity.
    """
    path: str
    message: str
    severity: Severity = Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity == Severity.WARNING

    def to_dict(self) -> Dict[str, str]:
        return {
            "path": self.path,
            "message": self.message,
            "severity": self.severity.value,
        }

    def __str__(self) -> str:
        if self.is_warning:
            return f"{self.path}: {self.message} (warning)"
        return f"{self.path}: {self.message}"
