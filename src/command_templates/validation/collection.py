"""Validation across a list of templates, plus helpers for callers deciding policy."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from command_templates.models.diagnostic import Diagnostic
from command_templates.models.template import CommandTemplate
from command_templates.utils.config import ValidationPolicy
from command_templates.validation.template_validator import validate_template

logger = logging.getLogger(__name__)


class TemplateValidationError(Exception):
    """Raised by callers that choose to treat diagnostics as fatal."""

    def __init__(self, diagnostics: Sequence[Diagnostic]) -> None:
        self.diagnostics = list(diagnostics)
        super().__init__(format_diagnostics(self.diagnostics))


def validate_templates(
    entries: Any,
    path: str = "templates",
    policy: Optional[ValidationPolicy] = None,
) -> List[Diagnostic]:
    """
    Validate every entry of a template list and check names for collisions.

    Names and aliases share one namespace; a collision is reported on the
    later entry, pointing back at the first definition.
    """
    if not isinstance(entries, (list, tuple)):
        return [Diagnostic(path, "templates must be an array of template objects")]

    diagnostics: List[Diagnostic] = []
    for idx, entry in enumerate(entries):
        diagnostics.extend(validate_template(entry, f"{path}[{idx}]", policy))
    diagnostics.extend(_check_duplicates(entries, path))

    logger.info("Validated %d templates: %d diagnostics", len(entries), len(diagnostics))
    return diagnostics


def _check_duplicates(entries: Sequence[Any], path: str) -> List[Diagnostic]:
    seen: Dict[str, str] = {}
    diagnostics: List[Diagnostic] = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            continue
        for field_path, token in _declared_names(entry, f"{path}[{idx}]"):
            first = seen.get(token)
            if first is None:
                seen[token] = field_path
                continue
            logger.debug("Duplicate template name %r at %s", token, field_path)
            diagnostics.append(
                Diagnostic(field_path, f"duplicate template name or alias '{token}' (already defined at {first})")
            )
    return diagnostics


def _declared_names(entry: Mapping[str, Any], path: str) -> List[Tuple[str, str]]:
    names: List[Tuple[str, str]] = []
    name = entry.get("name")
    if isinstance(name, str) and name.strip():
        names.append((f"{path}.name", name))
    aliases = entry.get("aliases")
    if isinstance(aliases, (list, tuple)):
        for idx, alias in enumerate(aliases):
            if isinstance(alias, str) and alias.strip():
                names.append((f"{path}.aliases[{idx}]", alias))
    return names


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(not d.is_warning for d in diagnostics)


def has_warnings(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.is_warning for d in diagnostics)


def format_diagnostics(diagnostics: Iterable[Diagnostic]) -> str:
    return "\n".join(str(d) for d in diagnostics)


def ensure_valid(diagnostics: Sequence[Diagnostic]) -> None:
    """Raise TemplateValidationError when there is any diagnostic, warnings included."""
    if diagnostics:
        raise TemplateValidationError(diagnostics)


def parse_template(
    candidate: Any,
    path: str,
    policy: Optional[ValidationPolicy] = None,
) -> CommandTemplate:
    """Validate ``candidate`` and return it as a CommandTemplate."""
    ensure_valid(validate_template(candidate, path, policy))
    try:
        return CommandTemplate(
            name=candidate["name"],
            command=candidate["command"],
            description=candidate["description"],
            aliases=list(candidate.get("aliases") or []),
        )
    except ValidationError as e:
        raise TemplateValidationError([Diagnostic(path, f"template could not be built: {e}")]) from e


def find_template(templates: Iterable[CommandTemplate], token: str) -> Optional[CommandTemplate]:
    """Resolve a template by name first, then by alias."""
    templates = list(templates)
    for template in templates:
        if template.name == token:
            return template
    for template in templates:
        if token in template.aliases:
            return template
    return None
