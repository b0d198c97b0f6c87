"""
Validation of a single user-authored command template.

``validate_template`` accepts any value and never raises: wrong shapes,
missing fields and unsafe commands all come back as field-addressed
diagnostics. An empty list means the template can be used as-is.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from command_templates.models.diagnostic import Diagnostic
from command_templates.utils.config import DEFAULT_POLICY, ValidationPolicy
from command_templates.validation.shell_scan import FindingKind, ShellFinding, scan_command

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "command", "description")


def validate_template(
    candidate: Any,
    path: str,
    policy: Optional[ValidationPolicy] = None,
) -> List[Diagnostic]:
    """
    Validate one template entry.

    Args:
        candidate: Untrusted value, normally a mapping decoded from config.
        path: Location label used as the prefix of every diagnostic path.
        policy: Validation policy, DEFAULT_POLICY when omitted.

    Returns:
        Diagnostics in check order: field presence, placeholder rules,
        unsafe content, aliases.
    """
    policy = policy or DEFAULT_POLICY

    if not isinstance(candidate, Mapping):
        logger.debug("Template %s is %s, not an object", path, type(candidate).__name__)
        return [Diagnostic(path, "template must be an object with name, command and description")]

    diagnostics: List[Diagnostic] = []
    for field_name in REQUIRED_FIELDS:
        if not _is_non_empty_string(candidate.get(field_name)):
            diagnostics.append(
                Diagnostic(f"{path}.{field_name}", f"{field_name} is required and must be a non-empty string")
            )

    command = candidate.get("command")
    if _is_non_empty_string(command):
        diagnostics.extend(_check_placeholder(command, f"{path}.command", policy))
        diagnostics.extend(_check_unsafe_content(command, f"{path}.command", policy))

    if "aliases" in candidate:
        diagnostics.extend(_check_aliases(candidate["aliases"], f"{path}.aliases"))

    logger.debug("Template %s produced %d diagnostics", path, len(diagnostics))
    return diagnostics


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _check_placeholder(command: str, path: str, policy: ValidationPolicy) -> List[Diagnostic]:
    token = policy.placeholder
    diagnostics: List[Diagnostic] = []
    count = command.count(token)
    if count > 1:
        diagnostics.append(
            Diagnostic(path, f"command may contain at most one {token} placeholder (found {count})")
        )
    if command.strip().startswith(token):
        diagnostics.append(
            Diagnostic(
                path,
                f"command starts with {token}; the user argument would run as the command itself",
                policy.leading_placeholder_severity,
            )
        )
    return diagnostics


def _check_unsafe_content(command: str, path: str, policy: ValidationPolicy) -> List[Diagnostic]:
    findings = scan_command(command, policy.unsafe_characters, policy.allow_backtick_prompts)
    diagnostics: List[Diagnostic] = []

    substitutions = _unique_details(f for f in findings if f.kind == FindingKind.SUBSTITUTION)
    for detail in substitutions:
        diagnostics.append(Diagnostic(path, f"command contains unsafe command substitution: {detail}"))

    metacharacters = _unique_details(f for f in findings if f.kind == FindingKind.METACHARACTER)
    if metacharacters:
        shown = ", ".join(repr(ch) for ch in metacharacters)
        diagnostics.append(Diagnostic(path, f"command contains unsafe characters outside quotes: {shown}"))

    for detail in _unique_details(f for f in findings if f.kind == FindingKind.UNTERMINATED):
        diagnostics.append(Diagnostic(path, f"command contains unsafe characters: unterminated {detail}"))
    return diagnostics


def _unique_details(findings: Iterable[ShellFinding]) -> List[str]:
    seen: List[str] = []
    for finding in findings:
        if finding.detail not in seen:
            seen.append(finding.detail)
    return seen


def _check_aliases(aliases: Any, path: str) -> List[Diagnostic]:
    # str is a Sequence too, so check for list/tuple explicitly.
    if not isinstance(aliases, (list, tuple)):
        return [Diagnostic(path, "aliases must be an array of strings")]
    diagnostics: List[Diagnostic] = []
    for idx, alias in enumerate(aliases):
        if not isinstance(alias, str):
            diagnostics.append(
                Diagnostic(f"{path}[{idx}]", f"aliases must contain only strings, got {type(alias).__name__}")
            )
        elif not alias.strip():
            diagnostics.append(Diagnostic(f"{path}[{idx}]", "aliases must not contain empty strings"))
    return diagnostics
