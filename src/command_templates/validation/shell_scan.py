"""
Quote-aware scan of a template command for unsafe shell content.

The scan walks the command once, tracking single quotes, ANSI-C ``$'...'``
quotes, double quotes and backtick spans, with backslash escapes honoured
where bash honours them. It reports:

- ``$(`` anywhere in the command (command substitution is never sanctioned)
- backtick spans used as shell execution syntax: inside double quotes, or
  glued to the surrounding word. Standalone backtick spans delimit prompt
  text and are accepted unless the policy disables that.
- policy metacharacters outside any quoting that are not backslash-escaped
- quoting left open at the end of the command
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, List, Optional


class FindingKind(Enum):
    SUBSTITUTION = "substitution"
    METACHARACTER = "metacharacter"
    UNTERMINATED = "unterminated"


@dataclass(frozen=True)
class ShellFinding:
    kind: FindingKind
    detail: str
    offset: int


_QUOTE_NAMES = {"'": "single quote", '"': "double quote", "`": "backtick", "$'": "ANSI-C quote"}


def scan_command(
    command: str,
    unsafe_characters: AbstractSet[str],
    allow_backtick_prompts: bool = True,
) -> List[ShellFinding]:
    findings: List[ShellFinding] = []

    dollar_paren = command.find("$(")
    if dollar_paren != -1:
        findings.append(ShellFinding(FindingKind.SUBSTITUTION, "$(...)", dollar_paren))

    state: Optional[str] = None
    opened_at = -1
    idx = 0
    length = len(command)
    while idx < length:
        ch = command[idx]
        if state == "'":
            if ch == "'":
                state = None
        elif state in ("$'", "`"):
            if ch == "\\":
                idx += 1
            elif state == "$'" and ch == "'":
                state = None
            elif state == "`" and ch == "`":
                if not allow_backtick_prompts:
                    findings.append(ShellFinding(FindingKind.SUBSTITUTION, "backticks", opened_at))
                elif _is_glued(command, opened_at, idx):
                    findings.append(ShellFinding(FindingKind.SUBSTITUTION, "backticks inside a word", opened_at))
                state = None
        elif state == '"':
            if ch == "\\":
                idx += 1
            elif ch == '"':
                state = None
            elif ch == "`":
                close = _find_backtick_in_double_quotes(command, idx + 1)
                if close is None:
                    findings.append(ShellFinding(FindingKind.UNTERMINATED, "backtick", idx))
                else:
                    findings.append(ShellFinding(FindingKind.SUBSTITUTION, "backticks inside double quotes", idx))
                    idx = close
        else:
            if ch == "\\":
                idx += 1
            elif ch == "$" and command.startswith("'", idx + 1):
                state = "$'"
                opened_at = idx
                idx += 1
            elif ch in _QUOTE_NAMES:
                state = ch
                opened_at = idx
            elif ch in unsafe_characters:
                findings.append(ShellFinding(FindingKind.METACHARACTER, ch, idx))
        idx += 1

    if state is not None:
        findings.append(ShellFinding(FindingKind.UNTERMINATED, _QUOTE_NAMES[state], opened_at))
    return findings


def _find_backtick_in_double_quotes(command: str, start: int) -> Optional[int]:
    """Index of the closing backtick, or None when the double quote ends first."""
    idx = start
    while idx < len(command):
        ch = command[idx]
        if ch == "\\":
            idx += 2
            continue
        if ch == "`":
            return idx
        if ch == '"':
            return None
        idx += 1
    return None


def _is_glued(command: str, start: int, end: int) -> bool:
    before = command[start - 1] if start > 0 else " "
    after = command[end + 1] if end + 1 < len(command) else " "
    return not (before.isspace() and after.isspace())
