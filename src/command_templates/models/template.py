"""Typed form of a command template that passed validation."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator

PLACEHOLDER = "$@"


class CommandTemplate(BaseModel):
    """
    A named shell command pattern with an optional ``$@`` substitution point.

    Instances are built by ``parse_template`` once the raw entry produced no
    diagnostics, so the field validators here only restate the presence rules.
    """

    name: str = Field(min_length=1)
    command: str = Field(min_length=1)
    description: str = Field(min_length=1)
    aliases: List[str] = Field(default_factory=list)

    @field_validator("name", "command", "description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("aliases")
    @classmethod
    def validate_aliases(cls, v: List[str]) -> List[str]:
        for alias in v:
            if not alias.strip():
                raise ValueError("aliases must not contain blank entries")
        return v

    @property
    def names(self) -> List[str]:
        """Name followed by aliases, in declaration order."""
        return [self.name, *self.aliases]

    @property
    def has_placeholder(self) -> bool:
        return PLACEHOLDER in self.command

    def matches(self, token: str) -> bool:
        return token in self.names
