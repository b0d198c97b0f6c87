from __future__ import annotations

import logging

import pytest

from command_templates.models.diagnostic import Diagnostic, Severity
from command_templates.models.template import CommandTemplate
from command_templates.validation.collection import (
    TemplateValidationError,
    ensure_valid,
    find_template,
    format_diagnostics,
    has_errors,
    has_warnings,
    parse_template,
    validate_templates,
)


def _entries():
    return [
        {"name": "review", "command": "amp -p 'Review: $@'", "description": "Code review", "aliases": ["rev"]},
        {"name": "explain", "command": "ccs gemini 'Explain: $@'", "description": "Explain code"},
    ]


def test_validate_templates_pass():
    assert validate_templates(_entries()) == []


def test_validate_templates_prefixes_index():
    entries = _entries()
    entries[1]["command"] = ""
    errors = validate_templates(entries)
    assert [e.path for e in errors] == ["templates[1].command"]


def test_validate_templates_rejects_non_list():
    errors = validate_templates({"name": "review"}, path="config.templates")
    assert len(errors) == 1
    assert errors[0].path == "config.templates"


def test_duplicate_name_is_reported():
    entries = _entries()
    entries[1]["name"] = "review"
    errors = validate_templates(entries)
    assert len(errors) == 1
    assert errors[0].path == "templates[1].name"
    assert "already defined at templates[0].name" in errors[0].message


def test_alias_colliding_with_name_is_reported():
    entries = _entries()
    entries[1]["aliases"] = ["review"]
    errors = validate_templates(entries)
    assert [e.path for e in errors] == ["templates[1].aliases[0]"]


def test_non_object_entries_skip_duplicate_check():
    entries = _entries() + [None]
    errors = validate_templates(entries)
    assert [e.path for e in errors] == ["templates[2]"]


def test_has_errors_and_warnings():
    warning = Diagnostic("t.command", "command starts with $@", Severity.WARNING)
    error = Diagnostic("t.name", "name is required")
    assert has_warnings([warning])
    assert not has_errors([warning])
    assert has_errors([warning, error])
    assert not has_errors([])


def test_format_diagnostics():
    text = format_diagnostics(
        [
            Diagnostic("t.name", "name is required"),
            Diagnostic("t.command", "command starts with $@", Severity.WARNING),
        ]
    )
    assert text == "t.name: name is required\nt.command: command starts with $@ (warning)"


def test_ensure_valid_raises_with_diagnostics():
    diagnostics = [Diagnostic("t.name", "name is required")]
    with pytest.raises(TemplateValidationError) as excinfo:
        ensure_valid(diagnostics)
    assert excinfo.value.diagnostics == diagnostics
    assert "t.name: name is required" in str(excinfo.value)
    ensure_valid([])


def test_parse_template_builds_model():
    template = parse_template(_entries()[0], "templates[0]")
    assert isinstance(template, CommandTemplate)
    assert template.names == ["review", "rev"]
    assert template.has_placeholder
    assert template.matches("rev")


def test_parse_template_rejects_warnings_too():
    entry = {"name": "bad", "command": "$@ --flag", "description": "Placeholder at start"}
    with pytest.raises(TemplateValidationError) as excinfo:
        parse_template(entry, "templates[0]")
    assert excinfo.value.diagnostics[0].severity == Severity.WARNING


def test_find_template_prefers_name_over_alias():
    first = CommandTemplate(name="review", command="amp", description="Review", aliases=["r"])
    second = CommandTemplate(name="r", command="ruff", description="Lint")
    assert find_template([first, second], "r") is second
    assert find_template([first, second], "review") is first
    assert find_template([first, second], "missing") is None


def test_validate_templates_logs_summary_for_clean_list(caplog):
    with caplog.at_level(logging.INFO, logger="command_templates.validation.collection"):
        validate_templates(_entries())
    assert "Validated 2 templates: 0 diagnostics" in caplog.text
