from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft202012Validator


def validate_json(data: Any, schema: Dict[str, Any], label: str = "document") -> None:
    """Raise ValueError listing every schema violation in ``data``."""
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        messages = []
        for err in errors:
            loc = ".".join([str(p) for p in err.path]) or "<root>"
            messages.append(f"{loc}: {err.message}")
        raise ValueError(f"Schema validation failed for {label}: " + "; ".join(messages))
