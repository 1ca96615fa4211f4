"""Validation of rule inputs and outputs against the packaged JSON schemas."""

from typing import Any

from jsonschema.validators import Draft202012Validator

from repoenforcer.utils.schema_registry import get_registry


def schema_errors(data: Any, schema_name: str) -> list[str]:
    """Return ``path: message`` lines for every schema violation, ordered by path.

    Raises:
        KeyError: If the schema is not in package data
    """
    validator = Draft202012Validator(get_registry().get_json(schema_name))
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    return [
        f"{'.'.join(str(p) for p in e.absolute_path)}: {e.message}" if e.absolute_path else e.message
        for e in errors
    ]


def bullet_list(lines: list[str]) -> str:
    return "\n".join(f"  - {line}" for line in lines)


def ensure_valid(data: Any, schema_name: str) -> None:
    """Raise ValueError if repoenforcer produced data its own schema rejects."""
    errors = schema_errors(data, schema_name)
    if errors:
        raise ValueError(f"Schema validation failed for '{schema_name}':\n{bullet_list(errors)}")
