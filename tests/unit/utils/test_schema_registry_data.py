"""Tests for package-data schema loading and validation."""

import pytest

from repoenforcer.schemas.validator import bullet_list, ensure_valid, schema_errors
from repoenforcer.utils.schema_registry import SchemaRegistry


def test_registry_lists_packaged_schemas() -> None:
    registry = SchemaRegistry()

    assert set(registry.available) >= {"model_chain", "rule_config", "violation_report"}
    assert registry.get_json("rule_config.schema.json")["type"] == "object"


def test_unknown_schema_reports_available() -> None:
    with pytest.raises(KeyError, match="rule_config"):
        SchemaRegistry().get_text("does_not_exist")


def test_schema_errors_are_path_prefixed_and_ordered() -> None:
    errors = schema_errors({"message": 3, "ban_repositories": 1}, "rule_config")

    assert len(errors) == 2
    assert errors[0].startswith("ban_repositories:")
    assert errors[1].startswith("message:")
    assert schema_errors({}, "rule_config") == []


def test_schema_errors_without_path_use_bare_message() -> None:
    errors = schema_errors(["not", "a", "mapping"], "rule_config")

    assert errors == ["['not', 'a', 'mapping'] is not of type 'object'"]


def test_bullet_list() -> None:
    assert bullet_list(["a", "b"]) == "  - a\n  - b"


def test_ensure_valid_raises_on_invalid_report() -> None:
    with pytest.raises(ValueError, match="Schema validation failed for 'violation_report'"):
        ensure_valid({"status": "unknown"}, "violation_report")
