"""Rule configuration value object and loader.

Supports .repoenforcer/rule.yaml, .repoenforcer/rule.toml or
.repoenforcer/rule.json under the project root, an explicit path, or the
REPOENFORCER_CONFIG environment variable.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from repoenforcer.rule.errors import (
    RULE_CONFIG_REASON_MISSING,
    RULE_CONFIG_REASON_PARSE_ERROR,
    RuleConfigError,
)
from repoenforcer.schemas.validator import bullet_list, schema_errors

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "REPOENFORCER_CONFIG"
CONFIG_DIRNAME = ".repoenforcer"
CONFIG_FILENAMES: tuple[str, ...] = ("rule.yaml", "rule.toml", "rule.json")
RULE_SECTION_KEY = "requireNoRepositories"

# Build configuration option names mapped to field names.
LEGACY_OPTION_NAMES: dict[str, str] = {
    "banRepositories": "ban_repositories",
    "banPluginRepositories": "ban_plugin_repositories",
    "allowedRepositories": "allowed_repositories",
    "allowedPluginRepositories": "allowed_plugin_repositories",
    "allowSnapshotRepositories": "allow_snapshot_repositories",
    "allowSnapshotPluginRepositories": "allow_snapshot_plugin_repositories",
    "message": "message",
}

DEFAULT_RULE_CONFIG_TEMPLATE: dict[str, Any] = {
    RULE_SECTION_KEY: {
        "banRepositories": True,
        "banPluginRepositories": True,
        "allowedRepositories": [],
        "allowedPluginRepositories": [],
        "allowSnapshotRepositories": False,
        "allowSnapshotPluginRepositories": False,
    },
}


@dataclass(frozen=True, kw_only=True)
class RuleConfig:
    """Policy parameters for the no-repositories rule."""

    ban_repositories: bool = True
    ban_plugin_repositories: bool = True
    allowed_repositories: frozenset[str] = field(default_factory=frozenset)
    allowed_plugin_repositories: frozenset[str] = field(default_factory=frozenset)
    allow_snapshot_repositories: bool = False
    allow_snapshot_plugin_repositories: bool = False
    message: str | None = None

    def __post_init__(self) -> None:
        # Accept any iterable of ids at construction, store frozensets.
        for name in ("allowed_repositories", "allowed_plugin_repositories"):
            value = getattr(self, name)
            if isinstance(value, str):
                raise RuleConfigError(f"{name} must be a collection of repository ids, not a string")
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, frozenset(value))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RuleConfig:
        """Parse and validate a configuration mapping into a RuleConfig.

        Accepts build configuration option names (``banRepositories``) as
        well as field names (``ban_repositories``), optionally nested under
        a ``requireNoRepositories`` key, which must then be the only key.
        """
        if not isinstance(data, dict):
            raise RuleConfigError(
                "rule config must be a mapping",
                RULE_CONFIG_REASON_PARSE_ERROR,
            )
        if RULE_SECTION_KEY in data:
            siblings = sorted(str(key) for key in data if key != RULE_SECTION_KEY)
            if siblings:
                raise RuleConfigError(
                    f"`{RULE_SECTION_KEY}` cannot be combined with top-level options: {', '.join(siblings)}"
                )
            section = data[RULE_SECTION_KEY]
            data = {} if section is None else section
            if not isinstance(data, dict):
                raise RuleConfigError(f"`{RULE_SECTION_KEY}` must be a mapping")

        normalized = _normalize_keys(data)
        errors = schema_errors(normalized, "rule_config")
        if errors:
            raise RuleConfigError(f"Invalid rule config:\n{bullet_list(errors)}")

        return cls(
            ban_repositories=normalized.get("ban_repositories", True),
            ban_plugin_repositories=normalized.get("ban_plugin_repositories", True),
            allowed_repositories=frozenset(normalized.get("allowed_repositories") or ()),
            allowed_plugin_repositories=frozenset(normalized.get("allowed_plugin_repositories") or ()),
            allow_snapshot_repositories=normalized.get("allow_snapshot_repositories", False),
            allow_snapshot_plugin_repositories=normalized.get("allow_snapshot_plugin_repositories", False),
            message=normalized.get("message") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a deterministic mapping using build configuration option names."""
        return {
            "banRepositories": self.ban_repositories,
            "banPluginRepositories": self.ban_plugin_repositories,
            "allowedRepositories": sorted(self.allowed_repositories),
            "allowedPluginRepositories": sorted(self.allowed_plugin_repositories),
            "allowSnapshotRepositories": self.allow_snapshot_repositories,
            "allowSnapshotPluginRepositories": self.allow_snapshot_plugin_repositories,
            "message": self.message,
        }

    def with_overrides(self, **changes: Any) -> RuleConfig:
        """Return a copy with non-None overrides applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    field_names = set(LEGACY_OPTION_NAMES.values())
    normalized: dict[str, Any] = {}
    for key, value in data.items():
        name = LEGACY_OPTION_NAMES.get(key, key)
        if name not in field_names:
            raise RuleConfigError(f"Unknown rule option: {key}")
        if name in normalized:
            raise RuleConfigError(f"Rule option given twice: {key}")
        normalized[name] = value
    return normalized


def config_path_for_root(project_root: Path) -> Path | None:
    """Return the first existing rule config file under a project root."""
    config_dir = project_root / CONFIG_DIRNAME
    for filename in CONFIG_FILENAMES:
        candidate = config_dir / filename
        if candidate.exists():
            return candidate
    return None


def _read_config_file(path: Path) -> Any:
    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f)
        if suffix == ".json":
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise RuleConfigError(
            f"Malformed rule config at {path}: {e}",
            RULE_CONFIG_REASON_PARSE_ERROR,
        ) from e
    except OSError as e:
        raise RuleConfigError(
            f"Cannot read rule config at {path}: {e}",
            RULE_CONFIG_REASON_PARSE_ERROR,
        ) from e


def load_rule_config(
    project_root: Path | None = None,
    config_path: Path | None = None,
) -> RuleConfig | None:
    """Load rule configuration.

    Priority order:
    1. explicit ``config_path``
    2. ``REPOENFORCER_CONFIG`` environment variable
    3. .repoenforcer/rule.{yaml,toml,json} under ``project_root``

    Args:
        project_root: Project root to search for a config directory
        config_path: Explicit config file path

    Returns:
        RuleConfig if a config file was found, None otherwise

    Raises:
        RuleConfigError: If an explicit file is missing, or a file is malformed
    """
    explicit = config_path
    if explicit is None and os.environ.get(CONFIG_ENV_VAR):
        explicit = Path(os.environ[CONFIG_ENV_VAR])

    if explicit is not None:
        if not explicit.exists():
            raise RuleConfigError(
                f"Rule config not found at {explicit}",
                RULE_CONFIG_REASON_MISSING,
            )
        path = explicit
    else:
        found = config_path_for_root(project_root or Path.cwd())
        if found is None:
            logger.debug("No rule config found; using defaults")
            return None
        path = found

    logger.debug("Loading rule config from %s", path)
    raw = _read_config_file(path)
    if raw is None:
        return RuleConfig()
    try:
        return RuleConfig.from_dict(raw)
    except RuleConfigError as e:
        raise RuleConfigError(f"{path}: {e}", e.reason_code) from e


def ensure_default_rule_config(project_root: Path, *, force: bool = False) -> Path:
    """Create the default rule config YAML deterministically."""
    output_path = project_root / CONFIG_DIRNAME / CONFIG_FILENAMES[0]
    if output_path.exists() and not force:
        raise FileExistsError(f"Rule config already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    rendered = yaml.safe_dump(DEFAULT_RULE_CONFIG_TEMPLATE, sort_keys=True)
    output_path.write_text(rendered, encoding="utf-8")
    return output_path

