"""File-backed rule host reading an exported, already-resolved model chain.

The chain document is JSON or YAML::

    project: {groupId: g, artifactId: a, version: "1", basedir: "."}
    models:
      - groupId: g
        artifactId: a
        version: "1"
        repositories:
          - id: central2
            releases: {enabled: false}
        pluginRepositories: []

Models are listed with the project first, then its ancestors.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from repoenforcer.host.protocol import (
    PROJECT_EXPRESSION,
    ArtifactNotFoundError,
    ExpressionEvaluationError,
    ModelParseError,
)
from repoenforcer.model.types import (
    ConfigModel,
    ProjectDescriptor,
    ReleasesPolicy,
    RepositoryDeclaration,
)
from repoenforcer.schemas.validator import bullet_list, schema_errors

logger = logging.getLogger(__name__)


class ChainDocumentError(ModelParseError):
    """Chain document is malformed."""


def parse_repository(data: dict[str, Any]) -> RepositoryDeclaration:
    """Build a declaration; a releases block without ``enabled`` means enabled."""
    releases_block = data.get("releases")
    if releases_block is None:
        releases = ReleasesPolicy.UNSPECIFIED
    else:
        enabled = releases_block.get("enabled")
        releases = ReleasesPolicy.ENABLED if enabled is None else ReleasesPolicy.from_flag(enabled)
    return RepositoryDeclaration(id=data["id"], releases=releases, url=data.get("url"))


def parse_model(data: dict[str, Any]) -> ConfigModel:
    return ConfigModel(
        group_id=data["groupId"],
        artifact_id=data["artifactId"],
        version=data["version"],
        repositories=tuple(parse_repository(r) for r in data.get("repositories") or ()),
        plugin_repositories=tuple(parse_repository(r) for r in data.get("pluginRepositories") or ()),
    )


def load_chain_document(path: Path) -> tuple[ProjectDescriptor, list[ConfigModel]]:
    """
    Load and validate a chain document.

    Args:
        path: JSON (.json) or YAML file

    Returns:
        Tuple of (project, models)

    Raises:
        OSError: If the file cannot be read
        ChainDocumentError: If the document is malformed
    """
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ChainDocumentError(f"Malformed chain document at {path}: {e}") from e

    errors = schema_errors(raw, "model_chain")
    if errors:
        raise ChainDocumentError(f"Invalid chain document at {path}:\n{bullet_list(errors)}")

    models = [parse_model(m) for m in raw["models"]]

    project_raw = raw.get("project")
    if project_raw is None:
        project = ProjectDescriptor(
            group_id=models[0].group_id,
            artifact_id=models[0].artifact_id,
            version=models[0].version,
            basedir=path.parent,
        )
    else:
        basedir = Path(project_raw.get("basedir", "."))
        if not basedir.is_absolute():
            basedir = path.parent / basedir
        project = ProjectDescriptor(
            group_id=project_raw["groupId"],
            artifact_id=project_raw["artifactId"],
            version=project_raw["version"],
            basedir=basedir,
        )

    logger.debug("Loaded %d model(s) from %s", len(models), path)
    return project, models


class SnapshotRuleHelper:
    """Rule helper serving a single exported chain document."""

    def __init__(self, chain_path: Path) -> None:
        self.chain_path = chain_path
        self._loaded: tuple[ProjectDescriptor, list[ConfigModel]] | None = None

    def _load(self) -> tuple[ProjectDescriptor, list[ConfigModel]]:
        if self._loaded is None:
            self._loaded = load_chain_document(self.chain_path)
        return self._loaded

    def evaluate(self, expression: str) -> Any:
        if expression != PROJECT_EXPRESSION:
            raise ExpressionEvaluationError(f"Unsupported expression: {expression}")
        project, _ = self._load()
        return project

    def get_models_recursively(
        self,
        group_id: str,
        artifact_id: str,
        version: str,
        pom: Path,
    ) -> list[ConfigModel]:
        _, models = self._load()
        head = models[0]
        if (head.group_id, head.artifact_id, head.version) != (group_id, artifact_id, version):
            raise ArtifactNotFoundError(
                f"{group_id}:{artifact_id}:{version} ({pom}) is not the head of chain {self.chain_path}"
            )
        return list(models)
