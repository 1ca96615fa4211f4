"""Configuration chain evaluation against the no-repositories policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from repoenforcer.rule.classifier import find_banned_repositories
from repoenforcer.schemas.validator import ensure_valid

if TYPE_CHECKING:
    from collections.abc import Iterable

    from repoenforcer.model.types import ConfigModel
    from repoenforcer.rule.config import RuleConfig

logger = logging.getLogger(__name__)

REPORT_SCHEMA_VERSION = "1.0"
VIOLATION_HEADER = "Some poms have repositories defined:"


class RepositoryCategory(str, Enum):
    """Which repository list of a model a violation came from."""

    REPOSITORIES = "repositories"
    PLUGIN_REPOSITORIES = "plugin repositories"


@dataclass(frozen=True)
class Violation:
    """Banned repositories declared by one model in one category."""

    group_id: str
    artifact_id: str
    version: str
    category: RepositoryCategory
    banned_ids: tuple[str, ...]

    def describe(self) -> str:
        ids = ", ".join(self.banned_ids)
        return (
            f"{self.group_id}:{self.artifact_id} version:{self.version} "
            f"has {self.category.value} [{ids}]"
        )


@dataclass(frozen=True)
class ViolationReport:
    """All violations found in one chain evaluation, in chain order."""

    violations: tuple[Violation, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.violations


def _check_category(
    model: ConfigModel,
    category: RepositoryCategory,
    config: RuleConfig,
) -> Violation | None:
    if category is RepositoryCategory.REPOSITORIES:
        enabled = config.ban_repositories
        repositories = model.repositories
        allowed = config.allowed_repositories
        allow_snapshots = config.allow_snapshot_repositories
    else:
        enabled = config.ban_plugin_repositories
        repositories = model.plugin_repositories
        allowed = config.allowed_plugin_repositories
        allow_snapshots = config.allow_snapshot_plugin_repositories

    if not enabled or not repositories:
        return None

    banned = find_banned_repositories(repositories, allowed, allow_snapshots)
    if not banned:
        return None
    return Violation(
        group_id=model.group_id,
        artifact_id=model.artifact_id,
        version=model.version,
        category=category,
        banned_ids=tuple(banned),
    )


def evaluate_chain(chain: Iterable[ConfigModel], config: RuleConfig) -> ViolationReport:
    """
    Evaluate every model of a configuration chain.

    Release and plugin repositories are checked independently for each
    model; both may produce a violation for the same model.

    Args:
        chain: Resolved models, typically the project first then its ancestors
        config: Rule policy

    Returns:
        ViolationReport covering the whole chain (empty when the chain passes)
    """
    violations: list[Violation] = []
    model_count = 0
    for model in chain:
        model_count += 1
        for category in RepositoryCategory:
            violation = _check_category(model, category, config)
            if violation is not None:
                logger.debug("%s", violation.describe())
                violations.append(violation)

    logger.info(
        "Evaluated %d model(s): %d violation(s)",
        model_count,
        len(violations),
    )
    return ViolationReport(violations=tuple(violations))


def render_violation_message(report: ViolationReport, message: str | None = None) -> str:
    """Build the aggregated diagnostic text for a failed report."""
    lines = [VIOLATION_HEADER]
    lines.extend(violation.describe() for violation in report.violations)
    if message:
        lines.append(message)
    return "\n".join(lines)


def report_to_dict(report: ViolationReport, message: str | None = None) -> dict[str, Any]:
    """Serialize a report deterministically and validate it against its schema."""
    data: dict[str, Any] = {
        "schema_version": REPORT_SCHEMA_VERSION,
        "status": "passed" if report.passed else "failed",
        "violation_count": len(report.violations),
        "violations": [
            {
                "group_id": v.group_id,
                "artifact_id": v.artifact_id,
                "version": v.version,
                "category": v.category.value,
                "banned_ids": list(v.banned_ids),
            }
            for v in report.violations
        ],
    }
    if message:
        data["message"] = message
    ensure_valid(data, "violation_report")
    return data
