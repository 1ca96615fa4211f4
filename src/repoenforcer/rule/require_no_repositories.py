"""Rule checking that a project and its ancestors declare no banned repositories."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from repoenforcer.host.protocol import PROJECT_EXPRESSION, HostError
from repoenforcer.rule.base import NonCacheableEnforcerRule
from repoenforcer.rule.config import RuleConfig
from repoenforcer.rule.errors import ChainResolutionError, RepositoryPolicyViolation
from repoenforcer.rule.evaluator import ViolationReport, evaluate_chain, render_violation_message

if TYPE_CHECKING:
    from repoenforcer.host.protocol import RuleHelper
    from repoenforcer.model.types import ConfigModel

logger = logging.getLogger(__name__)


class RequireNoRepositories(NonCacheableEnforcerRule):
    """Fail when any model in the project's chain declares banned repositories.

    Release repositories and plugin repositories are checked independently,
    each with its own allow-list and snapshot tolerance (see RuleConfig).
    All violations across the chain are reported in a single failure.
    """

    def __init__(self, config: RuleConfig | None = None, message: str | None = None) -> None:
        self.config = config or RuleConfig()
        super().__init__(message if message is not None else self.config.message)

    def execute(self, helper: RuleHelper) -> None:
        chain = self._resolve_chain(helper)
        report = self.evaluate(chain)
        if not report.passed:
            raise RepositoryPolicyViolation(
                render_violation_message(report, self.message),
                report,
            )

    def evaluate(self, chain: list[ConfigModel]) -> ViolationReport:
        return evaluate_chain(chain, self.config)

    def _resolve_chain(self, helper: RuleHelper) -> list[ConfigModel]:
        try:
            project = helper.evaluate(PROJECT_EXPRESSION)
            return helper.get_models_recursively(
                project.group_id,
                project.artifact_id,
                project.version,
                project.pom_path,
            )
        except (HostError, OSError) as exc:
            logger.debug("Chain resolution failed: %r", exc)
            raise ChainResolutionError(str(exc)) from exc
