"""The requireNoRepositories enforcer rule."""

from repoenforcer.rule.classifier import find_banned_repositories, is_banned
from repoenforcer.rule.config import RuleConfig, ensure_default_rule_config, load_rule_config
from repoenforcer.rule.errors import (
    ChainResolutionError,
    EnforcerRuleError,
    RepositoryPolicyViolation,
    RuleConfigError,
)
from repoenforcer.rule.evaluator import (
    RepositoryCategory,
    Violation,
    ViolationReport,
    evaluate_chain,
    render_violation_message,
    report_to_dict,
)
from repoenforcer.rule.require_no_repositories import RequireNoRepositories

__all__ = [
    "ChainResolutionError",
    "EnforcerRuleError",
    "RepositoryCategory",
    "RepositoryPolicyViolation",
    "RequireNoRepositories",
    "RuleConfig",
    "RuleConfigError",
    "Violation",
    "ViolationReport",
    "ensure_default_rule_config",
    "evaluate_chain",
    "find_banned_repositories",
    "is_banned",
    "load_rule_config",
    "render_violation_message",
    "report_to_dict",
]
