"""Failure types raised back to the rule host."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from repoenforcer.rule.evaluator import ViolationReport

REASON_REPOSITORIES_BANNED = "REPOSITORIES_BANNED"
REASON_CHAIN_RESOLUTION_FAILED = "CHAIN_RESOLUTION_FAILED"

RULE_CONFIG_REASON_MISSING = "RULE_CONFIG_MISSING"
RULE_CONFIG_REASON_PARSE_ERROR = "RULE_CONFIG_PARSE_ERROR"
RULE_CONFIG_REASON_SCHEMA_INVALID = "RULE_CONFIG_SCHEMA_INVALID"


class EnforcerRuleError(RuntimeError):
    """Rule failure reported to the host."""

    reason_code: str

    def __init__(self, message: str, reason_code: str) -> None:
        super().__init__(message)
        self.reason_code = reason_code


class RepositoryPolicyViolation(EnforcerRuleError):
    """One or more banned repositories were found in the chain."""

    def __init__(self, message: str, report: ViolationReport) -> None:
        super().__init__(message, REASON_REPOSITORIES_BANNED)
        self.report = report


class ChainResolutionError(EnforcerRuleError):
    """The host could not produce the configuration chain.

    The message is the collaborator's message, unaltered; the collaborator
    exception is available as ``__cause__``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, REASON_CHAIN_RESOLUTION_FAILED)


class RuleConfigError(ValueError):
    """Rule configuration is missing or malformed."""

    reason_code: str

    def __init__(self, message: str, reason_code: str = RULE_CONFIG_REASON_SCHEMA_INVALID) -> None:
        super().__init__(message)
        self.reason_code = reason_code
