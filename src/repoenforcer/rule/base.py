"""Enforcer rule base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from repoenforcer.host.protocol import RuleHelper


class EnforcerRule(ABC):
    """A rule the host executes against the current project."""

    def __init__(self, message: str | None = None) -> None:
        self.message = message

    @abstractmethod
    def execute(self, helper: RuleHelper) -> None:
        """Run the rule; raise EnforcerRuleError on failure."""

    @abstractmethod
    def is_cacheable(self) -> bool: ...

    @abstractmethod
    def is_result_valid(self, cached_rule: EnforcerRule) -> bool: ...

    @abstractmethod
    def get_cache_id(self) -> str: ...


class NonCacheableEnforcerRule(EnforcerRule):
    """Rule whose result the host must never reuse."""

    def is_cacheable(self) -> bool:
        return False

    def is_result_valid(self, cached_rule: EnforcerRule) -> bool:
        return False

    def get_cache_id(self) -> str:
        return ""
