"""Contract between an enforcer rule and its host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from pathlib import Path

    from repoenforcer.model.types import ConfigModel

PROJECT_EXPRESSION = "${project}"


class HostError(Exception):
    """Base class for failures raised by host collaborators."""


class ExpressionEvaluationError(HostError):
    """The host could not evaluate an expression."""


class ArtifactNotFoundError(HostError):
    """A model in the chain could not be located."""


class ArtifactResolutionError(HostError):
    """A model in the chain could not be resolved."""


class ModelParseError(HostError):
    """A model in the chain could not be parsed."""


class RuleHelper(Protocol):
    """Services a host exposes to a rule during execution."""

    def evaluate(self, expression: str) -> Any:
        """Evaluate a host expression; ``${project}`` yields a ProjectDescriptor."""
        ...

    def get_models_recursively(
        self,
        group_id: str,
        artifact_id: str,
        version: str,
        pom: Path,
    ) -> list[ConfigModel]:
        """Return the resolved model chain, the project first then its ancestors."""
        ...
