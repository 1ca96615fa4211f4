"""Configuration chain model types."""

from repoenforcer.model.types import (
    ConfigModel,
    ProjectDescriptor,
    ReleasesPolicy,
    RepositoryDeclaration,
)

__all__ = [
    "ConfigModel",
    "ProjectDescriptor",
    "ReleasesPolicy",
    "RepositoryDeclaration",
]
