"""Configuration chain domain types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

POM_FILENAME = "pom.xml"


class ReleasesPolicy(str, Enum):
    """Whether a declared repository serves release artifacts.

    A repository without an explicit releases block still serves releases,
    so UNSPECIFIED behaves like ENABLED.
    """

    ENABLED = "enabled"
    DISABLED = "disabled"
    UNSPECIFIED = "unspecified"

    @property
    def serves_releases(self) -> bool:
        return self is not ReleasesPolicy.DISABLED

    @classmethod
    def from_flag(cls, enabled: bool | None) -> ReleasesPolicy:
        if enabled is None:
            return cls.UNSPECIFIED
        return cls.ENABLED if enabled else cls.DISABLED


@dataclass(frozen=True)
class RepositoryDeclaration:
    """One declared artifact source."""

    id: str
    releases: ReleasesPolicy = ReleasesPolicy.UNSPECIFIED
    url: str | None = None


@dataclass(frozen=True)
class ConfigModel:
    """One node of a resolved configuration chain."""

    group_id: str
    artifact_id: str
    version: str
    repositories: tuple[RepositoryDeclaration, ...] = ()
    plugin_repositories: tuple[RepositoryDeclaration, ...] = ()


@dataclass(frozen=True)
class ProjectDescriptor:
    """Identity and location of the project under evaluation."""

    group_id: str
    artifact_id: str
    version: str
    basedir: Path

    @property
    def pom_path(self) -> Path:
        return self.basedir / POM_FILENAME
