"""Repository ban classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from repoenforcer.model.types import RepositoryDeclaration


def is_banned(
    repository: RepositoryDeclaration,
    allowed: Collection[str],
    allow_snapshots: bool,
) -> bool:
    """Return True if a declared repository violates the policy.

    Allow-listed ids are never banned. Otherwise the repository is banned
    unless snapshot repositories are tolerated and it has releases
    explicitly disabled. Its snapshots setting is not consulted.
    """
    if repository.id in allowed:
        return False
    return not allow_snapshots or repository.releases.serves_releases


def find_banned_repositories(
    repositories: Iterable[RepositoryDeclaration],
    allowed: Collection[str],
    allow_snapshots: bool,
) -> list[str]:
    """
    Collect ids of banned repositories.

    Args:
        repositories: Declared repositories, in declaration order
        allowed: Repository ids exempt from the ban
        allow_snapshots: Tolerate repositories with releases disabled

    Returns:
        Banned repository ids in input order
    """
    return [
        repository.id
        for repository in repositories
        if is_banned(repository, allowed, allow_snapshots)
    ]
