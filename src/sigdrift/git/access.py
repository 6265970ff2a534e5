"""Repository access layer - owns pygit2.Repository and exposes computed facts."""

from __future__ import annotations

import os
from pathlib import Path

import pygit2

from sigdrift.git.errors import NotARepositoryError, RefNotFoundError


class RepoAccess:
    """Owns pygit2.Repository for the working tree containing ``path``.

    Discovery walks upward, so any directory inside the working tree works.
    Bare repositories are rejected: a worktree needs a working copy to
    hang off.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        discovered = pygit2.discover_repository(str(self._path))
        if discovered is None:
            raise NotARepositoryError(str(self._path))
        try:
            self._repo = pygit2.Repository(discovered)
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e
        if self._repo.is_bare or not self._repo.workdir:
            raise NotARepositoryError(str(self._path))

    @property
    def workdir(self) -> str:
        """Working tree root, without trailing separator."""
        return os.path.normpath(self._repo.workdir)

    def resolve_ref_oid(self, ref: str) -> pygit2.Oid:
        try:
            obj, _ = self._repo.resolve_refish(ref)
            return obj.id
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise RefNotFoundError(ref) from e

    def resolve_commit(self, ref: str) -> pygit2.Commit:
        obj: pygit2.Object | None = self._repo.get(self.resolve_ref_oid(ref))
        if isinstance(obj, pygit2.Tag):
            obj = obj.peel(pygit2.Commit)  # type: ignore[assignment]
        if not isinstance(obj, pygit2.Commit):
            raise RefNotFoundError(f"{ref} is not a commit")
        return obj

    def resolve_sha(self, ref: str) -> str | None:
        """Full commit SHA for ``ref``, or None when it cannot be resolved."""
        try:
            return str(self.resolve_commit(ref).id)
        except RefNotFoundError:
            return None
