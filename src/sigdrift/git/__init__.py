"""Revision resolution through isolated git worktrees."""

from sigdrift.git.access import RepoAccess
from sigdrift.git.errors import (
    CommandError,
    InstallError,
    NotARepositoryError,
    RefNotFoundError,
    RepositoryError,
    WorktreeError,
)
from sigdrift.git.process import CommandResult, ProcessRunner, SubprocessRunner
from sigdrift.git.resolver import (
    baseline_filename,
    save_snapshot_from_git_ref,
    snapshot_from_git_ref,
)
from sigdrift.git.worktree import isolated_worktree

__all__ = [
    "RepoAccess",
    "RepositoryError",
    "NotARepositoryError",
    "RefNotFoundError",
    "WorktreeError",
    "CommandError",
    "InstallError",
    "CommandResult",
    "ProcessRunner",
    "SubprocessRunner",
    "isolated_worktree",
    "baseline_filename",
    "snapshot_from_git_ref",
    "save_snapshot_from_git_ref",
]
