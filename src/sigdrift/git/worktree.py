"""Ephemeral, detached worktrees for analyzing another revision.

A worktree shares the object store with the caller's repository but has its
own checkout and HEAD, so the caller's working copy, index and branch are
never touched, and concurrent resolutions each get their own directory.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager

from sigdrift.config.constants import WORKTREE_DIRNAME, WORKTREE_PREFIX
from sigdrift.core.logging import get_logger
from sigdrift.git.errors import CommandError, WorktreeError
from sigdrift.git.process import CommandResult, ProcessRunner

log = get_logger("git.worktree")


def _failure_reason(result: CommandResult) -> str:
    return result.stderr.strip() or result.stdout.strip() or f"exit code {result.returncode}"


def _remove_worktree(
    repo_root: str, worktree_path: str, runner: ProcessRunner, timeout: float | None
) -> None:
    """Unregister and delete the worktree. Never raises for command failures."""
    try:
        result = runner.run(
            ["git", "worktree", "remove", "--force", worktree_path],
            cwd=repo_root,
            timeout=timeout,
        )
        if result.ok:
            log.debug("worktree_removed", path=worktree_path)
            return
        log.warning("worktree_remove_failed", path=worktree_path, reason=_failure_reason(result))
    except CommandError as e:
        log.warning("worktree_remove_failed", path=worktree_path, reason=e.reason)

    # Fallback: delete the files, then drop the stale registration
    shutil.rmtree(worktree_path, ignore_errors=True)
    try:
        prune = runner.run(["git", "worktree", "prune"], cwd=repo_root, timeout=timeout)
        if not prune.ok:
            log.warning("worktree_prune_failed", reason=_failure_reason(prune))
    except CommandError as e:
        log.warning("worktree_prune_failed", reason=e.reason)


@contextmanager
def isolated_worktree(
    repo_root: str,
    ref: str,
    *,
    runner: ProcessRunner,
    timeout: float | None = None,
) -> Iterator[str]:
    """Check out ``ref`` detached into a fresh temp directory.

    The worktree and its temp directory are removed on every exit path. A
    cleanup failure is logged and never replaces the exception that ended
    the block.

    Args:
        repo_root: Working tree root of the repository.
        ref: A validated ref.
        runner: Executes the git commands.
        timeout: Per-command timeout in seconds.

    Yields:
        Absolute path of the checkout.

    Raises:
        WorktreeError: If git cannot create the worktree.
        CommandError: If git cannot be launched or times out.
    """
    temp_root = tempfile.mkdtemp(prefix=WORKTREE_PREFIX)
    worktree_path = os.path.join(temp_root, WORKTREE_DIRNAME)
    try:
        result = runner.run(
            ["git", "worktree", "add", "--detach", worktree_path, ref],
            cwd=repo_root,
            timeout=timeout,
        )
        if not result.ok:
            raise WorktreeError("create", worktree_path, _failure_reason(result))
        log.debug("worktree_created", path=worktree_path, ref=ref)
        yield worktree_path
    finally:
        _remove_worktree(repo_root, worktree_path, runner, timeout)
        shutil.rmtree(temp_root, ignore_errors=True)
