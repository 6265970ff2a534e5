"""Tests for ephemeral worktree lifecycle."""

from __future__ import annotations

import os
from pathlib import Path

import pygit2
import pytest
from git_fakes import FakeRunner

from sigdrift.core.errors import ExtractionError
from sigdrift.git.errors import WorktreeError
from sigdrift.git.worktree import isolated_worktree


class TestIsolatedWorktree:
    """Worktree creation and cleanup tests."""

    def test_given_valid_ref_when_entered_then_checkout_yielded_and_removed(
        self, repo_root: Path, fake_runner: FakeRunner
    ) -> None:
        # Given / When
        with isolated_worktree(str(repo_root), "release/1.0", runner=fake_runner) as path:
            seen = Path(path)
            contents = (seen / "src" / "api.ts").read_text()

        # Then
        assert "greeting" not in contents
        assert seen.parent.name.startswith("sigdrift-")
        assert not seen.parent.exists()
        assert fake_runner.commands() == [
            ("git", "worktree", "add", "--detach", str(seen), "release/1.0"),
            ("git", "worktree", "remove", "--force", str(seen)),
        ]

    def test_given_commands_when_run_then_executed_in_repo_root(
        self, repo_root: Path, fake_runner: FakeRunner
    ) -> None:
        with isolated_worktree(str(repo_root), "main", runner=fake_runner):
            pass

        assert {cwd for _, cwd in fake_runner.calls} == {str(repo_root)}

    def test_given_body_raises_when_exited_then_worktree_still_removed(
        self, repo_root: Path, fake_runner: FakeRunner
    ) -> None:
        """Cleanup runs on the error path and the original error surfaces."""
        with (
            pytest.raises(RuntimeError, match="analysis failed"),
            isolated_worktree(str(repo_root), "main", runner=fake_runner) as path,
        ):
            raise RuntimeError("analysis failed")

        assert not Path(path).parent.exists()
        assert fake_runner.commands()[-1][:3] == ("git", "worktree", "remove")

    def test_given_typed_error_in_body_when_exited_then_type_preserved(
        self, repo_root: Path, fake_runner: FakeRunner
    ) -> None:
        """Structured errors cross the cleanup unchanged."""
        error = ExtractionError.config_not_found("/tmp/tsconfig.json")

        with (
            pytest.raises(ExtractionError) as exc_info,
            isolated_worktree(str(repo_root), "main", runner=fake_runner) as path,
        ):
            raise error

        assert exc_info.value is error
        assert not Path(path).parent.exists()

    def test_given_add_fails_when_entered_then_worktree_error(
        self, repo_root: Path, ts_repo: pygit2.Repository
    ) -> None:
        runner = FakeRunner(ts_repo, add_returncode=128)

        with (
            pytest.raises(WorktreeError) as exc_info,
            isolated_worktree(str(repo_root), "nope", runner=runner),
        ):
            pass

        assert exc_info.value.action == "create"
        assert "invalid reference" in exc_info.value.reason
        assert not Path(exc_info.value.path).parent.exists()

    def test_given_remove_fails_when_exited_then_files_deleted_and_pruned(
        self, repo_root: Path, ts_repo: pygit2.Repository
    ) -> None:
        """A failed ``worktree remove`` falls back to deleting and pruning."""
        runner = FakeRunner(ts_repo, remove_returncode=1)

        with isolated_worktree(str(repo_root), "main", runner=runner) as path:
            pass

        assert not os.path.exists(path)
        assert runner.commands()[-1] == ("git", "worktree", "prune")

    def test_given_remove_raises_when_body_failed_then_body_error_preserved(
        self, repo_root: Path, ts_repo: pygit2.Repository
    ) -> None:
        """A cleanup failure never masks the exception that ended the block."""
        runner = FakeRunner(ts_repo, remove_raises=True)

        with (
            pytest.raises(ValueError, match="original"),
            isolated_worktree(str(repo_root), "main", runner=runner) as path,
        ):
            raise ValueError("original")

        assert not Path(path).parent.exists()
        assert runner.commands()[-1] == ("git", "worktree", "prune")

    def test_given_concurrent_worktrees_when_entered_then_distinct_paths(
        self, repo_root: Path, fake_runner: FakeRunner
    ) -> None:
        with (
            isolated_worktree(str(repo_root), "main", runner=fake_runner) as first,
            isolated_worktree(str(repo_root), "release/1.0", runner=fake_runner) as second,
        ):
            assert first != second
            assert "greeting" in Path(first, "src", "api.ts").read_text()
            assert "greeting" not in Path(second, "src", "api.ts").read_text()
