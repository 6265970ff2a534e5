"""Test fixtures for git module."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pygit2
import pytest
from git_fakes import GREET_V1, GREET_V2, TSCONFIG, FakeRunner, commit_files

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def ts_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Repository whose first commit has greet v1 and whose HEAD has greet v2.

    Branch ``release/1.0`` points at the first commit.
    """
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    first = commit_files(
        repo, {"tsconfig.json": TSCONFIG, "src/api.ts": GREET_V1}, "Initial commit"
    )
    repo.set_head("refs/heads/main")
    repo.branches.local.create("release/1.0", repo[first])
    commit_files(repo, {"src/api.ts": GREET_V2}, "Add greeting parameter")

    yield repo


@pytest.fixture
def repo_root(ts_repo: pygit2.Repository) -> Path:
    return Path(ts_repo.workdir).resolve()


@pytest.fixture
def fake_runner(ts_repo: pygit2.Repository) -> FakeRunner:
    return FakeRunner(ts_repo)
