"""Snapshots of arbitrary revisions, taken without touching the working copy.

Flow for ``snapshot_from_git_ref``:

1. Validate the ref and config path; require a git working tree.
2. Check the ref out detached into an ephemeral worktree.
3. Optionally install dependencies there (only if a manifest exists).
4. Extract the worktree's project.
5. Rewrite recorded paths from the worktree onto the caller's repository
   root so keys compare equal to snapshots of the working copy.

The worktree is removed on every exit path.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Sequence
from dataclasses import replace
from pathlib import Path

from sigdrift.config.constants import BASELINE_PATH_TEMPLATE, DEPENDENCY_MANIFEST
from sigdrift.core.errors import ValidationError
from sigdrift.core.validation import validate_git_ref, validate_path
from sigdrift.extract import analyze_project
from sigdrift.git.access import RepoAccess
from sigdrift.git.errors import InstallError
from sigdrift.git.process import ProcessRunner, SubprocessRunner
from sigdrift.git.worktree import isolated_worktree
from sigdrift.storage.snapshots import StoredSnapshot, StoredSnapshotMetadata, save_snapshot
from sigdrift.symbols.models import ProjectSnapshot, SymbolRegistry
from sigdrift.symbols.registry import make_function_key, make_interface_key, make_type_key


Analyzer = Callable[[str], ProjectSnapshot]

DEFAULT_INSTALL_COMMAND: tuple[str, ...] = ("npm", "install")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def baseline_filename(ref: str) -> str:
    """Default output path for a snapshot of ``ref``."""
    return BASELINE_PATH_TEMPLATE.format(ref=_UNSAFE_FILENAME_CHARS.sub("_", ref))


def _rebase_path(path: str, old_root: str, new_root: str) -> str:
    if path == old_root:
        return new_root
    if path.startswith(old_root + os.sep):
        return new_root + path[len(old_root) :]
    return path


def _rebase_snapshot(snapshot: ProjectSnapshot, old_root: str, new_root: str) -> ProjectSnapshot:
    """Move every recorded path (and the key built from it) onto ``new_root``."""
    symbols = snapshot.symbols

    functions = {}
    for fn in symbols.functions.values():
        fn = replace(fn, file_path=_rebase_path(fn.file_path, old_root, new_root))
        functions[make_function_key(fn.file_path, fn.name)] = fn

    interfaces = {}
    for iface in symbols.interfaces.values():
        iface = replace(iface, file_path=_rebase_path(iface.file_path, old_root, new_root))
        interfaces[make_interface_key(iface.file_path, iface.name)] = iface

    types = {}
    for alias in symbols.types.values():
        alias = replace(alias, file_path=_rebase_path(alias.file_path, old_root, new_root))
        types[make_type_key(alias.file_path, alias.name)] = alias

    return ProjectSnapshot(
        symbols=SymbolRegistry(functions=functions, interfaces=interfaces, types=types)
    )


def _caller_root(cwd: str, workdir: str) -> str:
    """The repository root, spelled relative to how the caller spells ``cwd``.

    pygit2 reports the working tree with symlinks resolved; the extractor
    records paths lexically, so the root is re-derived from ``cwd``.
    """
    rel = os.path.relpath(os.path.realpath(workdir), os.path.realpath(cwd))
    return os.path.normpath(os.path.join(cwd, rel))


def snapshot_from_git_ref(
    ts_config_path: str | os.PathLike[str],
    git_ref: str,
    *,
    cwd: str | os.PathLike[str] | None = None,
    install_deps: bool = False,
    install_command: Sequence[str] = DEFAULT_INSTALL_COMMAND,
    runner: ProcessRunner | None = None,
    timeout: float | None = None,
    analyzer: Analyzer = analyze_project,
) -> StoredSnapshot:
    """Extract a snapshot of ``git_ref`` in an isolated worktree.

    Args:
        ts_config_path: Project config, relative to ``cwd`` or absolute inside it.
        git_ref: Branch, tag or commit.
        cwd: Any directory inside the repository. Defaults to the current one.
        install_deps: Run ``install_command`` in the worktree before extraction
            when it contains a ``package.json``.
        install_command: Install argv, executed without a shell.
        runner: Executes external commands. Defaults to ``SubprocessRunner``.
        timeout: Per-command timeout in seconds; None waits indefinitely.
        analyzer: Builds a snapshot from a config path.

    Returns:
        The snapshot wrapped with ``gitRef`` and, when resolvable, ``gitSha``.

    Raises:
        ValidationError: Invalid ref or path. Raised before any side effect.
        NotARepositoryError: ``cwd`` is not inside a git working tree.
        WorktreeError: The worktree could not be created.
        CommandError: git or the installer could not run or timed out.
        InstallError: The install command failed.
        ExtractionError: The project config at the ref is missing or invalid.
    """
    caller_cwd = os.path.abspath(os.fspath(cwd) if cwd is not None else os.getcwd())
    safe_ref = validate_git_ref(git_ref)
    safe_config = validate_path(ts_config_path, caller_cwd)

    repo = RepoAccess(caller_cwd)
    workdir = repo.workdir
    caller_root = _caller_root(caller_cwd, workdir)

    config_rel = os.path.relpath(os.path.realpath(safe_config), os.path.realpath(workdir))
    if config_rel.split(os.sep)[0] == os.pardir:
        raise ValidationError.path_traversal(str(safe_config), caller_root)

    git_sha = repo.resolve_sha(safe_ref)
    runner = runner or SubprocessRunner()

    with isolated_worktree(workdir, safe_ref, runner=runner, timeout=timeout) as worktree:
        if install_deps and os.path.isfile(os.path.join(worktree, DEPENDENCY_MANIFEST)):
            argv = list(install_command)
            result = runner.run(argv, cwd=worktree, timeout=timeout)
            if not result.ok:
                raise InstallError(argv, result.returncode, result.stderr)

        raw = analyzer(os.path.join(worktree, config_rel))
        snapshot = _rebase_snapshot(raw, worktree, caller_root)

    return StoredSnapshot(
        metadata=StoredSnapshotMetadata.create(str(safe_config), git_ref=safe_ref, git_sha=git_sha),
        snapshot=snapshot,
    )


def save_snapshot_from_git_ref(
    ts_config_path: str | os.PathLike[str],
    git_ref: str,
    output_path: str | os.PathLike[str] | None = None,
    *,
    cwd: str | os.PathLike[str] | None = None,
    install_deps: bool = False,
    install_command: Sequence[str] = DEFAULT_INSTALL_COMMAND,
    runner: ProcessRunner | None = None,
    timeout: float | None = None,
    analyzer: Analyzer = analyze_project,
) -> Path:
    """Resolve ``git_ref`` and persist it.

    Without ``output_path`` the file is ``.sigdrift/baseline-<ref>.json``
    with characters outside ``[A-Za-z0-9.-]`` replaced by ``_``.

    Returns:
        The absolute path written.
    """
    caller_cwd = os.path.abspath(os.fspath(cwd) if cwd is not None else os.getcwd())
    stored = snapshot_from_git_ref(
        ts_config_path,
        git_ref,
        cwd=caller_cwd,
        install_deps=install_deps,
        install_command=install_command,
        runner=runner,
        timeout=timeout,
        analyzer=analyzer,
    )
    ref = stored.metadata.git_ref or git_ref
    return save_snapshot(
        stored.snapshot,
        stored.metadata.ts_config_path,
        output_path=output_path if output_path is not None else baseline_filename(ref),
        base_dir=caller_cwd,
        git_ref=ref,
        git_sha=stored.metadata.git_sha,
    )
