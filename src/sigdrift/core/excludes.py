"""Directories never walked when collecting project sources.

Tier 0 (HARDCODED_DIRS): VCS internals and sigdrift's own data.
Tier 1 (DEPENDENCY_DIRS): package-manager trees. TypeScript excludes
these by default; sigdrift excludes them even when a project config
overrides ``exclude``, since vendored declarations are not part of the
project's own surface.
"""

from __future__ import annotations

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # sigdrift data
        ".sigdrift",
    )
)

DEPENDENCY_DIRS: frozenset[str] = frozenset(
    (
        "node_modules",
        "bower_components",
        "jspm_packages",
    )
)

PRUNED_DIRS: frozenset[str] = HARDCODED_DIRS | DEPENDENCY_DIRS


def is_pruned_dir(dirname: str) -> bool:
    """Check if a directory name is never traversed."""
    return dirname in PRUNED_DIRS
