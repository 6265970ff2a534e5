"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are format versions, security limits, and implementation details.

For configurable values, see models.py (SnapshotConfig, GitConfig, etc.).
"""

# =============================================================================
# Snapshot Format
# =============================================================================

SNAPSHOT_FORMAT_VERSION = 1
"""Stored snapshot schema version. Bump when the on-disk schema changes."""

SIGDRIFT_DIR = ".sigdrift"
"""Per-repository directory for snapshots and config."""

DEFAULT_SNAPSHOT_PATH = f"{SIGDRIFT_DIR}/snapshot.json"
"""Default output path for `save_snapshot`."""

BASELINE_PATH_TEMPLATE = SIGDRIFT_DIR + "/baseline-{ref}.json"
"""Default output path for a snapshot taken from a git ref."""

# =============================================================================
# Security Limits
# =============================================================================

MAX_GIT_REF_LENGTH = 256
"""Longest accepted git ref."""

MAX_PATH_LENGTH = 4096
"""Longest accepted path."""

# =============================================================================
# Internal Implementation Constants
# =============================================================================

WORKTREE_PREFIX = "sigdrift-"
"""Prefix for ephemeral checkout directories under the system temp dir."""

WORKTREE_DIRNAME = "tree"
"""Name of the checkout directory inside the ephemeral directory."""

DEPENDENCY_MANIFEST = "package.json"
"""Manifest whose presence triggers the dependency install step."""
