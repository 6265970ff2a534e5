"""Gate for externally supplied revision refs and filesystem paths.

Every ref interpolated into an external command and every path opened for
reading or writing passes through here first. Failures raise
``ValidationError`` before any side effect happens.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from sigdrift.config.constants import MAX_GIT_REF_LENGTH, MAX_PATH_LENGTH
from sigdrift.core.errors import ValidationError

# Quotes, backtick, dollar, backslash, semicolon, pipe, ampersand,
# angle brackets, parentheses and any whitespace.
_UNSAFE_REF_CHARS = re.compile(r"[\"'`$\\;|&<>()\s]")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

_REF_HINT = "Use only alphanumeric, hyphens, dots, slashes."


def validate_git_ref(ref: Any) -> str:
    """Validate a branch, tag or commit ref for use as a command argument.

    Returns:
        The trimmed ref.

    Raises:
        ValidationError: If the ref is not a string, empty, too long, or
            contains control characters or shell metacharacters.
    """
    if not isinstance(ref, str):
        raise ValidationError.invalid_type("Git ref", ref)
    trimmed = ref.strip()
    if not trimmed:
        raise ValidationError.empty("Git ref")
    if len(trimmed) > MAX_GIT_REF_LENGTH:
        raise ValidationError.too_long("Git ref", MAX_GIT_REF_LENGTH)
    # Checked on the raw input: surrounding whitespace is rejected too
    if _CONTROL_CHARS.search(ref) or _UNSAFE_REF_CHARS.search(ref):
        raise ValidationError.invalid_characters("Git ref", _REF_HINT)
    if trimmed.startswith("-"):
        raise ValidationError.invalid_characters("Git ref", "Refs cannot start with '-'.")
    return trimmed


def validate_path(path: Any, base_dir: str | os.PathLike[str] | None = None) -> Path:
    """Resolve ``path`` against ``base_dir`` and reject anything escaping it.

    Resolution is lexical (``..`` segments collapse, symlinks are not
    followed), matching how the paths are later recorded in snapshots.

    Args:
        path: Candidate path, relative to ``base_dir`` or absolute.
        base_dir: Allowed root. Defaults to the current working directory.

    Returns:
        The resolved absolute path.

    Raises:
        ValidationError: If the path is not a string, empty, too long,
            contains a NUL byte, or resolves outside ``base_dir``.
    """
    if isinstance(path, os.PathLike):
        path = os.fspath(path)
    if not isinstance(path, str):
        raise ValidationError.invalid_type("Path", path)
    trimmed = path.strip()
    if not trimmed:
        raise ValidationError.empty("Path")
    if len(trimmed) > MAX_PATH_LENGTH:
        raise ValidationError.too_long("Path", MAX_PATH_LENGTH)
    if "\x00" in trimmed:
        raise ValidationError.invalid_characters("Path", "NUL bytes are not allowed.")

    base = os.path.abspath(os.fspath(base_dir) if base_dir is not None else os.getcwd())
    resolved = os.path.abspath(os.path.join(base, trimmed))
    try:
        rel = os.path.relpath(resolved, base)
    except ValueError as e:
        # Different drive on Windows
        raise ValidationError.path_traversal(trimmed, base) from e

    if os.path.isabs(rel) or rel.split(os.sep)[0] == os.pardir:
        raise ValidationError.path_traversal(trimmed, base)
    return Path(resolved)


def sanitize_path_component(component: str) -> str:
    """Reject a single path component that could climb or re-root a path."""
    if ".." in component or component.startswith(("/", "\\")) or os.path.isabs(component):
        raise ValidationError.invalid_component(component)
    return component
