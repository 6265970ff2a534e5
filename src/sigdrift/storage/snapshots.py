"""Versioned snapshot persistence.

On-disk document::

    {"metadata": {"version": 1, "createdAt": "...", "tsConfigPath": "...",
                  "gitRef": "...", "gitSha": "..."},
     "snapshot": {"symbols": {"functions": {}, "interfaces": {}, "types": {}}}}

``gitRef``/``gitSha`` are omitted when unknown. A version other than
``SNAPSHOT_FORMAT_VERSION`` is rejected on load; there is no migration.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from sigdrift.config.constants import DEFAULT_SNAPSHOT_PATH, SNAPSHOT_FORMAT_VERSION
from sigdrift.core.errors import SnapshotFormatError, SnapshotNotFoundError, SnapshotVersionError
from sigdrift.core.validation import validate_path
from sigdrift.storage.atomic import atomic_write_text
from sigdrift.symbols.models import ProjectSnapshot


@dataclass(frozen=True, slots=True)
class StoredSnapshotMetadata:
    version: int
    created_at: str
    ts_config_path: str
    git_ref: str | None = None
    git_sha: str | None = None

    @classmethod
    def create(
        cls, ts_config_path: str, *, git_ref: str | None = None, git_sha: str | None = None
    ) -> StoredSnapshotMetadata:
        """Stamp the current format version and a UTC timestamp."""
        return cls(
            version=SNAPSHOT_FORMAT_VERSION,
            created_at=_utc_timestamp(),
            ts_config_path=ts_config_path,
            git_ref=git_ref,
            git_sha=git_sha,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "createdAt": self.created_at,
            "tsConfigPath": self.ts_config_path,
        }
        if self.git_ref is not None:
            data["gitRef"] = self.git_ref
        if self.git_sha is not None:
            data["gitSha"] = self.git_sha
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StoredSnapshotMetadata:
        git_ref = data.get("gitRef")
        git_sha = data.get("gitSha")
        return cls(
            version=int(data["version"]),
            created_at=str(data.get("createdAt", "")),
            ts_config_path=str(data.get("tsConfigPath", "")),
            git_ref=str(git_ref) if git_ref is not None else None,
            git_sha=str(git_sha) if git_sha is not None else None,
        )


@dataclass(frozen=True, slots=True)
class StoredSnapshot:
    """A snapshot wrapped with the metadata needed to reload and trace it."""

    metadata: StoredSnapshotMetadata
    snapshot: ProjectSnapshot

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": self.metadata.to_dict(), "snapshot": self.snapshot.to_dict()}


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def save_snapshot(
    snapshot: ProjectSnapshot,
    ts_config_path: str | os.PathLike[str],
    *,
    output_path: str | os.PathLike[str] | None = None,
    base_dir: str | os.PathLike[str] | None = None,
    git_ref: str | None = None,
    git_sha: str | None = None,
) -> Path:
    """Persist ``snapshot`` with a metadata envelope.

    Both paths are validated against ``base_dir`` (default: cwd) before
    anything is written. The write is atomic.

    Returns:
        The absolute path written.

    Raises:
        ValidationError: If either path is malformed or escapes ``base_dir``.
        OSError: If the file cannot be written.
    """
    base = os.fspath(base_dir) if base_dir is not None else os.getcwd()
    out_path = validate_path(
        output_path if output_path is not None else DEFAULT_SNAPSHOT_PATH, base
    )
    config_path = validate_path(ts_config_path, base)

    stored = StoredSnapshot(
        metadata=StoredSnapshotMetadata.create(str(config_path), git_ref=git_ref, git_sha=git_sha),
        snapshot=snapshot,
    )
    atomic_write_text(out_path, json.dumps(stored.to_dict(), indent=2))
    return out_path


def _check_envelope(data: Any, path: str) -> None:
    if not isinstance(data, dict):
        raise SnapshotFormatError.malformed(path, "missing required fields (metadata, snapshot)")
    metadata = data.get("metadata")
    snapshot = data.get("snapshot")
    if (
        not isinstance(metadata, dict)
        or not isinstance(snapshot, dict)
        or isinstance(metadata.get("version"), bool)
        or not isinstance(metadata.get("version"), int | float)
    ):
        raise SnapshotFormatError.malformed(path, "missing required fields (metadata, snapshot)")


def load_snapshot(
    path: str | os.PathLike[str],
    *,
    base_dir: str | os.PathLike[str] | None = None,
) -> StoredSnapshot:
    """Load and verify a stored snapshot. Nothing partial is ever returned.

    Raises:
        ValidationError: If ``path`` is malformed or escapes ``base_dir``.
        SnapshotNotFoundError: If the file does not exist.
        SnapshotFormatError: If the file is not JSON or lacks required fields.
        SnapshotVersionError: If the stored format version is unsupported.
    """
    base = os.fspath(base_dir) if base_dir is not None else os.getcwd()
    resolved = validate_path(path, base)
    display = str(resolved)

    if not resolved.is_file():
        raise SnapshotNotFoundError.for_path(display)

    try:
        data = json.loads(resolved.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SnapshotFormatError.invalid_json(display, str(e)) from e

    _check_envelope(data, display)

    version = data["metadata"]["version"]
    if version != SNAPSHOT_FORMAT_VERSION:
        raise SnapshotVersionError.mismatch(display, version, SNAPSHOT_FORMAT_VERSION)

    try:
        return StoredSnapshot(
            metadata=StoredSnapshotMetadata.from_dict(data["metadata"]),
            snapshot=ProjectSnapshot.from_dict(data["snapshot"]),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise SnapshotFormatError.malformed(display, f"invalid snapshot contents ({e!r})") from e
