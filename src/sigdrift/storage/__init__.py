"""Snapshot persistence."""

from sigdrift.storage.atomic import atomic_write_text
from sigdrift.storage.snapshots import (
    StoredSnapshot,
    StoredSnapshotMetadata,
    load_snapshot,
    save_snapshot,
)

__all__ = [
    "StoredSnapshot",
    "StoredSnapshotMetadata",
    "atomic_write_text",
    "load_snapshot",
    "save_snapshot",
]
