"""sigdrift - structural signature drift detection for TypeScript projects."""

from sigdrift.core.validation import sanitize_path_component, validate_git_ref, validate_path
from sigdrift.drift import DriftReport, SemverBump, compare_signatures, compare_snapshots
from sigdrift.extract import analyze_project
from sigdrift.git import save_snapshot_from_git_ref, snapshot_from_git_ref
from sigdrift.storage import StoredSnapshot, StoredSnapshotMetadata, load_snapshot, save_snapshot
from sigdrift.symbols import ProjectSnapshot, SymbolRegistry

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "analyze_project",
    "compare_signatures",
    "compare_snapshots",
    "DriftReport",
    "SemverBump",
    "ProjectSnapshot",
    "SymbolRegistry",
    "StoredSnapshot",
    "StoredSnapshotMetadata",
    "save_snapshot",
    "load_snapshot",
    "snapshot_from_git_ref",
    "save_snapshot_from_git_ref",
    "validate_git_ref",
    "validate_path",
    "sanitize_path_component",
]
