"""Core module exports."""

from sigdrift.core.errors import (
    ConfigError,
    ErrorCode,
    ExtractionError,
    SigDriftError,
    SnapshotFormatError,
    SnapshotNotFoundError,
    SnapshotVersionError,
    ValidationError,
)
from sigdrift.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from sigdrift.core.progress import pluralize, spinner, status

__all__ = [
    # Errors
    "ErrorCode",
    "SigDriftError",
    "ValidationError",
    "ConfigError",
    "SnapshotNotFoundError",
    "SnapshotFormatError",
    "SnapshotVersionError",
    "ExtractionError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "spinner",
    "status",
]
