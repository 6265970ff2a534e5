"""sigdrift error types with typed error codes.

Error code ranges:
- 1xxx: Validation (untrusted paths and refs)
- 2xxx: Config
- 3xxx: Snapshot storage
- 4xxx: Extraction

Repository/checkout failures live in ``sigdrift.git.errors``.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Validation (1xxx)
    VALIDATION_INVALID_TYPE = 1001
    VALIDATION_EMPTY = 1002
    VALIDATION_TOO_LONG = 1003
    VALIDATION_INVALID_CHARACTERS = 1004
    VALIDATION_PATH_TRAVERSAL = 1005
    VALIDATION_INVALID_COMPONENT = 1006

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Snapshot storage (3xxx)
    SNAPSHOT_NOT_FOUND = 3001
    SNAPSHOT_INVALID_JSON = 3002
    SNAPSHOT_MALFORMED = 3003
    SNAPSHOT_VERSION_MISMATCH = 3004

    # Extraction (4xxx)
    EXTRACTION_CONFIG_NOT_FOUND = 4001
    EXTRACTION_INVALID_CONFIG = 4002


@dataclass(eq=False)
class SigDriftError(Exception):
    """Base error with structured context for machine-readable rendering.

    Not frozen: contextlib and traceback assign attributes such as
    ``__traceback__`` on exceptions passing through them.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SNAPSHOT_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ValidationError(SigDriftError):
    """Malformed or unsafe externally supplied path or ref."""

    @classmethod
    def invalid_type(cls, what: str, value: Any) -> "ValidationError":
        return cls(
            code=ErrorCode.VALIDATION_INVALID_TYPE,
            message=f"{what} must be a string, got {type(value).__name__}",
            details={"what": what},
        )

    @classmethod
    def empty(cls, what: str) -> "ValidationError":
        return cls(
            code=ErrorCode.VALIDATION_EMPTY,
            message=f"{what} cannot be empty",
            details={"what": what},
        )

    @classmethod
    def too_long(cls, what: str, limit: int) -> "ValidationError":
        return cls(
            code=ErrorCode.VALIDATION_TOO_LONG,
            message=f"{what} exceeds maximum length ({limit})",
            details={"what": what, "limit": limit},
        )

    @classmethod
    def invalid_characters(cls, what: str, hint: str) -> "ValidationError":
        return cls(
            code=ErrorCode.VALIDATION_INVALID_CHARACTERS,
            message=f"{what} contains invalid characters. {hint}",
            details={"what": what},
        )

    @classmethod
    def path_traversal(cls, path: str, base_dir: str) -> "ValidationError":
        return cls(
            code=ErrorCode.VALIDATION_PATH_TRAVERSAL,
            message=f"Path resolves outside allowed directory: {path}",
            details={"path": path, "base_dir": base_dir},
        )

    @classmethod
    def invalid_component(cls, component: str) -> "ValidationError":
        return cls(
            code=ErrorCode.VALIDATION_INVALID_COMPONENT,
            message=f"Invalid path component: {component!r}",
            details={"component": component},
        )


class ConfigError(SigDriftError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class SnapshotNotFoundError(SigDriftError):
    """Snapshot file does not exist."""

    @classmethod
    def for_path(cls, path: str) -> "SnapshotNotFoundError":
        return cls(
            code=ErrorCode.SNAPSHOT_NOT_FOUND,
            message=f"Snapshot file not found: {path}",
            details={"path": path},
        )


class SnapshotFormatError(SigDriftError):
    """Snapshot file is unparseable or structurally incomplete."""

    @classmethod
    def invalid_json(cls, path: str, reason: str) -> "SnapshotFormatError":
        return cls(
            code=ErrorCode.SNAPSHOT_INVALID_JSON,
            message=f"Invalid snapshot file (not valid JSON): {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def malformed(cls, path: str, reason: str) -> "SnapshotFormatError":
        return cls(
            code=ErrorCode.SNAPSHOT_MALFORMED,
            message=f"Invalid snapshot file: {reason}",
            details={"path": path, "reason": reason},
        )


class SnapshotVersionError(SigDriftError):
    """Snapshot format version differs from the supported one."""

    @classmethod
    def mismatch(cls, path: str, found: Any, expected: int) -> "SnapshotVersionError":
        return cls(
            code=ErrorCode.SNAPSHOT_VERSION_MISMATCH,
            message=(
                f"Unsupported snapshot version: {found}. Current version is {expected}. "
                "Please regenerate the snapshot."
            ),
            details={"path": path, "found": found, "expected": expected},
        )


class ExtractionError(SigDriftError):
    """Project configuration could not be read or understood by the extractor."""

    @classmethod
    def config_not_found(cls, path: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.EXTRACTION_CONFIG_NOT_FOUND,
            message=f"Project config not found: {path}",
            details={"path": path},
        )

    @classmethod
    def invalid_config(cls, path: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.EXTRACTION_INVALID_CONFIG,
            message=f"Invalid project config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )
