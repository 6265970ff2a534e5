"""Drift result types: per-signature changes and the aggregate report."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sigdrift.symbols.models import ParameterSignature


class ChangeKind(str, Enum):
    PARAMETER_ADDED = "parameter-added"
    PARAMETER_REMOVED = "parameter-removed"
    PARAMETER_TYPE_CHANGED = "parameter-type-changed"
    RETURN_TYPE_CHANGED = "return-type-changed"


class SemverBump(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


@dataclass(frozen=True, slots=True)
class ParameterAdded:
    """Parameter present only in the newer signature.

    Breaking unless the parameter is optional.
    """

    parameter: ParameterSignature
    breaking: bool

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.PARAMETER_ADDED

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "parameter": self.parameter.to_dict(),
            "breaking": self.breaking,
        }


@dataclass(frozen=True, slots=True)
class ParameterRemoved:
    parameter: ParameterSignature

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.PARAMETER_REMOVED

    @property
    def breaking(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "parameter": self.parameter.to_dict(),
            "breaking": self.breaking,
        }


@dataclass(frozen=True, slots=True)
class ParameterTypeChanged:
    """Same parameter name, different normalized type or optionality."""

    before: ParameterSignature
    after: ParameterSignature

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.PARAMETER_TYPE_CHANGED

    @property
    def breaking(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "before": self.before.to_dict(),
            "after": self.after.to_dict(),
            "breaking": self.breaking,
        }


@dataclass(frozen=True, slots=True)
class ReturnTypeChanged:
    before: str
    after: str

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.RETURN_TYPE_CHANGED

    @property
    def breaking(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "before": self.before,
            "after": self.after,
            "breaking": self.breaking,
        }


SignatureChange = ParameterAdded | ParameterRemoved | ParameterTypeChanged | ReturnTypeChanged


@dataclass(frozen=True, slots=True)
class FunctionDrift:
    """All changes found for one function key present in both snapshots."""

    key: str
    name: str
    file_path_before: str
    file_path_after: str
    changes: tuple[SignatureChange, ...]

    @property
    def is_breaking(self) -> bool:
        return any(c.breaking for c in self.changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "filePathBefore": self.file_path_before,
            "filePathAfter": self.file_path_after,
            "changes": [c.to_dict() for c in self.changes],
        }


@dataclass(frozen=True, slots=True)
class DriftReport:
    """Aggregate comparison of two snapshots.

    ``added_functions``/``removed_functions`` hold qualified names for display;
    ``added_keys``/``removed_keys`` hold the registry keys they came
    from, index-aligned with the names.
    """

    added_functions: tuple[str, ...]
    removed_functions: tuple[str, ...]
    modified_functions: tuple[FunctionDrift, ...]
    has_breaking_changes: bool
    suggested_version: SemverBump
    added_keys: tuple[str, ...] = ()
    removed_keys: tuple[str, ...] = ()

    @property
    def has_changes(self) -> bool:
        return bool(self.added_functions or self.removed_functions or self.modified_functions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "addedFunctions": list(self.added_functions),
            "removedFunctions": list(self.removed_functions),
            "modifiedFunctions": [fn.to_dict() for fn in self.modified_functions],
            "hasBreakingChanges": self.has_breaking_changes,
            "suggestedVersion": self.suggested_version.value,
            "addedKeys": list(self.added_keys),
            "removedKeys": list(self.removed_keys),
        }
