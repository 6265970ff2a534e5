"""Snapshot-level drift aggregation and semver inference."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sigdrift.drift.comparator import compare_signatures
from sigdrift.drift.models import DriftReport, FunctionDrift, SemverBump
from sigdrift.symbols.models import FunctionSignature, ProjectSnapshot


def _sorted_names(
    keys: Iterable[str], functions: Mapping[str, FunctionSignature]
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Names and keys in one (name, key) order, so index i is the same symbol."""
    pairs = sorted((functions[k].name, k) for k in keys)
    return tuple(name for name, _ in pairs), tuple(key for _, key in pairs)


def _suggest_version(
    modified: tuple[FunctionDrift, ...],
    added: tuple[str, ...],
    removed: tuple[str, ...],
) -> SemverBump:
    if removed:
        return SemverBump.MAJOR
    if any(fn.is_breaking for fn in modified):
        return SemverBump.MAJOR
    if added or modified:
        return SemverBump.MINOR
    return SemverBump.PATCH


def compare_snapshots(before: ProjectSnapshot, after: ProjectSnapshot) -> DriftReport:
    """Compare the function registries of two snapshots.

    Interfaces and type aliases are carried in both snapshots but are not
    compared. Neither input is modified.
    """
    before_fns = before.symbols.functions
    after_fns = after.symbols.functions

    added_keys = after_fns.keys() - before_fns.keys()
    removed_keys = before_fns.keys() - after_fns.keys()

    modified: list[FunctionDrift] = []
    for key in sorted(before_fns.keys() & after_fns.keys()):
        before_fn = before_fns[key]
        after_fn = after_fns[key]
        changes = compare_signatures(before_fn, after_fn)
        if changes:
            modified.append(
                FunctionDrift(
                    key=key,
                    name=after_fn.name,
                    file_path_before=before_fn.file_path,
                    file_path_after=after_fn.file_path,
                    changes=tuple(changes),
                )
            )

    added_names, added_sorted = _sorted_names(added_keys, after_fns)
    removed_names, removed_sorted = _sorted_names(removed_keys, before_fns)
    modified_fns = tuple(modified)

    return DriftReport(
        added_functions=added_names,
        removed_functions=removed_names,
        modified_functions=modified_fns,
        has_breaking_changes=bool(removed_names) or any(fn.is_breaking for fn in modified_fns),
        suggested_version=_suggest_version(modified_fns, added_names, removed_names),
        added_keys=added_sorted,
        removed_keys=removed_sorted,
    )
