"""Drift report renderers: json, human and markdown."""

from __future__ import annotations

import json

from sigdrift.drift.models import (
    DriftReport,
    ParameterAdded,
    ParameterRemoved,
    ParameterTypeChanged,
    ReturnTypeChanged,
    SignatureChange,
)

FORMATS = ("human", "json", "markdown")


def describe_change(change: SignatureChange) -> str:
    """One-line description of a signature change."""
    if isinstance(change, ParameterAdded):
        marker = "?" if change.parameter.optional else ""
        return f"Parameter added: {change.parameter.name}{marker}: {change.parameter.type}"
    if isinstance(change, ParameterRemoved):
        return f"Parameter removed: {change.parameter.name}"
    if isinstance(change, ParameterTypeChanged):
        marker = "?" if change.after.optional else ""
        return f"Parameter type changed: {change.before.name}{marker} -> {change.after.type}"
    if isinstance(change, ReturnTypeChanged):
        return f"Return type changed: {change.before} -> {change.after}"
    raise TypeError(f"Unknown change: {change!r}")


def _format_json(report: DriftReport) -> str:
    return json.dumps(report.to_dict(), indent=2)


def _format_human(report: DriftReport) -> str:
    lines: list[str] = []

    if report.added_functions:
        lines.append("Added functions:")
        lines.extend(f"  + {name}" for name in report.added_functions)
        lines.append("")

    if report.removed_functions:
        lines.append("Removed functions:")
        lines.extend(f"  - {name}" for name in report.removed_functions)
        lines.append("")

    if report.modified_functions:
        lines.append("Modified functions:")
        for fn in report.modified_functions:
            lines.append(f"  ~ {fn.name} ({fn.file_path_after})")
            for change in fn.changes:
                badge = "[BREAKING] " if change.breaking else ""
                lines.append(f"      {badge}{describe_change(change)}")
        lines.append("")

    if not lines:
        lines.append("No drift detected.")
        lines.append("")

    suffix = " (breaking changes detected)" if report.has_breaking_changes else ""
    lines.append(f"Suggested version bump: {report.suggested_version.value}{suffix}")
    return "\n".join(lines)


def _format_markdown(report: DriftReport) -> str:
    lines = ["# sigdrift Drift Report", ""]

    if report.added_functions:
        lines.append("## Added Functions")
        lines.extend(f"- `{name}`" for name in report.added_functions)
        lines.append("")

    if report.removed_functions:
        lines.append("## Removed Functions")
        lines.extend(f"- `{name}`" for name in report.removed_functions)
        lines.append("")

    if report.modified_functions:
        lines.append("## Modified Functions")
        for fn in report.modified_functions:
            lines.append(f"### {fn.name}")
            lines.append(f"**File:** `{fn.file_path_after}`")
            lines.append("")
            lines.append("| Change | Breaking |")
            lines.append("|--------|----------|")
            for change in fn.changes:
                # Pipes would split the table cell
                desc = describe_change(change).replace("|", "\\|")
                lines.append(f"| {desc} | {'Yes' if change.breaking else 'No'} |")
            lines.append("")

    if not report.has_changes:
        lines.append("No drift detected.")
        lines.append("")

    lines.append("---")
    lines.append(f"**Suggested version:** `{report.suggested_version.value}`")
    if report.has_breaking_changes:
        lines.append("")
        lines.append("⚠️ **Breaking changes detected**")
    return "\n".join(lines)


def format_report(report: DriftReport, fmt: str = "human") -> str:
    """Render ``report`` as ``json``, ``human`` or ``markdown``.

    Raises:
        ValueError: If ``fmt`` is not a known format.
    """
    if fmt == "json":
        return _format_json(report)
    if fmt == "markdown":
        return _format_markdown(report)
    if fmt == "human":
        return _format_human(report)
    raise ValueError(f"Unknown report format: {fmt}")
