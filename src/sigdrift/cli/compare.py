"""sigdrift compare / check commands - diff two snapshots and gate on the result."""

from __future__ import annotations

import click

from sigdrift.cli.formatters import FORMATS, format_report
from sigdrift.cli.utils import EXIT_POLICY_FAILED, get_config, handle_errors, policy_tripped
from sigdrift.config.models import FailOn
from sigdrift.core.progress import spinner
from sigdrift.core.validation import validate_path
from sigdrift.drift.analyzer import compare_snapshots
from sigdrift.drift.models import DriftReport
from sigdrift.extract import analyze_project
from sigdrift.storage.snapshots import load_snapshot
from sigdrift.symbols.models import ProjectSnapshot

CURRENT = "current"

_FAIL_ON = click.Choice(["all", "breaking", "none"])


def _load_or_analyze(source: str, ts_config: str) -> ProjectSnapshot:
    if source == CURRENT:
        config_path = validate_path(ts_config)
        with spinner("Analyzing project"):
            return analyze_project(config_path)
    return load_snapshot(source).snapshot


def _emit(ctx: click.Context, report: DriftReport, fmt: str, fail_on: FailOn) -> None:
    click.echo(format_report(report, fmt))
    if policy_tripped(report, fail_on):
        ctx.exit(EXIT_POLICY_FAILED)


@click.command()
@click.argument("before")
@click.argument("after")
@click.option("-c", "--config", "ts_config", default=None, help="tsconfig.json used for 'current'")
@click.option(
    "-f", "--format", "fmt", type=click.Choice(FORMATS), default=None, help="Output format"
)
@click.option("--fail-on", type=_FAIL_ON, default=None, help="Exit 1 on: all, breaking, none")
@click.pass_context
def compare_command(
    ctx: click.Context,
    before: str,
    after: str,
    ts_config: str | None,
    fmt: str | None,
    fail_on: FailOn | None,
) -> None:
    """Compare two snapshots.

    BEFORE and AFTER are snapshot paths, or 'current' to analyze the
    working copy.
    """
    config = get_config(ctx)
    ts_config = ts_config or config.analysis.tsconfig

    with handle_errors():
        report = compare_snapshots(
            _load_or_analyze(before, ts_config),
            _load_or_analyze(after, ts_config),
        )
    _emit(ctx, report, fmt or config.report.format, fail_on or config.report.compare_fail_on)


@click.command()
@click.option("-c", "--config", "ts_config", default=None, help="Path to tsconfig.json")
@click.option("-b", "--baseline", default=None, help="Baseline snapshot path")
@click.option(
    "-f", "--format", "fmt", type=click.Choice(FORMATS), default=None, help="Output format"
)
@click.option("--fail-on", type=_FAIL_ON, default=None, help="Exit 1 on: all, breaking, none")
@click.pass_context
def check_command(
    ctx: click.Context,
    ts_config: str | None,
    baseline: str | None,
    fmt: str | None,
    fail_on: FailOn | None,
) -> None:
    """Compare the working copy against the baseline (for CI)."""
    config = get_config(ctx)
    ts_config = ts_config or config.analysis.tsconfig

    with handle_errors():
        stored = load_snapshot(baseline or config.snapshot.baseline_path)
        report = compare_snapshots(stored.snapshot, _load_or_analyze(CURRENT, ts_config))
    _emit(ctx, report, fmt or config.report.format, fail_on or config.report.check_fail_on)
