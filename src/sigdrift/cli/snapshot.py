"""sigdrift snapshot command - extract and save the current project surface."""

from __future__ import annotations

import click

from sigdrift.cli.utils import get_config, handle_errors
from sigdrift.core.progress import pluralize, spinner, status
from sigdrift.core.validation import validate_git_ref, validate_path
from sigdrift.extract import analyze_project
from sigdrift.storage.snapshots import save_snapshot


@click.command()
@click.option("-c", "--config", "ts_config", default=None, help="Path to tsconfig.json")
@click.option("-o", "--output", default=None, help="Output path for the snapshot")
@click.option("--no-save", is_flag=True, help="Analyze only, do not write to disk")
@click.option("--git-ref", default=None, help="Record this git ref in the snapshot metadata")
@click.pass_context
def snapshot_command(
    ctx: click.Context,
    ts_config: str | None,
    output: str | None,
    no_save: bool,
    git_ref: str | None,
) -> None:
    """Analyze the project and save a snapshot."""
    config = get_config(ctx)
    ts_config = ts_config or config.analysis.tsconfig

    with handle_errors():
        config_path = validate_path(ts_config)
        ref = validate_git_ref(git_ref) if git_ref is not None else None

        with spinner("Analyzing project"):
            snapshot = analyze_project(config_path)

        if no_save:
            symbols = snapshot.symbols
            click.echo(
                f"Analyzed: {pluralize(len(symbols.functions), 'function')}, "
                f"{pluralize(len(symbols.interfaces), 'interface')}, "
                f"{pluralize(len(symbols.types), 'type')}"
            )
            return

        out_path = save_snapshot(
            snapshot,
            config_path,
            output_path=output or config.snapshot.output_path,
            git_ref=ref,
        )
    status(f"Snapshot saved to {out_path}", style="success")
