"""sigdrift baseline command - snapshot a git ref without touching the working copy."""

from __future__ import annotations

import click

from sigdrift.cli.utils import get_config, handle_errors
from sigdrift.core.progress import spinner, status
from sigdrift.git.resolver import save_snapshot_from_git_ref


@click.command()
@click.argument("ref")
@click.option("-c", "--config", "ts_config", default=None, help="Path to tsconfig.json")
@click.option("-o", "--output", default=None, help="Output path for the baseline")
@click.option(
    "--install-deps/--no-install-deps",
    default=None,
    help="Install dependencies in the checkout before analysis",
)
@click.pass_context
def baseline_command(
    ctx: click.Context,
    ref: str,
    ts_config: str | None,
    output: str | None,
    install_deps: bool | None,
) -> None:
    """Create a baseline snapshot from REF (branch, tag or commit)."""
    config = get_config(ctx)
    ts_config = ts_config or config.analysis.tsconfig

    with handle_errors(), spinner(f"Creating baseline from {ref}"):
        out_path = save_snapshot_from_git_ref(
            ts_config,
            ref,
            output or config.snapshot.baseline_path,
            install_deps=config.git.install_deps if install_deps is None else install_deps,
            install_command=config.git.install_command,
            timeout=config.git.command_timeout_sec,
        )
    status(f"Baseline saved to {out_path}", style="success")
