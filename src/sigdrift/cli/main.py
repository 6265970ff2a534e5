"""sigdrift CLI - signature drift detection for TypeScript projects."""

import click

from sigdrift import __version__
from sigdrift.cli.baseline import baseline_command
from sigdrift.cli.compare import check_command, compare_command
from sigdrift.cli.snapshot import snapshot_command
from sigdrift.cli.utils import OperationalError, find_project_root
from sigdrift.config.loader import load_config
from sigdrift.core.errors import ConfigError
from sigdrift.core.logging import configure_logging, set_run_id


@click.group()
@click.version_option(version=__version__, prog_name="sigdrift")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """sigdrift - Detect breaking signature changes between snapshots."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        config = load_config(find_project_root())
    except ConfigError as e:
        raise OperationalError(str(e)) from e

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    set_run_id()
    ctx.obj["config"] = config


cli.add_command(snapshot_command, name="snapshot")
cli.add_command(compare_command, name="compare")
cli.add_command(check_command, name="check")
cli.add_command(baseline_command, name="baseline")


if __name__ == "__main__":
    cli()
