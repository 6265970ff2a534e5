"""CLI utilities."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from sigdrift.config.constants import SIGDRIFT_DIR
from sigdrift.config.models import FailOn, SigDriftConfig
from sigdrift.core.errors import SigDriftError
from sigdrift.core.logging import get_logger
from sigdrift.drift.models import DriftReport
from sigdrift.git.errors import RepositoryError

log = get_logger("cli")

EXIT_POLICY_FAILED = 1
EXIT_OPERATIONAL_ERROR = 2


class OperationalError(click.ClickException):
    """A command could not run to completion (bad input, missing file, git failure)."""

    exit_code = EXIT_OPERATIONAL_ERROR


def find_project_root(start_path: Path | None = None) -> Path:
    """Directory holding the repo-level ``.sigdrift/config.yaml``.

    Walks up looking for a ``.sigdrift`` or ``.git`` directory; falls back to
    the start directory when neither exists.
    """
    if start_path is None:
        start_path = Path.cwd()

    start = start_path.resolve()
    for current in (start, *start.parents):
        if (current / SIGDRIFT_DIR).is_dir() or (current / ".git").exists():
            return current
    return start


@contextmanager
def handle_errors() -> Iterator[None]:
    """Render sigdrift and repository failures as one-line operational errors."""
    try:
        yield
    except (SigDriftError, RepositoryError) as e:
        log.debug("command_failed", error=type(e).__name__, message=str(e))
        raise OperationalError(str(e)) from e


def get_config(ctx: click.Context) -> SigDriftConfig:
    return ctx.find_root().obj["config"]  # type: ignore[no-any-return]


def policy_tripped(report: DriftReport, fail_on: FailOn) -> bool:
    """True when ``report`` should fail the run under ``fail_on``."""
    if fail_on == "all":
        return report.has_changes
    if fail_on == "breaking":
        return report.has_breaking_changes
    return False
