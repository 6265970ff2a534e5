"""External command execution behind a substitutable interface.

Every external command sigdrift runs (``git worktree``, dependency installs)
goes through a ``ProcessRunner``. Commands are argv lists and never pass
through a shell. Tests substitute a deterministic fake.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from sigdrift.core.logging import get_logger
from sigdrift.git.errors import CommandError

log = get_logger("git.process")


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one finished command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner(Protocol):
    """Protocol for running external commands."""

    def run(
        self, argv: Sequence[str], *, cwd: str, timeout: float | None = None
    ) -> CommandResult:
        """Run ``argv`` in ``cwd`` and wait for it.

        A non-zero exit is reported in the result, not raised.

        Raises:
            CommandError: If the command cannot be launched or times out.
        """
        ...


class SubprocessRunner:
    """ProcessRunner backed by ``subprocess.run``."""

    def run(
        self, argv: Sequence[str], *, cwd: str, timeout: float | None = None
    ) -> CommandResult:
        args = list(argv)
        log.debug("command_start", argv=args, cwd=cwd, timeout=timeout)
        try:
            result = subprocess.run(
                args,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(args, f"timed out after {timeout}s") from e
        except OSError as e:
            raise CommandError(args, str(e)) from e

        log.debug("command_done", argv=args, returncode=result.returncode)
        return CommandResult(
            argv=tuple(args),
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
