"""Tests for the subprocess-backed command runner."""

import sys
from pathlib import Path

import pytest

from sigdrift.git.errors import CommandError, InstallError
from sigdrift.git.process import CommandResult, SubprocessRunner


class TestSubprocessRunner:
    """Real process execution tests."""

    def test_given_command_when_run_then_output_captured(self, tmp_path: Path) -> None:
        result = SubprocessRunner().run(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=str(tmp_path)
        )

        assert result.ok
        assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()

    def test_given_nonzero_exit_when_run_then_reported_not_raised(self, tmp_path: Path) -> None:
        result = SubprocessRunner().run(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"],
            cwd=str(tmp_path),
        )

        assert result.returncode == 3
        assert result.ok is False
        assert result.stderr == "bad"

    def test_given_shell_metacharacters_when_run_then_passed_literally(
        self, tmp_path: Path
    ) -> None:
        """Arguments never pass through a shell."""
        result = SubprocessRunner().run(
            [sys.executable, "-c", "import sys; print(sys.argv[1])", "a; echo b"],
            cwd=str(tmp_path),
        )

        assert result.stdout.strip() == "a; echo b"

    def test_given_missing_executable_when_run_then_command_error(self, tmp_path: Path) -> None:
        with pytest.raises(CommandError):
            SubprocessRunner().run(["sigdrift-no-such-binary"], cwd=str(tmp_path))

    def test_given_timeout_when_exceeded_then_command_error(self, tmp_path: Path) -> None:
        with pytest.raises(CommandError, match="timed out"):
            SubprocessRunner().run(
                [sys.executable, "-c", "import time; time.sleep(5)"],
                cwd=str(tmp_path),
                timeout=0.2,
            )


class TestErrors:
    def test_install_error_message_uses_last_stderr_line(self) -> None:
        error = InstallError(["npm", "install"], 1, "npm WARN x\nnpm ERR! boom\n")

        assert str(error) == "Command failed: npm install: exit code 1: npm ERR! boom"
        assert isinstance(error, CommandError)

    def test_command_result_ok(self) -> None:
        assert CommandResult(("true",), 0).ok
        assert not CommandResult(("false",), 1).ok
