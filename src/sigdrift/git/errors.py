"""Repository and checkout error types."""


class RepositoryError(Exception):
    """Base error for repository and checkout operations."""

    pass


class NotARepositoryError(RepositoryError):
    """Path is not inside a git working tree."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RefNotFoundError(RepositoryError):
    """Reference (branch, tag, commit) not found."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


class WorktreeError(RepositoryError):
    """Ephemeral worktree could not be created or removed."""

    def __init__(self, action: str, path: str, reason: str) -> None:
        super().__init__(f"Failed to {action} worktree at {path}: {reason}")
        self.action = action
        self.path = path
        self.reason = reason


class CommandError(RepositoryError):
    """External command could not be launched or timed out."""

    def __init__(self, argv: list[str], reason: str) -> None:
        super().__init__(f"Command failed: {' '.join(argv)}: {reason}")
        self.argv = argv
        self.reason = reason


class InstallError(CommandError):
    """Dependency install step exited non-zero."""

    def __init__(self, argv: list[str], returncode: int, stderr: str) -> None:
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else "no output"
        super().__init__(argv, f"exit code {returncode}: {detail}")
        self.returncode = returncode
        self.stderr = stderr
