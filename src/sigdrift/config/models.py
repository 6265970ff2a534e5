"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SIGDRIFT__SECTION__KEY)
3. Repo YAML (.sigdrift/config.yaml)
4. Global YAML (~/.config/sigdrift/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SIGDRIFT__<SECTION>__<KEY>=<VALUE>

Examples:
    SIGDRIFT__LOGGING__LEVEL=DEBUG
    SIGDRIFT__GIT__INSTALL_DEPS=true
    SIGDRIFT__REPORT__CHECK_FAIL_ON=all
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from sigdrift.config.constants import DEFAULT_SNAPSHOT_PATH, SIGDRIFT_DIR

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ReportFormat = Literal["human", "json", "markdown"]
FailOn = Literal["all", "breaking", "none"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SIGDRIFT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every external command.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class AnalysisConfig(BaseModel):
    """Extractor configuration.

    Env vars:
        SIGDRIFT__ANALYSIS__TSCONFIG: Project config path, relative to the repo
    """

    tsconfig: str = Field(
        default="tsconfig.json",
        description="Path to the project's tsconfig.json.",
    )


class SnapshotConfig(BaseModel):
    """Snapshot storage configuration.

    Env vars:
        SIGDRIFT__SNAPSHOT__OUTPUT_PATH: Where `sigdrift snapshot` writes
        SIGDRIFT__SNAPSHOT__BASELINE_PATH: Baseline used by `sigdrift check`
    """

    output_path: str = Field(
        default=DEFAULT_SNAPSHOT_PATH,
        description="Default snapshot output path, relative to the repo.",
    )
    baseline_path: str = Field(
        default=f"{SIGDRIFT_DIR}/baseline.json",
        description="Baseline snapshot path for `check` and `baseline`.",
    )


class GitConfig(BaseModel):
    """Reference resolution configuration.

    Env vars:
        SIGDRIFT__GIT__INSTALL_DEPS: Install dependencies in the checkout
        SIGDRIFT__GIT__COMMAND_TIMEOUT_SEC: Timeout for external commands
    """

    install_deps: bool = Field(
        default=False,
        description="Run the install command in the ephemeral checkout before analysis.",
    )
    install_command: list[str] = Field(
        default_factory=lambda: ["npm", "install"],
        description="Dependency install command (argv, never passed through a shell).",
    )
    command_timeout_sec: float | None = Field(
        default=600.0,
        description="Timeout for each external command. null disables the timeout. "
        "RISK: Dependency installs on cold caches can be slow.",
    )

    @field_validator("install_command")
    @classmethod
    def validate_install_command(cls, v: list[str]) -> list[str]:
        if not v or not all(part.strip() for part in v):
            raise ValueError("install_command must be a non-empty argv list")
        return v

    @field_validator("command_timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"command_timeout_sec must be positive, got {v}")
        return v


class ReportConfig(BaseModel):
    """Report rendering and CI gating defaults.

    Env vars:
        SIGDRIFT__REPORT__FORMAT: human, json or markdown
        SIGDRIFT__REPORT__CHECK_FAIL_ON: Fail policy for `check`
        SIGDRIFT__REPORT__COMPARE_FAIL_ON: Fail policy for `compare`
    """

    format: ReportFormat = "human"
    check_fail_on: FailOn = "breaking"
    compare_fail_on: FailOn = "none"


class SigDriftConfig(BaseModel):
    """Root configuration for sigdrift.

    All settings can be configured via:
    1. Environment variables: SIGDRIFT__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
