"""Config module exports."""

from sigdrift.config.loader import load_config
from sigdrift.config.models import (
    AnalysisConfig,
    GitConfig,
    LoggingConfig,
    ReportConfig,
    SigDriftConfig,
    SnapshotConfig,
)

__all__ = [
    "load_config",
    "SigDriftConfig",
    "LoggingConfig",
    "AnalysisConfig",
    "SnapshotConfig",
    "GitConfig",
    "ReportConfig",
]
