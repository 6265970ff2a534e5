"""TypeScript project extraction."""

from __future__ import annotations

import os

from sigdrift.extract.tsconfig import ProjectConfig, load_project_config
from sigdrift.extract.typescript import TypeScriptExtractor
from sigdrift.symbols.models import ProjectSnapshot


def analyze_project(config_path: str | os.PathLike[str]) -> ProjectSnapshot:
    """Extract a snapshot of every source file selected by ``config_path``.

    Each call builds its own extractor; nothing is cached across calls.

    Raises:
        ExtractionError: If the project config cannot be loaded.
    """
    config = load_project_config(config_path)
    extractor = TypeScriptExtractor()
    for path in config.files:
        extractor.extract_file(path)
    return extractor.snapshot()


__all__ = [
    "ProjectConfig",
    "TypeScriptExtractor",
    "analyze_project",
    "load_project_config",
]
