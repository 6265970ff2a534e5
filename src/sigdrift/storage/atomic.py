"""Crash-safe file replacement.

Writes go to a temp file in the destination directory (same filesystem),
are fsynced, then renamed over the target. A reader never observes a
half-written file.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Atomically replace ``path`` with ``content``, creating parent dirs.

    Raises:
        OSError: If the directory cannot be created or the write fails.
            The temp file is removed and the original file is untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise
