"""Removal of selected paths with per-item failure tolerance."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable, Iterable

from devsweep.core.errors import RemovalError
from devsweep.models.removal_result import RemovalFailure, RemovalResult
from devsweep.utils import dir_size

log = logging.getLogger(__name__)

# Timeout for a single shell removal (seconds).
_SHELL_TIMEOUT = 600

Remover = Callable[[Path], None]


def remove_tree(path: Path) -> None:
    """Recursively delete *path*; a missing path is a no-op."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def shell_remove_tree(path: Path) -> None:
    """Recursively delete *path* through the platform's native shell tools.

    Raises:
        RemovalError: The command exited non-zero or timed out.
    """
    if not path.exists() and not path.is_symlink():
        return
    if sys.platform == "win32":
        cmd = ["cmd", "/c", "rmdir", "/s", "/q", str(path)]
    else:
        cmd = ["rm", "-rf", "--", str(path)]

    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=_SHELL_TIMEOUT)
    except subprocess.TimeoutExpired as exc:
        raise RemovalError(f"Removal of {path} timed out") from exc
    if proc.returncode != 0:
        stderr = proc.stderr.strip() or f"exit {proc.returncode}"
        raise RemovalError(stderr)


def remove_paths(
    paths: Iterable[Path],
    remover: Remover = remove_tree,
    cleaner_id: str = "",
) -> RemovalResult:
    """Delete each path independently and report the aggregate.

    Each path is measured right before deletion.  A failing path is
    recorded and the batch continues; nothing is rolled back.
    """
    result = RemovalResult(cleaner_id=cleaner_id)
    for path in paths:
        try:
            size = dir_size(path)
            remover(path)
        except OSError as exc:
            log.warning("Failed to remove %s: %s", path, exc)
            result.failures.append(RemovalFailure(path=path, message=str(exc)))
            continue
        result.removed_count += 1
        result.freed_bytes += size
        log.info("Removed %s", path)
    return result
