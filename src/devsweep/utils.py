"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

log = logging.getLogger(__name__)


def has_command(name: str) -> bool:
    """Check if a command exists on the system."""
    return shutil.which(name) is not None


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def dir_size(path: Path | str) -> int:
    """Return the total size in bytes of all regular files under *path*.

    A missing path is 0 and a regular file is its own length.  Symbolic
    links are not followed.  Errors raised while reading the tree
    propagate to the caller instead of producing a partial sum.
    """
    path = Path(path)
    try:
        st = path.lstat()
    except FileNotFoundError:
        return 0

    if path.is_symlink():
        return 0
    if not path.is_dir():
        return st.st_size if path.is_file() else 0

    total = 0
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        with os.scandir(current) as it:
            for entry in it:
                if entry.is_file(follow_symlinks=False):
                    total += entry.stat(follow_symlinks=False).st_size
                elif entry.is_dir(follow_symlinks=False):
                    stack.append(entry.path)
    return total


def safe_dir_size(path: Path | str) -> int:
    """Like :func:`dir_size`, but an unreadable tree counts as 0 bytes."""
    try:
        return dir_size(path)
    except OSError:
        log.debug("Cannot measure: %s", path)
        return 0


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string, e.g. ``1.5 MB``."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 Bytes"

    units = ("Bytes", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    unit = units[0]
    for unit in units:
        if value < 1024 or unit == units[-1]:
            break
        value /= 1024
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {unit}"
