"""Exceptions raised by scanning and removal."""

from __future__ import annotations

from pathlib import Path


class DevSweepError(Exception):
    """Base class for devsweep errors."""


class ScanError(DevSweepError):
    """A cleaner could not build its inventory."""


class PathNotFound(ScanError):
    """A root directory required by a command does not exist."""

    def __init__(self, path: Path | str, message: str | None = None) -> None:
        self.path = Path(path)
        super().__init__(message or f"Path not found: {self.path}")


class ManifestUnavailable(ScanError):
    """The usage manifest of an asset-bundle layout is missing or malformed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Manifest unavailable at {self.path}: {reason}")


class NothingToClean(DevSweepError):
    """Informational: the command has no candidates to offer."""


class RemovalError(OSError):
    """A Remover capability failed to delete a path."""


class CommandFailed(DevSweepError):
    """An external command used in place of a removal did not succeed."""
