"""Cleaner for the local NuGet caches."""

from __future__ import annotations

import logging
import subprocess

from devsweep.config import CleanerConfig
from devsweep.core.errors import CommandFailed
from devsweep.models.cleaner import Cleaner
from devsweep.models.entry import Entry, Item
from devsweep.models.removal_result import RemovalResult
from devsweep.utils import bytes_to_human, has_command, safe_dir_size

log = logging.getLogger(__name__)

CLEAR_COMMAND = ["dotnet", "nuget", "locals", "all", "--clear"]

# Timeout for the dotnet CLI (seconds).
_CLEAR_TIMEOUT = 600


class NugetCacheCleaner(Cleaner):
    """Clears all NuGet local caches through the dotnet CLI.

    The packages folder is measured before the clear so the freed size
    can be reported.
    """

    id = "nuget_cache"
    name = "NuGet Cache"
    description = "Global packages, HTTP cache and temp folders managed by 'dotnet nuget locals'."
    interactive = False
    sort_order = 20

    def scan(self, config: CleanerConfig) -> list[Item]:
        path = config.nuget_packages_path
        return [Entry(label="NuGet packages", path=path, size_bytes=safe_dir_size(path))]

    def remove(self, selection: list[Item], config: CleanerConfig) -> RemovalResult:
        if not has_command("dotnet"):
            raise CommandFailed("Error clearing NuGet cache: 'dotnet' was not found on PATH")

        size = sum(safe_dir_size(item.path) for item in selection)
        try:
            proc = subprocess.run(CLEAR_COMMAND, capture_output=True, text=True, timeout=_CLEAR_TIMEOUT)
        except (subprocess.TimeoutExpired, OSError) as exc:
            raise CommandFailed(f"Error clearing NuGet cache: {exc}") from exc

        stderr = proc.stderr.strip()
        if proc.returncode != 0 or stderr:
            raise CommandFailed(f"Error clearing NuGet cache: {stderr or f'exit code {proc.returncode}'}")

        log.info("dotnet nuget locals: %s", proc.stdout.strip())
        return RemovalResult(cleaner_id=self.id, removed_count=1, freed_bytes=size)

    def summary(self, result: RemovalResult) -> str:
        return f"NuGet cache cleared successfully, freeing {bytes_to_human(result.freed_bytes)}"
