"""Cleaner for bin/obj build output folders in workspace projects."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from devsweep.config import CleanerConfig
from devsweep.core.errors import ScanError
from devsweep.core.scanner import sort_by_size
from devsweep.models.cleaner import Cleaner
from devsweep.models.entry import Entry, Item
from devsweep.utils import safe_dir_size

log = logging.getLogger(__name__)

OUTPUT_DIRS = ("bin", "obj")
PROJECT_SUFFIXES = (".csproj", ".fsproj", ".vbproj")

# Never descend into these while looking for project files.
_SKIP_DIRS = frozenset({*OUTPUT_DIRS, ".git", "node_modules"})


def _project_dirs(root: Path) -> list[Path]:
    """The workspace root plus every directory holding a project file."""
    found = [root]
    for current, dirnames, filenames in os.walk(root, onerror=lambda e: log.debug("Cannot read: %s", e)):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
        if Path(current) != root and any(f.endswith(PROJECT_SUFFIXES) for f in filenames):
            found.append(Path(current))
    return found


class BuildOutputsCleaner(Cleaner):
    """Removes every bin/ and obj/ folder of the open workspace folders."""

    id = "build_outputs"
    name = "Build Outputs"
    description = "bin/ and obj/ folders at workspace roots and next to .NET project files."
    interactive = False
    sort_order = 10
    empty_message = "No bin/obj folders found"

    def scan(self, config: CleanerConfig) -> list[Item]:
        if not config.workspace_dirs:
            raise ScanError("No workspace folder is open")

        entries: dict[Path, Entry] = {}
        for workspace in config.workspace_dirs:
            if not workspace.is_dir():
                log.info("Workspace folder not found: %s", workspace)
                continue
            for project in _project_dirs(workspace):
                for name in OUTPUT_DIRS:
                    path = project / name
                    if path in entries or not path.is_dir():
                        continue
                    try:
                        label = str(path.relative_to(workspace))
                    except ValueError:
                        label = str(path)
                    entries[path] = Entry(label=label, path=path, size_bytes=safe_dir_size(path))
        return sort_by_size(list(entries.values()))
