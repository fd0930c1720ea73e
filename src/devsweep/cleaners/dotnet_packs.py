"""Cleaner for installed .NET workload packs."""

from __future__ import annotations

from devsweep.config import CleanerConfig
from devsweep.core.errors import PathNotFound
from devsweep.core.retention import keep_latest_only
from devsweep.core.scanner import scan_packs
from devsweep.models.cleaner import Cleaner, Picker
from devsweep.models.entry import Component, Entry, Item


class DotnetPacksCleaner(Cleaner):
    """Removes whole packs or single pack versions from the dotnet root."""

    id = "dotnet_packs"
    name = ".NET Packs"
    description = "Workload and targeting packs under dotnet/packs, one folder per version."
    supports_keep_latest = True
    sort_order = 60
    prompt = "Select .NET packs or versions to remove"
    empty_message = "No .NET packs found"

    def scan(self, config: CleanerConfig) -> list[Item]:
        root = config.dotnet_packs_path
        if not root.is_dir():
            raise PathNotFound(root, f".NET packs directory not found at: {root}")
        return scan_packs(root)

    def select(self, items: list[Item], picker: Picker) -> list[Item] | None:
        flat: list[Item] = []
        for item in items:
            flat.append(item)
            if isinstance(item, Component):
                flat.extend(item.versions)
        return picker(flat, True, self.prompt)

    def stale(self, items: list[Item]) -> list[Entry]:
        stale: list[Entry] = []
        for item in items:
            if isinstance(item, Component):
                stale.extend(keep_latest_only(item.versions))
        return stale
