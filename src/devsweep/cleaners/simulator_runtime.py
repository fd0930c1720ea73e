"""Cleaner for iOS Simulator runtime asset bundles."""

from __future__ import annotations

from devsweep.config import CleanerConfig
from devsweep.core.retention import unused_assets
from devsweep.core.scanner import scan_assets
from devsweep.models.cleaner import Cleaner, Confirm
from devsweep.models.entry import Entry, Item


class SimulatorRuntimeCleaner(Cleaner):
    """Removes downloaded simulator runtimes.

    Runtimes listed as installed in the MobileAsset manifest are in use;
    the picker shows unused ones first and asks again before an in-use
    runtime is deleted.
    """

    id = "simulator_runtime"
    name = "iOS Simulator Runtime"
    description = "Simulator runtime disk images under /System/Library/AssetsV2."
    platforms = ("darwin",)
    supports_keep_latest = True
    sort_order = 50
    prompt = "Select iOS Simulator Runtime assets to remove"
    empty_message = "No iOS Simulator Runtime assets found"

    def scan(self, config: CleanerConfig) -> list[Item]:
        return scan_assets(config.simulator_runtime_path, config.simulator_manifest_path)

    def confirm_removal(self, selection: list[Item], confirm: Confirm) -> bool:
        in_use = [i for i in selection if isinstance(i, Entry) and i.in_use]
        if not in_use:
            return True
        return confirm(
            f"You are about to remove {len(in_use)} in-use runtime(s). "
            "This might affect your ability to run iOS simulators. Continue?"
        )

    def stale(self, items: list[Item]) -> list[Entry]:
        # No reliable version order for opaque asset ids: usage decides.
        return unused_assets(i for i in items if isinstance(i, Entry))
