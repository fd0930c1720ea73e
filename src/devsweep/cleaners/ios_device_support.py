"""Cleaner for Xcode iOS DeviceSupport folders."""

from __future__ import annotations

from devsweep.config import CleanerConfig
from devsweep.core.retention import keep_latest_only
from devsweep.core.scanner import scan_flat
from devsweep.models.cleaner import Cleaner
from devsweep.models.entry import Entry, Item


class IosDeviceSupportCleaner(Cleaner):
    """Removes symbol bundles Xcode copies for every connected iOS version."""

    id = "ios_device_support"
    name = "iOS Device Support"
    description = "Debug symbols Xcode extracts per iOS version of each connected device."
    platforms = ("darwin",)
    supports_keep_latest = True
    sort_order = 30
    prompt = "Select iOS Device Support folders to remove"
    empty_message = "No iOS Device Support folders found"

    def scan(self, config: CleanerConfig) -> list[Item]:
        return scan_flat(config.device_support_path)

    def stale(self, items: list[Item]) -> list[Entry]:
        return keep_latest_only([i for i in items if isinstance(i, Entry)])