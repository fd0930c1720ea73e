"""Cleaner for Android SDK components."""

from __future__ import annotations

from devsweep.config import CleanerConfig
from devsweep.core.errors import NothingToClean, PathNotFound
from devsweep.core.retention import keep_latest_only
from devsweep.core.scanner import scan_flat
from devsweep.models.cleaner import Cleaner, Picker
from devsweep.models.entry import Component, Entry, Item
from devsweep.utils import safe_dir_size

# (display name, directory under the SDK root)
SDK_COMPONENTS: tuple[tuple[str, str], ...] = (
    ("System Images", "system-images"),
    ("Platforms", "platforms"),
    ("Build Tools", "build-tools"),
    ("Command-line Tools", "cmdline-tools"),
)

# Components the keep-latest sweep prunes. Command-line tools are left alone.
_SWEPT = frozenset({"system-images", "platforms", "build-tools"})


class AndroidSdkCleaner(Cleaner):
    """Removes old platforms, system images and build tools."""

    id = "android_sdk"
    name = "Android SDK"
    description = "Versioned platforms, system images, build tools and command-line tools of the Android SDK."
    supports_keep_latest = True
    sort_order = 40
    prompt = "Select Android SDK component to clean"

    def scan(self, config: CleanerConfig) -> list[Item]:
        root = config.android_sdk_path
        if not root.is_dir():
            raise PathNotFound(
                root,
                f"Android SDK path not found at: {root}\n"
                "Please set the path in settings (android_sdk_path) or ensure the default path exists.",
            )
        components: list[Item] = []
        for name, dirname in SDK_COMPONENTS:
            path = root / dirname
            components.append(
                Component(
                    name=name,
                    path=path,
                    size_bytes=safe_dir_size(path),
                    versions=tuple(scan_flat(path)),
                )
            )
        return components

    def select(self, items: list[Item], picker: Picker) -> list[Item] | None:
        chosen = picker(items, False, self.prompt)
        if not chosen:
            return None
        component = chosen[0]
        if not component.path.is_dir():
            raise NothingToClean(f"No {component.name} found")
        if not component.versions:
            raise NothingToClean(f"No {component.name} versions found")
        return picker(list(component.versions), True, f"Select {component.name} versions to remove")

    def stale(self, items: list[Item]) -> list[Entry]:
        stale: list[Entry] = []
        for item in items:
            if isinstance(item, Component) and item.path.name in _SWEPT:
                stale.extend(keep_latest_only(item.versions))
        return stale
