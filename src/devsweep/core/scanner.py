"""Inventory scanning for the supported storage layouts.

Three layouts are understood:

* **flat** - every immediate subdirectory of a root is one entry;
* **pack/version** - every subdirectory is a component and its own
  subdirectories are that component's versions;
* **asset bundle** - subdirectories with a fixed suffix, tagged in-use
  from an XML usage manifest.

Scans never delete anything and never cache: scanning twice with no
filesystem change yields equal results.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from devsweep.core.manifest import load_installed_assets
from devsweep.core.versions import latest
from devsweep.models.entry import Component, Entry, EntryKind
from devsweep.utils import safe_dir_size

log = logging.getLogger(__name__)

ASSET_SUFFIX = ".asset"


def list_subdirs(root: Path) -> list[Path]:
    """Immediate subdirectories of *root*, sorted by name.

    A missing or unreadable root yields an empty list.
    """
    if not root.is_dir():
        return []
    try:
        children = sorted(root.iterdir())
    except OSError:
        log.debug("Cannot read %s", root)
        return []

    subdirs: list[Path] = []
    for child in children:
        try:
            if child.is_dir():
                subdirs.append(child)
        except OSError:
            log.debug("Cannot access: %s", child)
    return subdirs


def mark_latest(entries: list[Entry]) -> list[Entry]:
    """Return *entries* with ``is_latest`` set on the newest label only."""
    newest = latest(entries)
    return [dataclasses.replace(e, is_latest=e is newest) for e in entries]


def sort_by_size(items: list) -> list:
    """Largest first."""
    return sorted(items, key=lambda item: item.size_bytes, reverse=True)


def sort_assets(entries: list[Entry]) -> list[Entry]:
    """Not-in-use entries first, then largest first."""
    return sorted(entries, key=lambda e: (bool(e.in_use), -e.size_bytes))


def _entries_for(dirs: list[Path], kind: EntryKind) -> list[Entry]:
    return [Entry(label=d.name, path=d, size_bytes=safe_dir_size(d), kind=kind) for d in dirs]


def scan_flat(root: Path, kind: EntryKind = EntryKind.FLAT) -> list[Entry]:
    """One entry per immediate subdirectory of *root*, largest first."""
    entries = mark_latest(_entries_for(list_subdirs(root), kind))
    log.debug("Scanned %d entries in %s", len(entries), root)
    return sort_by_size(entries)


def scan_packs(root: Path) -> list[Component]:
    """One component per pack directory, each owning its version entries."""
    components: list[Component] = []
    for pack_dir in list_subdirs(root):
        versions = mark_latest(_entries_for(list_subdirs(pack_dir), EntryKind.PACK_VERSION))
        components.append(
            Component(
                name=pack_dir.name,
                path=pack_dir,
                size_bytes=safe_dir_size(pack_dir),
                versions=tuple(sort_by_size(versions)),
            )
        )
    log.debug("Scanned %d packs in %s", len(components), root)
    return sort_by_size(components)


def scan_assets(root: Path, manifest_path: Path, suffix: str = ASSET_SUFFIX) -> list[Entry]:
    """Asset-bundle entries tagged in-use from the manifest.

    Raises:
        ManifestUnavailable: The manifest is missing or malformed.
    """
    if not root.is_dir():
        return []

    installed = load_installed_assets(manifest_path)
    entries = [
        Entry(
            label=d.name,
            path=d,
            size_bytes=safe_dir_size(d),
            kind=EntryKind.ASSET_BUNDLE,
            in_use=d.name.removesuffix(suffix) in installed,
        )
        for d in list_subdirs(root)
        if d.name.endswith(suffix)
    ]
    return sort_assets(entries)
