"""Inventory item dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Storage layout an entry was discovered in."""

    FLAT = "flat"
    PACK_VERSION = "pack_version"
    ASSET_BUNDLE = "asset_bundle"


@dataclass(frozen=True, slots=True)
class Entry:
    """Single deletable folder discovered by a scan.

    Identity is the path. ``in_use`` is only set for asset bundles,
    where it reflects the usage manifest; other layouts leave it None.
    """

    label: str
    path: Path
    size_bytes: int
    kind: EntryKind = EntryKind.FLAT
    in_use: bool | None = None
    is_latest: bool = False

    @property
    def description(self) -> str:
        if self.in_use is not None:
            return "Currently in use" if self.in_use else "Not in use"
        return f"Size: {_human(self.size_bytes)}"


@dataclass(frozen=True, slots=True)
class Component:
    """Named group owning the version entries stored beneath it.

    Removing a component removes all of its versions in one operation.
    """

    name: str
    path: Path
    size_bytes: int
    versions: tuple[Entry, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        return self.name

    @property
    def description(self) -> str:
        return f"Size: {_human(self.size_bytes)}"


Item = Entry | Component


def _human(size_bytes: int) -> str:
    from devsweep.utils import bytes_to_human

    return bytes_to_human(size_bytes)
