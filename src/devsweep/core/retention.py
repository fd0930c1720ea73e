"""Retention policies: which entries a cleanup pass removes."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from devsweep.core.versions import latest
from devsweep.models.entry import Entry, Item


def explicit_selection(selected: Sequence[Item] | None) -> list[Item]:
    """Whatever the user picked is the removal set."""
    return list(selected or ())


def keep_latest_only(group: Sequence[Entry]) -> list[Entry]:
    """Every entry of a sibling group except the newest one.

    Groups of zero or one entries remove nothing.
    """
    if len(group) <= 1:
        return []
    newest = latest(group)
    return [e for e in group if e is not newest]


def unused_assets(entries: Iterable[Entry]) -> list[Entry]:
    """Asset bundles the usage manifest does not list as installed."""
    return [e for e in entries if not e.in_use]


def removal_paths(items: Iterable[Item]) -> list[Path]:
    """Distinct paths to remove, in selection order.

    A path nested under another selected path is dropped, so a version
    selected together with its own pack is neither removed nor counted
    twice.
    """
    paths: list[Path] = []
    for item in items:
        if item.path not in paths:
            paths.append(item.path)
    return [p for p in paths if not any(other != p and p.is_relative_to(other) for other in paths)]
