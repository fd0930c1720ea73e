"""Scan result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field

from devsweep.models.entry import Item


@dataclass(slots=True)
class ScanResult:
    """Inventory of one cleaner, for listing without deleting."""

    cleaner_id: str
    cleaner_name: str
    items: list[Item] = field(default_factory=list)
    total_bytes: int = 0
    error: str = ""
