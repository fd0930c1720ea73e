"""devsweep data models."""

from devsweep.models.cleaner import Cleaner, Confirm, Picker
from devsweep.models.entry import Component, Entry, EntryKind, Item
from devsweep.models.removal_result import CommandOutcome, OutcomeStatus, RemovalFailure, RemovalResult
from devsweep.models.scan_result import ScanResult

__all__ = [
    "Cleaner",
    "CommandOutcome",
    "Component",
    "Confirm",
    "Entry",
    "EntryKind",
    "Item",
    "OutcomeStatus",
    "Picker",
    "RemovalFailure",
    "RemovalResult",
    "ScanResult",
]
