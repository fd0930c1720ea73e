"""Removal and command outcome dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RemovalFailure:
    """One path that could not be removed."""

    path: Path
    message: str


@dataclass(slots=True)
class RemovalResult:
    """Aggregate result of one removal batch.

    ``error`` is set when the cleaner could not scan at all (e.g. an
    unreadable manifest during a keep-latest sweep).
    """

    cleaner_id: str = ""
    removed_count: int = 0
    freed_bytes: int = 0
    failures: list[RemovalFailure] = field(default_factory=list)
    error: str = ""

    @classmethod
    def merge(cls, results: list[RemovalResult], cleaner_id: str = "") -> RemovalResult:
        """Combine several batch results into one total."""
        merged = cls(cleaner_id=cleaner_id)
        for result in results:
            merged.removed_count += result.removed_count
            merged.freed_bytes += result.freed_bytes
            merged.failures.extend(result.failures)
        return merged

    def summary(self) -> str:
        from devsweep.utils import bytes_to_human

        text = f"Removed {self.removed_count} item(s), freeing {bytes_to_human(self.freed_bytes)}"
        if self.failures:
            text += f" ({len(self.failures)} failed)"
        return text


class OutcomeStatus(str, Enum):
    """Terminal state of one command invocation."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NOTHING = "nothing"
    UNSUPPORTED = "unsupported"
    ERROR = "error"


@dataclass(slots=True)
class CommandOutcome:
    """What a command reports back to the user."""

    cleaner_id: str
    status: OutcomeStatus
    message: str
    result: RemovalResult | None = None

    @property
    def ok(self) -> bool:
        return self.status is not OutcomeStatus.ERROR
