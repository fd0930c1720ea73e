"""Base cleaner interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Sequence

from devsweep.models.entry import Entry, Item
from devsweep.models.removal_result import RemovalResult

if TYPE_CHECKING:
    from devsweep.config import CleanerConfig

log = logging.getLogger(__name__)

# (items, multi_select, prompt) -> chosen items, or None when dismissed
Picker = Callable[[Sequence[Item], bool, str], "list[Item] | None"]
Confirm = Callable[[str], bool]

_PLATFORM_NAMES = {"darwin": "macOS", "win32": "Windows", "linux": "Linux"}


class Cleaner(ABC):
    """Base class for all cleaners.

    A cleaner knows one storage layout: how to inventory it, how the
    user picks from it, and which entries a keep-latest sweep removes.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier, e.g. 'dotnet_packs'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name, e.g. '.NET Packs'."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What this cleaner removes."""

    @property
    def platforms(self) -> tuple[str, ...]:
        """``sys.platform`` values this cleaner supports. Empty means all."""
        return ()

    @property
    def interactive(self) -> bool:
        """Whether the user picks from the scanned items."""
        return True

    @property
    def supports_keep_latest(self) -> bool:
        """Whether the keep-latest sweep covers this cleaner."""
        return False

    @property
    def sort_order(self) -> int:
        """Display order (lower = first). Default 50."""
        return 50

    @property
    def prompt(self) -> str:
        return f"Select {self.name} to remove"

    @property
    def empty_message(self) -> str:
        return f"No {self.name} found"

    def unavailable_reason(self, config: CleanerConfig) -> str | None:
        """Why this cleaner cannot run here, or None if supported."""
        if self.platforms and config.platform not in self.platforms:
            names = " or ".join(_PLATFORM_NAMES.get(p, p) for p in self.platforms)
            return f"This command is only available on {names}"
        return None

    def is_available(self, config: CleanerConfig) -> bool:
        return self.unavailable_reason(config) is None

    @abstractmethod
    def scan(self, config: CleanerConfig) -> list[Item]:
        """Inventory the layout. MUST NOT delete anything.

        Raises:
            ScanError: The layout cannot be inventoried.
        """

    def select(self, items: list[Item], picker: Picker) -> list[Item] | None:
        """Let the user choose what to remove. None means dismissed."""
        return picker(items, True, self.prompt)

    def confirm_removal(self, selection: list[Item], confirm: Confirm) -> bool:
        """Last chance to back out before anything is deleted."""
        return True

    def remove(self, selection: list[Item], config: CleanerConfig) -> RemovalResult:
        """Delete the selected items.

        The default removes every distinct selected path through the
        configured Remover.  Override for cleaners that delegate to an
        external command instead.
        """
        from devsweep.core.remover import remove_paths, remove_tree, shell_remove_tree
        from devsweep.core.retention import removal_paths

        remover = shell_remove_tree if config.use_shell_remover else remove_tree
        return remove_paths(removal_paths(selection), remover=remover, cleaner_id=self.id)

    def stale(self, items: list[Item]) -> list[Entry]:
        """Entries the keep-latest sweep removes. Default: none."""
        return []

    def summary(self, result: RemovalResult) -> str:
        """User-facing message for a completed removal."""
        return result.summary()
