"""Central cleaner registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from devsweep.models.cleaner import Cleaner

if TYPE_CHECKING:
    from devsweep.config import CleanerConfig

log = logging.getLogger(__name__)


class CleanerRegistry:
    """Stores and retrieves registered cleaners."""

    def __init__(self) -> None:
        self._cleaners: dict[str, Cleaner] = {}

    def register(self, cleaner: Cleaner) -> None:
        """Register a cleaner instance."""
        if cleaner.id in self._cleaners:
            log.warning("Cleaner '%s' already registered, skipping duplicate", cleaner.id)
            return
        self._cleaners[cleaner.id] = cleaner
        log.debug("Registered cleaner: %s (%s)", cleaner.id, cleaner.name)

    def get(self, cleaner_id: str) -> Cleaner | None:
        """Get a cleaner by its ID."""
        return self._cleaners.get(cleaner_id)

    def get_all(self) -> list[Cleaner]:
        """All registered cleaners in display order."""
        return sorted(self._cleaners.values(), key=lambda c: (c.sort_order, c.id))

    def get_available(self, config: CleanerConfig) -> list[Cleaner]:
        """Cleaners that can run on the configured platform."""
        available = []
        for cleaner in self.get_all():
            try:
                if cleaner.is_available(config):
                    available.append(cleaner)
            except Exception:
                log.exception("Error checking availability for cleaner '%s'", cleaner.id)
        return available

    def __len__(self) -> int:
        return len(self._cleaners)

    def __iter__(self) -> Iterator[Cleaner]:
        return iter(self.get_all())

    def __contains__(self, cleaner_id: str) -> bool:
        return cleaner_id in self._cleaners
