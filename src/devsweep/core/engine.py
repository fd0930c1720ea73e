"""Command orchestration: scan, present, remove."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from devsweep.config import CleanerConfig
from devsweep.core.errors import DevSweepError, NothingToClean, PathNotFound, ScanError
from devsweep.core.registry import CleanerRegistry
from devsweep.core.retention import explicit_selection
from devsweep.models.cleaner import Cleaner, Confirm, Picker
from devsweep.models.entry import Component
from devsweep.models.removal_result import CommandOutcome, OutcomeStatus, RemovalResult
from devsweep.models.scan_result import ScanResult

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]  # (cleaner_id, status_message)

KEEP_LATEST_ID = "keep_latest"


class SweepEngine:
    """Runs cleaners for one command invocation.

    Each command walks ``scanning -> presenting -> removing``; a
    dismissed picker or an empty inventory ends the command early
    without touching the filesystem.
    """

    def __init__(self, registry: CleanerRegistry, config: CleanerConfig) -> None:
        self.registry = registry
        self.config = config

    def run(
        self,
        cleaner_id: str,
        picker: Picker,
        confirm: Confirm,
        on_progress: ProgressCallback | None = None,
    ) -> CommandOutcome:
        """Run one cleaner's interactive command to completion."""
        cleaner = self.registry.get(cleaner_id)
        if cleaner is None:
            return CommandOutcome(cleaner_id, OutcomeStatus.ERROR, f"Unknown cleaner '{cleaner_id}'")

        reason = cleaner.unavailable_reason(self.config)
        if reason:
            return CommandOutcome(cleaner_id, OutcomeStatus.UNSUPPORTED, reason)

        if on_progress:
            on_progress(cleaner_id, "scanning")
        try:
            items = cleaner.scan(self.config)
        except NothingToClean as exc:
            return CommandOutcome(cleaner_id, OutcomeStatus.NOTHING, str(exc))
        except ScanError as exc:
            log.warning("Scan of '%s' failed: %s", cleaner_id, exc)
            return CommandOutcome(cleaner_id, OutcomeStatus.ERROR, str(exc))

        if not items:
            return CommandOutcome(cleaner_id, OutcomeStatus.NOTHING, cleaner.empty_message)

        selection = items
        if cleaner.interactive:
            if on_progress:
                on_progress(cleaner_id, "presenting")
            try:
                selection = explicit_selection(cleaner.select(items, picker))
            except NothingToClean as exc:
                return CommandOutcome(cleaner_id, OutcomeStatus.NOTHING, str(exc))
            if not selection:
                return CommandOutcome(cleaner_id, OutcomeStatus.CANCELLED, "Nothing selected.")
            if not cleaner.confirm_removal(selection, confirm):
                return CommandOutcome(cleaner_id, OutcomeStatus.CANCELLED, "Aborted.")

        if on_progress:
            on_progress(cleaner_id, "removing")
        try:
            result = cleaner.remove(selection, self.config)
        except DevSweepError as exc:
            return CommandOutcome(cleaner_id, OutcomeStatus.ERROR, str(exc))

        if on_progress:
            on_progress(cleaner_id, "done")
        return CommandOutcome(cleaner_id, OutcomeStatus.COMPLETED, cleaner.summary(result), result)

    def keep_latest(self, on_progress: ProgressCallback | None = None) -> list[RemovalResult]:
        """Remove everything but the newest version across all layouts.

        Missing roots are skipped silently.  A layout that fails to scan
        is reported through its result's ``error`` and does not stop the
        remaining layouts.
        """
        results: list[RemovalResult] = []
        for cleaner in self.registry.get_available(self.config):
            if not cleaner.supports_keep_latest:
                continue
            if on_progress:
                on_progress(cleaner.id, "scanning")
            try:
                items = cleaner.scan(self.config)
            except PathNotFound as exc:
                log.info("Skipping '%s': %s", cleaner.id, exc)
                continue
            except ScanError as exc:
                log.warning("Skipping '%s': %s", cleaner.id, exc)
                results.append(RemovalResult(cleaner_id=cleaner.id, error=str(exc)))
                if on_progress:
                    on_progress(cleaner.id, "error")
                continue

            stale = cleaner.stale(items)
            if stale:
                if on_progress:
                    on_progress(cleaner.id, "removing")
                results.append(cleaner.remove(stale, self.config))
            if on_progress:
                on_progress(cleaner.id, "done")
        return results

    def run_keep_latest(self, on_progress: ProgressCallback | None = None) -> CommandOutcome:
        """The keep-latest sweep as a single command outcome."""
        results = self.keep_latest(on_progress)
        total = RemovalResult.merge(results, cleaner_id=KEEP_LATEST_ID)
        message = f"{total.summary()}. Kept only the latest versions."
        errors = [f"{r.cleaner_id}: {r.error}" for r in results if r.error]
        if errors:
            message += " Skipped: " + "; ".join(errors)
        return CommandOutcome(KEEP_LATEST_ID, OutcomeStatus.COMPLETED, message, total)

    def scan(
        self,
        cleaner_ids: list[str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> list[ScanResult]:
        """Inventory the given (or all available) cleaners without deleting.

        Uses a small thread pool (at most 4 workers) so slow directory
        walks overlap.  Results come back in display order.
        """
        cleaners = self._resolve_cleaners(cleaner_ids)
        if not cleaners:
            return []

        results: dict[str, ScanResult] = {}
        lock = threading.Lock()

        def _scan_cleaner(cleaner: Cleaner) -> None:
            if on_progress:
                on_progress(cleaner.id, "scanning")
            try:
                items = cleaner.scan(self.config)
                result = ScanResult(
                    cleaner_id=cleaner.id,
                    cleaner_name=cleaner.name,
                    items=items,
                    total_bytes=sum(item.size_bytes for item in items),
                )
                status = "done"
            except ScanError as exc:
                result = ScanResult(cleaner_id=cleaner.id, cleaner_name=cleaner.name, error=str(exc))
                status = "error"
            except Exception:
                log.exception("Cleaner '%s' failed during scan", cleaner.id)
                if on_progress:
                    on_progress(cleaner.id, "error")
                return
            with lock:
                results[cleaner.id] = result
            if on_progress:
                on_progress(cleaner.id, status)

        max_workers = min(4, len(cleaners))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(_scan_cleaner, cleaner) for cleaner in cleaners]
            for future in futures:
                future.result()

        return [results[c.id] for c in cleaners if c.id in results]

    def _resolve_cleaners(self, cleaner_ids: list[str] | None) -> list[Cleaner]:
        """Resolve which cleaners to operate on."""
        if not cleaner_ids:
            return self.registry.get_available(self.config)

        resolved: list[Cleaner] = []
        for cid in cleaner_ids:
            cleaner = self.registry.get(cid)
            if cleaner is None:
                log.warning("Cleaner '%s' not found, skipping", cid)
            elif not cleaner.is_available(self.config):
                log.info("Cleaner '%s' not available on this system, skipping", cid)
            else:
                resolved.append(cleaner)
        return resolved


def count_entries(items: list) -> int:
    """Number of deletable entries, counting each component's versions."""
    return sum(len(item.versions) if isinstance(item, Component) else 1 for item in items)
