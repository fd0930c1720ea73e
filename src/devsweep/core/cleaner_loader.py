"""Discovery of the built-in cleaners."""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType

from devsweep.core.registry import CleanerRegistry
from devsweep.models.cleaner import Cleaner

log = logging.getLogger(__name__)


def _find_cleaners_in_module(module: ModuleType) -> list[type[Cleaner]]:
    """Find all concrete Cleaner subclasses defined in a module."""
    found: list[type[Cleaner]] = []
    for _, obj in inspect.getmembers(module, inspect.isclass):
        if issubclass(obj, Cleaner) and not inspect.isabstract(obj) and obj.__module__ == module.__name__:
            found.append(obj)
    return found


def _load_builtin_cleaners() -> list[type[Cleaner]]:
    """Load cleaners from the devsweep.cleaners package."""
    import devsweep.cleaners as cleaners_pkg

    found: list[type[Cleaner]] = []
    for _importer, modname, _ispkg in pkgutil.iter_modules(cleaners_pkg.__path__):
        try:
            module = importlib.import_module(f"devsweep.cleaners.{modname}")
            found.extend(_find_cleaners_in_module(module))
        except Exception:
            log.exception("Failed to load built-in cleaner module: %s", modname)
    return found


def load_cleaners(registry: CleanerRegistry) -> None:
    """Discover, instantiate and register every built-in cleaner."""
    for cls in _load_builtin_cleaners():
        try:
            registry.register(cls())
        except Exception:
            log.exception("Failed to instantiate cleaner: %s", cls.__name__)

    log.info("Loaded %d cleaners", len(registry))
