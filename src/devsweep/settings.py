"""Persistent user settings stored as JSON."""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from devsweep.utils import xdg_config_home

log = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

DEFAULTS: dict[str, Any] = {
    "android_sdk_path": "",
    "removal": {"use_shell": False},
}

_MISSING = object()


def default_settings_path() -> Path:
    return xdg_config_home() / "devsweep" / SETTINGS_FILENAME


def _lookup(tree: dict[str, Any], parts: list[str]) -> Any:
    node: Any = tree
    for part in parts:
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


class Settings:
    """User overrides layered over :data:`DEFAULTS`.

    Keys use dots for nesting (``removal.use_shell``).  A missing or
    corrupt file behaves like an empty one; the next :meth:`set`
    replaces it.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_settings_path()
        self._overrides: dict[str, Any] = self._read()

    @staticmethod
    def is_known(key: str) -> bool:
        return _lookup(DEFAULTS, key.split(".")) is not _MISSING

    @staticmethod
    def default_for(key: str) -> Any:
        value = _lookup(DEFAULTS, key.split("."))
        return None if value is _MISSING else copy.deepcopy(value)

    @staticmethod
    def type_error(key: str, value: Any) -> str | None:
        """Why *value* cannot be stored under *key*, or None if it fits."""
        expected = _lookup(DEFAULTS, key.split("."))
        if expected is _MISSING:
            return f"unknown setting '{key}'"
        # bool is a subclass of int; compare exact types
        if type(value) is not type(expected):
            return f"expected {type(expected).__name__}, got {type(value).__name__}"
        return None

    def _typed(self, key: str) -> Any:
        default = _lookup(DEFAULTS, key.split("."))
        value = self.get(key, default)
        if type(value) is not type(default):
            log.warning("Ignoring setting %s=%r: expected %s", key, value, type(default).__name__)
            return default
        return value

    def get(self, key: str, default: Any = None) -> Any:
        parts = key.split(".")
        for tree in (self._overrides, DEFAULTS):
            value = _lookup(tree, parts)
            if value is not _MISSING:
                return copy.deepcopy(value)
        return default

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* and write the file."""
        *parents, leaf = key.split(".")
        node = self._overrides
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[leaf] = value
        self._write()

    def unset(self, key: str) -> bool:
        """Drop an override so the default applies again.

        Returns False when *key* was not overridden.
        """
        *parents, leaf = key.split(".")
        node = _lookup(self._overrides, parents)
        if not isinstance(node, dict) or leaf not in node:
            return False
        del node[leaf]
        self._write()
        return True

    @property
    def android_sdk_path(self) -> Path | None:
        raw = self._typed("android_sdk_path")
        return Path(raw).expanduser() if raw else None

    @property
    def use_shell_remover(self) -> bool:
        return self._typed("removal.use_shell")

    def _read(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            log.warning("Could not read settings from %s: %s", self.path, e)
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            log.warning("Ignoring corrupt settings file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring settings file %s: expected a JSON object", self.path)
            return {}
        return data

    def _write(self) -> None:
        tmp = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._overrides, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self.path, e)
