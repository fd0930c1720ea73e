"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from devsweep.config import CleanerConfig


def make_files(root: Path, files: dict[str, int]) -> Path:
    """Create files of the given byte sizes below *root*."""
    for rel, size in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
    return root


def write_manifest(path: Path, assets: dict[str, str]) -> Path:
    """Write a usage manifest mapping assetId -> state."""
    rows = "".join(f'  <asset assetId="{aid}" state="{state}"/>\n' for aid, state in assets.items())
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"<assets>\n{rows}</assets>\n", encoding="utf-8")
    return path


class FakePicker:
    """Picker that answers each call with the labels queued for it."""

    def __init__(self, *answers: list[str] | None) -> None:
        self._answers = list(answers)
        self.calls: list[tuple[list[str], bool, str]] = []

    def __call__(self, items: Sequence, multi_select: bool, prompt: str):
        self.calls.append(([i.label for i in items], multi_select, prompt))
        answer = self._answers.pop(0) if self._answers else None
        if answer is None:
            return None
        return [i for i in items if i.label in answer]


class FakeConfirm:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.messages: list[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answer


@pytest.fixture
def make_config(tmp_path):
    """Factory for a CleanerConfig rooted entirely in tmp_path."""

    def _make(**overrides) -> CleanerConfig:
        values = dict(
            platform="darwin",
            android_sdk_path=tmp_path / "android-sdk",
            dotnet_packs_path=tmp_path / "dotnet" / "packs",
            nuget_packages_path=tmp_path / ".nuget" / "packages",
            device_support_path=tmp_path / "iOS DeviceSupport",
            simulator_runtime_path=tmp_path / "runtimes",
            simulator_manifest_path=tmp_path / "runtimes" / "runtimes.xml",
            workspace_dirs=(tmp_path / "workspace",),
        )
        values.update(overrides)
        return CleanerConfig(**values)

    return _make


@pytest.fixture
def isolate_settings(tmp_path, monkeypatch):
    """Redirect the settings file to a temp directory."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "devsweep" / "settings.json"
