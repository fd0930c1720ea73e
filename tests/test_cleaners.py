"""Tests for the built-in cleaners using fake directory trees."""

from __future__ import annotations

import subprocess

import pytest

from conftest import FakeConfirm, FakePicker, make_files, write_manifest
from devsweep.cleaners import nuget_cache as nuget_mod
from devsweep.cleaners.android_sdk import AndroidSdkCleaner
from devsweep.cleaners.build_outputs import BuildOutputsCleaner
from devsweep.cleaners.dotnet_packs import DotnetPacksCleaner
from devsweep.cleaners.ios_device_support import IosDeviceSupportCleaner
from devsweep.cleaners.nuget_cache import NugetCacheCleaner
from devsweep.cleaners.simulator_runtime import SimulatorRuntimeCleaner
from devsweep.core.errors import CommandFailed, ManifestUnavailable, NothingToClean, PathNotFound, ScanError
from devsweep.models.entry import Component, Entry


class TestPlatformRestriction:
    @pytest.mark.parametrize("cls", [IosDeviceSupportCleaner, SimulatorRuntimeCleaner])
    def test_macos_only(self, cls, make_config):
        cleaner = cls()
        assert cleaner.is_available(make_config(platform="darwin"))
        assert cleaner.unavailable_reason(make_config(platform="linux")) == "This command is only available on macOS"

    @pytest.mark.parametrize("cls", [AndroidSdkCleaner, DotnetPacksCleaner, BuildOutputsCleaner, NugetCacheCleaner])
    def test_cross_platform(self, cls, make_config):
        assert cls().is_available(make_config(platform="win32"))


class TestIosDeviceSupport:
    @pytest.fixture
    def config(self, make_config, tmp_path):
        make_files(
            tmp_path / "iOS DeviceSupport",
            {
                "16.4 (20E247)/Symbols/a": 100,
                "17.2 (21C62)/Symbols/a": 300,
                "17.0.3 (21A360)/Symbols/a": 200,
            },
        )
        return make_config()

    def test_scan(self, config):
        items = IosDeviceSupportCleaner().scan(config)
        assert [i.label for i in items] == ["17.2 (21C62)", "17.0.3 (21A360)", "16.4 (20E247)"]

    def test_stale_keeps_newest(self, config):
        cleaner = IosDeviceSupportCleaner()
        stale = cleaner.stale(cleaner.scan(config))
        assert sorted(e.label for e in stale) == ["16.4 (20E247)", "17.0.3 (21A360)"]

    def test_missing_root_scans_empty(self, make_config):
        assert IosDeviceSupportCleaner().scan(make_config()) == []


class TestAndroidSdk:
    @pytest.fixture
    def config(self, make_config, tmp_path):
        make_files(
            tmp_path / "android-sdk",
            {
                "platforms/android-30/android.jar": 100,
                "platforms/android-33/android.jar": 100,
                "platforms/android-31/android.jar": 100,
                "build-tools/33.0.2/aapt": 50,
                "build-tools/34.0.0/aapt": 50,
                "cmdline-tools/9.0/bin/sdkmanager": 10,
                "cmdline-tools/latest/bin/sdkmanager": 10,
            },
        )
        return make_config()

    def test_scan_lists_all_components(self, config):
        items = AndroidSdkCleaner().scan(config)
        assert [c.name for c in items] == ["System Images", "Platforms", "Build Tools", "Command-line Tools"]
        by_name = {c.name: c for c in items}
        assert by_name["Platforms"].size_bytes == 300
        assert by_name["System Images"].size_bytes == 0
        assert by_name["System Images"].versions == ()

    def test_missing_root_is_path_not_found(self, make_config, tmp_path):
        with pytest.raises(PathNotFound, match="android_sdk_path"):
            AndroidSdkCleaner().scan(make_config(android_sdk_path=tmp_path / "nowhere"))

    def test_two_step_selection(self, config):
        cleaner = AndroidSdkCleaner()
        picker = FakePicker(["Platforms"], ["android-30", "android-31"])
        selection = cleaner.select(cleaner.scan(config), picker)

        assert [e.label for e in selection] == ["android-30", "android-31"]
        assert picker.calls[0][1] is False
        assert picker.calls[1][1] is True
        assert picker.calls[1][2] == "Select Platforms versions to remove"

    def test_dismissed_component_picker(self, config):
        cleaner = AndroidSdkCleaner()
        assert cleaner.select(cleaner.scan(config), FakePicker(None)) is None

    def test_component_missing(self, config):
        cleaner = AndroidSdkCleaner()
        with pytest.raises(NothingToClean, match="No System Images found"):
            cleaner.select(cleaner.scan(config), FakePicker(["System Images"]))

    def test_component_without_versions(self, config, tmp_path):
        (tmp_path / "android-sdk" / "system-images").mkdir()
        cleaner = AndroidSdkCleaner()
        with pytest.raises(NothingToClean, match="No System Images versions found"):
            cleaner.select(cleaner.scan(config), FakePicker(["System Images"]))

    def test_stale_skips_cmdline_tools(self, config):
        cleaner = AndroidSdkCleaner()
        stale = {e.label for e in cleaner.stale(cleaner.scan(config))}
        assert stale == {"android-30", "android-31", "33.0.2"}


class TestSimulatorRuntime:
    @pytest.fixture
    def config(self, make_config, tmp_path):
        root = make_files(tmp_path / "runtimes", {"A.asset/img.dmg": 100, "B.asset/img.dmg": 200})
        write_manifest(root / "runtimes.xml", {"A": "installed"})
        return make_config()

    def test_scan_tags_usage(self, config):
        items = SimulatorRuntimeCleaner().scan(config)
        assert [(e.label, e.in_use) for e in items] == [("B.asset", False), ("A.asset", True)]

    def test_stale_is_unused(self, config):
        cleaner = SimulatorRuntimeCleaner()
        assert [e.label for e in cleaner.stale(cleaner.scan(config))] == ["B.asset"]

    def test_confirms_in_use_removal(self, config):
        cleaner = SimulatorRuntimeCleaner()
        items = cleaner.scan(config)
        confirm = FakeConfirm(answer=False)
        assert cleaner.confirm_removal(items, confirm) is False
        assert "1 in-use runtime(s)" in confirm.messages[0]

    def test_no_confirmation_for_unused(self, config):
        cleaner = SimulatorRuntimeCleaner()
        unused = [e for e in cleaner.scan(config) if not e.in_use]
        confirm = FakeConfirm(answer=False)
        assert cleaner.confirm_removal(unused, confirm) is True
        assert confirm.messages == []

    def test_missing_manifest(self, config, tmp_path):
        (tmp_path / "runtimes" / "runtimes.xml").unlink()
        with pytest.raises(ManifestUnavailable):
            SimulatorRuntimeCleaner().scan(config)


class TestDotnetPacks:
    @pytest.fixture
    def config(self, make_config, tmp_path):
        make_files(
            tmp_path / "dotnet" / "packs",
            {
                "Microsoft.Maui.Sdk/8.0.3/a": 100,
                "Microsoft.Maui.Sdk/8.0.14/a": 100,
                "Microsoft.iOS.Sdk/17.2.8022/a": 500,
            },
        )
        return make_config()

    def test_missing_root(self, make_config, tmp_path):
        with pytest.raises(PathNotFound, match=".NET packs directory not found"):
            DotnetPacksCleaner().scan(make_config(dotnet_packs_path=tmp_path / "none"))

    def test_picker_shows_packs_then_versions(self, config):
        cleaner = DotnetPacksCleaner()
        picker = FakePicker(None)
        cleaner.select(cleaner.scan(config), picker)
        labels = picker.calls[0][0]
        assert labels[0] == "Microsoft.iOS.Sdk"
        assert labels[1] == "17.2.8022"
        assert labels[2] == "Microsoft.Maui.Sdk"
        assert set(labels[3:]) == {"8.0.3", "8.0.14"}

    def test_stale_per_pack(self, config):
        cleaner = DotnetPacksCleaner()
        stale = cleaner.stale(cleaner.scan(config))
        assert [e.label for e in stale] == ["8.0.3"]

    def test_pack_and_own_version_counted_once(self, config, tmp_path):
        cleaner = DotnetPacksCleaner()
        items = cleaner.scan(config)
        maui = next(i for i in items if isinstance(i, Component) and i.name == "Microsoft.Maui.Sdk")
        result = cleaner.remove([maui, maui.versions[0]], config)
        assert result.removed_count == 1
        assert result.freed_bytes == 200
        assert not (tmp_path / "dotnet" / "packs" / "Microsoft.Maui.Sdk").exists()


class TestBuildOutputs:
    @pytest.fixture
    def config(self, make_config, tmp_path):
        make_files(
            tmp_path / "workspace",
            {
                "bin/Debug/app.dll": 100,
                "App/App.csproj": 1,
                "App/bin/Debug/app.dll": 400,
                "App/obj/project.assets.json": 50,
                "Lib/Lib.fsproj": 1,
                "Lib/obj/x": 20,
                "Docs/bin/not-a-project": 999,
                "App/bin/Debug/Nested/Nested.csproj": 1,
            },
        )
        return make_config()

    def test_scan_finds_project_outputs(self, config):
        labels = {e.label for e in BuildOutputsCleaner().scan(config)}
        assert labels == {"bin", "App/bin", "App/obj", "Lib/obj"}

    def test_not_interactive(self):
        assert BuildOutputsCleaner().interactive is False

    def test_no_workspace(self, make_config):
        with pytest.raises(ScanError, match="No workspace folder is open"):
            BuildOutputsCleaner().scan(make_config(workspace_dirs=()))

    def test_missing_workspace_folder_is_skipped(self, make_config, tmp_path):
        assert BuildOutputsCleaner().scan(make_config(workspace_dirs=(tmp_path / "gone",))) == []


class TestNugetCache:
    @pytest.fixture
    def config(self, make_config, tmp_path):
        make_files(tmp_path / ".nuget" / "packages", {"newtonsoft.json/13.0.3/lib.dll": 700})
        return make_config()

    def test_scan_measures_packages(self, config):
        [entry] = NugetCacheCleaner().scan(config)
        assert isinstance(entry, Entry)
        assert entry.size_bytes == 700

    def test_clear_reports_size_measured_before(self, config, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            return subprocess.CompletedProcess(cmd, 0, "Clearing NuGet global packages folder", "")

        monkeypatch.setattr(nuget_mod, "has_command", lambda name: True)
        monkeypatch.setattr(nuget_mod.subprocess, "run", fake_run)

        cleaner = NugetCacheCleaner()
        result = cleaner.remove(cleaner.scan(config), config)

        assert calls == [["dotnet", "nuget", "locals", "all", "--clear"]]
        assert result.freed_bytes == 700
        assert cleaner.summary(result) == "NuGet cache cleared successfully, freeing 700 Bytes"

    def test_stderr_is_failure(self, config, monkeypatch):
        monkeypatch.setattr(nuget_mod, "has_command", lambda name: True)
        monkeypatch.setattr(
            nuget_mod.subprocess,
            "run",
            lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, "", "error: locked file"),
        )
        cleaner = NugetCacheCleaner()
        with pytest.raises(CommandFailed, match="Error clearing NuGet cache: error: locked file"):
            cleaner.remove(cleaner.scan(config), config)

    def test_missing_dotnet(self, config, monkeypatch):
        monkeypatch.setattr(nuget_mod, "has_command", lambda name: False)
        cleaner = NugetCacheCleaner()
        with pytest.raises(CommandFailed, match="not found"):
            cleaner.remove(cleaner.scan(config), config)
