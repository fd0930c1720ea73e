"""Per-invocation configuration resolved from settings and the environment."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from devsweep.settings import Settings

SIMULATOR_RUNTIME_DIR = Path("/System/Library/AssetsV2/com_apple_MobileAsset_iOSSimulatorRuntime")
SIMULATOR_MANIFEST_NAME = "com_apple_MobileAsset_iOSSimulatorRuntime.xml"


@dataclass(frozen=True, slots=True)
class CleanerConfig:
    """Every path and switch a cleaner needs, resolved once per command."""

    platform: str
    android_sdk_path: Path
    dotnet_packs_path: Path
    nuget_packages_path: Path
    device_support_path: Path
    simulator_runtime_path: Path
    simulator_manifest_path: Path
    workspace_dirs: tuple[Path, ...] = field(default_factory=tuple)
    use_shell_remover: bool = False


def default_android_sdk(platform: str, home: Path, env: Mapping[str, str]) -> Path:
    """Default SDK location used by the .NET MAUI tooling."""
    if platform == "win32":
        return Path(env.get("LOCALAPPDATA", home / "AppData" / "Local")) / "Android" / "android-sdk"
    if platform == "darwin":
        return home / "Library" / "Developer" / "Xamarin" / "android-sdk-macosx"
    return home / "Android" / "Sdk"


def default_dotnet_packs(platform: str, env: Mapping[str, str]) -> Path:
    if platform == "win32":
        return Path(env.get("ProgramFiles", r"C:\Program Files")) / "dotnet" / "packs"
    if platform == "darwin":
        return Path("/usr/local/share/dotnet/packs")
    return Path("/usr/share/dotnet/packs")


def resolve_config(
    settings: Settings | None = None,
    *,
    sdk_path: str | None = None,
    workspace: tuple[str, ...] | list[str] = (),
    platform: str | None = None,
    home: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CleanerConfig:
    """Build a :class:`CleanerConfig` from settings plus CLI overrides.

    An empty SDK path (option or setting) means auto-detect.
    """
    platform = platform or sys.platform
    home = home or Path.home()
    env = os.environ if env is None else env

    if sdk_path:
        android_sdk = Path(sdk_path).expanduser()
    elif settings and settings.android_sdk_path:
        android_sdk = settings.android_sdk_path
    else:
        android_sdk = default_android_sdk(platform, home, env)

    return CleanerConfig(
        platform=platform,
        android_sdk_path=android_sdk,
        dotnet_packs_path=default_dotnet_packs(platform, env),
        nuget_packages_path=home / ".nuget" / "packages",
        device_support_path=home / "Library" / "Developer" / "Xcode" / "iOS DeviceSupport",
        simulator_runtime_path=SIMULATOR_RUNTIME_DIR,
        simulator_manifest_path=SIMULATOR_RUNTIME_DIR / SIMULATOR_MANIFEST_NAME,
        workspace_dirs=tuple(Path(w).expanduser() for w in workspace),
        use_shell_remover=settings.use_shell_remover if settings else False,
    )
