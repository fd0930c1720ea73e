"""CLI interface for devsweep."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Sequence

import click

from devsweep.config import resolve_config
from devsweep.core.cleaner_loader import load_cleaners
from devsweep.core.engine import SweepEngine, count_entries
from devsweep.core.registry import CleanerRegistry
from devsweep.models.entry import Component, Entry, EntryKind, Item
from devsweep.models.removal_result import CommandOutcome, OutcomeStatus
from devsweep.settings import Settings
from devsweep.utils import bytes_to_human


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_engine(ctx: click.Context) -> SweepEngine:
    opts = ctx.find_root().obj or {}
    settings = Settings()
    workspace = opts.get("workspace") or (str(Path.cwd()),)
    config = resolve_config(settings, sdk_path=opts.get("sdk_path"), workspace=workspace)
    registry = CleanerRegistry()
    load_cleaners(registry)
    return SweepEngine(registry, config)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option("--sdk-path", default=None, help="Android SDK root (overrides the android_sdk_path setting)")
@click.option(
    "-w", "--workspace", multiple=True, type=click.Path(file_okay=False),
    help="Workspace folder for build outputs (repeatable, default: current directory)",
)
@click.pass_context
def main(ctx: click.Context, verbose: int, sdk_path: str | None, workspace: tuple[str, ...]) -> None:
    """devsweep — reclaim disk space from .NET MAUI / mobile development leftovers."""
    _setup_logging(verbose)
    ctx.obj = {"sdk_path": sdk_path, "workspace": workspace}


# ── interaction ──────────────────────────────────────────────────────────

def _format_item(item: Item) -> str:
    indent = "    " if isinstance(item, Entry) and item.kind is EntryKind.PACK_VERSION else ""
    detail = item.description
    if isinstance(item, Entry) and item.in_use is not None:
        detail = f"{detail}, {bytes_to_human(item.size_bytes)}"
    return f"{indent}{item.label:40s} — {detail}"


def _parse_selection(raw: str, count: int) -> list[int]:
    """Turn ``"1,3-5"`` or ``"all"`` into zero-based indexes."""
    if raw.strip().lower() == "all":
        return list(range(count))
    indexes: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        start, _, end = part.partition("-")
        if not start.isdigit() or (end and not end.isdigit()):
            continue
        first, last = int(start), int(end or start)
        for n in range(first, last + 1):
            if 1 <= n <= count and n - 1 not in indexes:
                indexes.append(n - 1)
    return indexes


def click_picker(items: Sequence[Item], multi_select: bool, prompt: str) -> list[Item] | None:
    """Numbered terminal picker. An empty answer dismisses it."""
    click.echo(f"\n{prompt}:\n")
    for i, item in enumerate(items, 1):
        click.echo(f"  [{i}] {_format_item(item)}")
    click.echo()
    hint = "numbers or ranges, comma-separated, or 'all'" if multi_select else "one number"
    raw = click.prompt(f"Selection ({hint}; empty to cancel)", default="", show_default=False)
    if not raw.strip():
        return None
    indexes = _parse_selection(raw, len(items))
    if not multi_select:
        indexes = indexes[:1]
    return [items[i] for i in indexes] or None


def click_confirm(message: str) -> bool:
    return click.confirm(message, default=False)


def _report(outcome: CommandOutcome) -> None:
    match outcome.status:
        case OutcomeStatus.COMPLETED:
            click.echo(f"\n{click.style('✓', fg='green')} {outcome.message}")
        case OutcomeStatus.ERROR:
            click.echo(f"{click.style('✗', fg='red')} {outcome.message}", err=True)
        case _:
            click.echo(outcome.message)

    if outcome.result and outcome.result.failures:
        for failure in outcome.result.failures:
            click.echo(f"  {click.style('!', fg='yellow')} {failure.path}: {failure.message}", err=True)

    if not outcome.ok:
        sys.exit(1)


def _run_cleaner(ctx: click.Context, cleaner_id: str) -> None:
    engine = _build_engine(ctx)
    _report(engine.run(cleaner_id, click_picker, click_confirm))


# ── cleaning commands ────────────────────────────────────────────────────

@main.command("build-outputs")
@click.pass_context
def build_outputs(ctx: click.Context) -> None:
    """Remove bin/ and obj/ folders of the workspace projects."""
    _run_cleaner(ctx, "build_outputs")


@main.command("nuget-cache")
@click.pass_context
def nuget_cache(ctx: click.Context) -> None:
    """Clear all local NuGet caches (dotnet nuget locals all --clear)."""
    _run_cleaner(ctx, "nuget_cache")


@main.command("ios-device-support")
@click.pass_context
def ios_device_support(ctx: click.Context) -> None:
    """Pick iOS DeviceSupport folders to remove (macOS)."""
    _run_cleaner(ctx, "ios_device_support")


@main.command("android-sdk")
@click.pass_context
def android_sdk(ctx: click.Context) -> None:
    """Pick an Android SDK component, then the versions to remove."""
    _run_cleaner(ctx, "android_sdk")


@main.command("simulator-runtime")
@click.pass_context
def simulator_runtime(ctx: click.Context) -> None:
    """Pick iOS Simulator runtime assets to remove (macOS)."""
    _run_cleaner(ctx, "simulator_runtime")


@main.command("dotnet-packs")
@click.pass_context
def dotnet_packs(ctx: click.Context) -> None:
    """Pick .NET packs or single pack versions to remove."""
    _run_cleaner(ctx, "dotnet_packs")


@main.command("keep-latest")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def keep_latest(ctx: click.Context, yes: bool) -> None:
    """Remove every version except the newest one, across all layouts."""
    if not yes and not click.confirm(
        "Remove all but the latest version of device support, SDK components, "
        ".NET packs and unused simulator runtimes?",
        default=False,
    ):
        click.echo("Aborted.")
        return

    engine = _build_engine(ctx)

    def on_progress(cleaner_id: str, status: str) -> None:
        if status == "error":
            click.echo(f"  {click.style('✗', fg='red')} {cleaner_id:25s} — could not scan", err=True)

    _report(engine.run_keep_latest(on_progress=on_progress))


# ── inventory ────────────────────────────────────────────────────────────

@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """List cleaners and whether they run on this system."""
    engine = _build_engine(ctx)
    cleaners = list(engine.registry)

    if as_json:
        data = [
            {
                "id": c.id,
                "name": c.name,
                "description": c.description,
                "interactive": c.interactive,
                "keep_latest": c.supports_keep_latest,
                "unavailable_reason": c.unavailable_reason(engine.config),
            }
            for c in cleaners
        ]
        click.echo(json.dumps(data, indent=2))
        return

    for cleaner in cleaners:
        reason = cleaner.unavailable_reason(engine.config)
        status = click.style("available", fg="green") if reason is None else click.style(reason, fg="bright_black")
        sweep_tag = click.style(" [keep-latest]", fg="blue") if cleaner.supports_keep_latest else ""
        click.echo(f"  {click.style(cleaner.id, fg='cyan', bold=True):30s}  {cleaner.name}{sweep_tag}")
        click.echo(f"    {cleaner.description}")
        click.echo(f"    {status}")


def _item_json(item: Item) -> dict:
    data = {"label": item.label, "path": str(item.path), "size_bytes": item.size_bytes}
    if isinstance(item, Component):
        data["versions"] = [_item_json(v) for v in item.versions]
    else:
        data["is_latest"] = item.is_latest
        if item.in_use is not None:
            data["in_use"] = item.in_use
    return data


@main.command()
@click.argument("cleaner_ids", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def scan(ctx: click.Context, cleaner_ids: tuple[str, ...], as_json: bool) -> None:
    """Show what each cleaner would offer (preview only, never deletes)."""
    engine = _build_engine(ctx)
    results = engine.scan(list(cleaner_ids) or None)

    if as_json:
        data = [
            {
                "cleaner_id": r.cleaner_id,
                "cleaner_name": r.cleaner_name,
                "total_bytes": r.total_bytes,
                "error": r.error,
                "items": [_item_json(i) for i in r.items],
            }
            for r in results
        ]
        click.echo(json.dumps(data, indent=2))
        return

    for result in results:
        if result.error:
            click.echo(f"  {click.style('✗', fg='red')} {result.cleaner_name:25s} — {result.error}")
        elif result.total_bytes > 0:
            click.echo(
                f"  {click.style('✓', fg='green')} {result.cleaner_name:25s} — "
                f"{click.style(bytes_to_human(result.total_bytes), fg='green', bold=True)} "
                f"({count_entries(result.items):,} items)"
            )
        else:
            click.echo(f"  {click.style('·', fg='bright_black')} {result.cleaner_name:25s} — nothing to clean")

    total = sum(r.total_bytes for r in results)
    click.echo(f"\nTotal reclaimable: {click.style(bytes_to_human(total), fg='green', bold=True)}\n")


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Read and write persistent settings."""


@config.command("get")
@click.argument("key")
def config_get(key: str) -> None:
    """Print a setting, e.g. android_sdk_path."""
    if not Settings.is_known(key):
        raise click.BadParameter(f"unknown setting '{key}'", param_hint="KEY")
    value = Settings().get(key)
    click.echo(json.dumps(value))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set a setting. Non-text settings take a JSON value, e.g. true."""
    if not Settings.is_known(key):
        raise click.BadParameter(f"unknown setting '{key}'", param_hint="KEY")
    if isinstance(Settings.default_for(key), str):
        parsed: object = value
    else:
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            parsed = value
    problem = Settings.type_error(key, parsed)
    if problem:
        raise click.BadParameter(f"{problem} for '{key}'", param_hint="VALUE")
    Settings().set(key, parsed)
    click.echo(f"{key} = {json.dumps(parsed)}")


@config.command("unset")
@click.argument("key")
def config_unset(key: str) -> None:
    """Restore the default value of a setting."""
    if Settings().unset(key):
        click.echo(f"{key} reset to default")
    else:
        click.echo(f"{key} was not set")


@config.command("path")
def config_path() -> None:
    """Print the settings file location."""
    click.echo(str(Settings().path))
