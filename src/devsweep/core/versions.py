"""Numeric-aware ordering of version labels."""

from __future__ import annotations

import re
from typing import Iterable, TypeVar

_RUNS = re.compile(r"\d+|\D+")

T = TypeVar("T")


def version_token(label: str) -> str:
    """Return the leading whitespace-delimited token of *label*.

    Labels may carry a trailing annotation such as ``"14.5 (2.1 GB)"``.
    """
    parts = label.split()
    return parts[0] if parts else ""


def version_key(label: str) -> tuple[tuple[int, int | str], ...]:
    """Sort key for a label: digit runs by value, other runs lexically.

    Digit runs sort before text runs at the same position, and a key
    that is a strict prefix of another sorts first.
    """
    key: list[tuple[int, int | str]] = []
    for run in _RUNS.findall(version_token(label)):
        if run.isdigit():
            key.append((0, int(run)))
        else:
            key.append((1, run))
    return tuple(key)


def compare_versions(a: str, b: str) -> int:
    """Compare two labels; returns -1, 0 or 1."""
    ka, kb = version_key(a), version_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def latest(items: Iterable[T], label=lambda item: item.label) -> T | None:
    """Return the item with the maximum label, or None for no items.

    Among equal maxima the first one in iteration order wins.
    """
    best: T | None = None
    for item in items:
        if best is None or compare_versions(label(item), label(best)) > 0:
            best = item
    return best
