"""
Usage snapshot models.

A snapshot is the immutable result of one estimation pass over all active
plugins. Snapshots are replaced wholesale; they are never patched in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class UsageEntry:
    """Estimated units for one plugin in the latest pass."""

    name: str
    units: int


@dataclass(frozen=True, slots=True)
class UsageSnapshot:
    """Ranked usage entries (descending by units) plus the pass total.

    computed_at is the trigger timestamp of the pass, or None for the empty
    snapshot published before the first pass.
    """

    entries: tuple[UsageEntry, ...]
    total_units: int
    computed_at: float | None = None

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def __len__(self) -> int:
        return len(self.entries)


EMPTY_SNAPSHOT = UsageSnapshot(entries=(), total_units=0, computed_at=None)


def rank_usage(
    entries: Iterable[UsageEntry],
    *,
    computed_at: float | None,
) -> UsageSnapshot:
    """Build a snapshot from entries in discovery order.

    Sorting is stable, so entries with equal units keep their discovery
    order; there is no secondary key.
    """
    ordered = sorted(entries, key=lambda entry: entry.units, reverse=True)
    total = sum(entry.units for entry in ordered)
    return UsageSnapshot(
        entries=tuple(ordered),
        total_units=total,
        computed_at=computed_at,
    )
