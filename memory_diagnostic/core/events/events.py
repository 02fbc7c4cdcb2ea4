"""
Domain event models.

These events represent immutable facts observed by the update coordinator.
They are consumed by loggers, recorders, and monitoring sinks.
"""
from __future__ import annotations

from dataclasses import dataclass

from memory_diagnostic.core.domain.usage import UsageEntry


@dataclass(frozen=True, slots=True)
class SnapshotPublishedEvent:
    computed_at: float

    plugin_count: int
    total_units: int

    entries: tuple[UsageEntry, ...]


@dataclass(frozen=True, slots=True)
class RefreshFailedEvent:
    attempted_at: float

    error_type: str
    error: str


@dataclass(frozen=True, slots=True)
class SnapshotClearedEvent:
    previous_total_units: int
