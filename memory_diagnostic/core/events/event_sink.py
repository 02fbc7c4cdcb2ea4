"""
Event sink interface.

Sinks consume the coordinator's domain events: a published snapshot, a
failed refresh, or a cleared snapshot.
"""
from __future__ import annotations

from typing import Protocol, Union

from memory_diagnostic.core.events.events import (
    RefreshFailedEvent,
    SnapshotClearedEvent,
    SnapshotPublishedEvent,
)

DomainEvent = Union[SnapshotPublishedEvent, RefreshFailedEvent, SnapshotClearedEvent]


class EventSink(Protocol):
    def on_event(self, event: DomainEvent) -> None:
        """Consume a domain event. Exceptions are logged by the bus."""
