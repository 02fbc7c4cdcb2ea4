"""Update coordinator: one estimation pass per permitted trigger."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from memory_diagnostic.core.domain.usage import EMPTY_SNAPSHOT, UsageEntry, UsageSnapshot, rank_usage
from memory_diagnostic.core.estimator.graph_estimator import GraphEstimator
from memory_diagnostic.core.events.events import (
    RefreshFailedEvent,
    SnapshotClearedEvent,
    SnapshotPublishedEvent,
)
from memory_diagnostic.core.events.sinks.null_event_bus import NullEventBus

if TYPE_CHECKING:
    from memory_diagnostic.core.events.event_bus import EventBus
    from memory_diagnostic.core.ports.component_registry import ComponentRegistry
    from memory_diagnostic.core.ports.config_provider import ConfigProvider

LOGGER = logging.getLogger(__name__)

MIN_REFRESH_INTERVAL_SECONDS = 1


class UpdateCoordinator:
    """Runs estimation passes and publishes ranked usage snapshots.

    Invariants:
    - At most one pass per refresh interval via refresh(); the interval is
      clamped to at least one second whatever the provider returns.
    - A published snapshot is always complete. Readers see either the
      previous snapshot or the new one.
    - A failed registry enumeration leaves the previous snapshot published
      and does not advance the refresh timer.
    """

    def __init__(
        self,
        *,
        registry: ComponentRegistry,
        config: ConfigProvider,
        estimator: GraphEstimator | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._registry = registry
        self._config = config
        self._estimator = estimator if estimator is not None else GraphEstimator()
        self._event_bus = event_bus if event_bus is not None else NullEventBus()

        self._snapshot: UsageSnapshot = EMPTY_SNAPSHOT
        self._snapshot_lock = threading.Lock()

        # Serializes passes so overlapping triggers cannot interleave timer updates.
        self._pass_lock = threading.Lock()
        self._next_refresh_at: float | None = None

    @property
    def next_refresh_at(self) -> float | None:
        return self._next_refresh_at

    def refresh_interval_seconds(self) -> int:
        """Configured refresh interval, clamped to the minimum."""
        return max(MIN_REFRESH_INTERVAL_SECONDS, int(self._config.min_refresh_interval_seconds()))

    def latest_snapshot(self) -> UsageSnapshot:
        """Return the most recently published snapshot without waiting for a pass."""
        with self._snapshot_lock:
            return self._snapshot

    def refresh(self, now: float) -> UsageSnapshot:
        """Run a pass if the refresh interval has elapsed.

        Returns the current snapshot unchanged when called too early.
        """
        with self._pass_lock:
            if self._next_refresh_at is not None and now < self._next_refresh_at:
                return self.latest_snapshot()
            return self._run_pass(now)

    def force_refresh(self, now: float) -> UsageSnapshot:
        """Run a pass regardless of the refresh timer (start-up / manual path)."""
        with self._pass_lock:
            return self._run_pass(now)

    def reset(self) -> None:
        """Drop the published snapshot and the refresh timer (plugin shutdown)."""
        with self._pass_lock:
            previous = self._publish(EMPTY_SNAPSHOT)
            self._next_refresh_at = None
        self._event_bus.emit(SnapshotClearedEvent(previous_total_units=previous.total_units))

    def _run_pass(self, now: float) -> UsageSnapshot:
        try:
            handles = list(self._registry.list_active())
        except Exception as exc:
            LOGGER.warning(
                "Plugin enumeration failed; keeping previous snapshot",
                extra={"attempted_at": now},
            )
            self._event_bus.emit(
                RefreshFailedEvent(
                    attempted_at=now,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
            )
            raise

        entries: list[UsageEntry] = []
        for handle in handles:
            estimate = self._estimator.estimate(
                handle.instance,
                owner_domain=handle.ownership_domain,
            )
            entries.append(UsageEntry(name=handle.display_name, units=estimate))

        snapshot = rank_usage(entries, computed_at=now)
        interval = self.refresh_interval_seconds()
        self._publish(snapshot)
        self._next_refresh_at = now + interval

        LOGGER.debug(
            "Usage snapshot published",
            extra={"plugin_count": len(snapshot), "total_units": snapshot.total_units},
        )

        self._event_bus.emit(
            SnapshotPublishedEvent(
                computed_at=now,
                plugin_count=len(snapshot),
                total_units=snapshot.total_units,
                entries=snapshot.entries,
            )
        )
        return snapshot

    def _publish(self, snapshot: UsageSnapshot) -> UsageSnapshot:
        with self._snapshot_lock:
            previous = self._snapshot
            self._snapshot = snapshot
        return previous
