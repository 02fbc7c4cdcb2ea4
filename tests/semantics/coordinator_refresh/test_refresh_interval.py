"""
Semantic test: refresh() runs at most one pass per interval.

Invariant:
A refresh before the next permitted timestamp returns the current snapshot
unchanged and performs no estimation. The interval is clamped to at least
one second.
"""

from __future__ import annotations

from typing import Any

from memory_diagnostic.coordinator.update_coordinator import UpdateCoordinator
from memory_diagnostic.core.domain.usage import EMPTY_SNAPSHOT
from memory_diagnostic.core.estimator.graph_estimator import GraphEstimator
from memory_diagnostic.core.ports.component_registry import ComponentHandle


class CountingRegistry:
    def __init__(self, handles: list[ComponentHandle]) -> None:
        self.handles = handles
        self.calls = 0

    def list_active(self) -> list[ComponentHandle]:
        self.calls += 1
        return list(self.handles)


class CountingEstimator(GraphEstimator):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def estimate(self, root: Any, owner_domain: str | None = None) -> int:
        self.calls += 1
        return super().estimate(root, owner_domain)


class FixedInterval:
    def __init__(self, seconds: int) -> None:
        self.seconds = seconds

    def min_refresh_interval_seconds(self) -> int:
        return self.seconds


class TimerPlugin:
    __module__ = "acme.timer.plugin"

    def __init__(self) -> None:
        self.samples = [1, 2, 3]


def _coordinator(interval: int) -> tuple[UpdateCoordinator, CountingRegistry, CountingEstimator]:
    plugin = TimerPlugin()
    registry = CountingRegistry(
        [ComponentHandle(instance=plugin, display_name="Timer", ownership_domain="acme.timer")]
    )
    estimator = CountingEstimator()
    coordinator = UpdateCoordinator(
        registry=registry,
        config=FixedInterval(interval),
        estimator=estimator,
    )
    return coordinator, registry, estimator


def test_second_refresh_within_interval_is_a_no_op() -> None:
    coordinator, registry, estimator = _coordinator(10)

    first = coordinator.refresh(100.0)
    second = coordinator.refresh(105.0)

    assert second is first
    assert registry.calls == 1
    assert estimator.calls == 1
    assert coordinator.next_refresh_at == 110.0


def test_refresh_after_interval_runs_a_new_pass() -> None:
    coordinator, registry, estimator = _coordinator(10)

    first = coordinator.refresh(100.0)
    third = coordinator.refresh(110.0)

    assert third is not first
    assert third.entries == first.entries
    assert third.computed_at == 110.0
    assert registry.calls == 2
    assert estimator.calls == 2


def test_zero_interval_is_clamped_to_one_second() -> None:
    coordinator, registry, _ = _coordinator(0)

    coordinator.refresh(50.0)
    coordinator.refresh(50.5)
    assert registry.calls == 1
    assert coordinator.refresh_interval_seconds() == 1

    coordinator.refresh(51.0)
    assert registry.calls == 2


def test_negative_interval_is_clamped() -> None:
    coordinator, _, _ = _coordinator(-30)

    coordinator.refresh(0.0)

    assert coordinator.next_refresh_at == 1.0


def test_force_refresh_ignores_the_timer() -> None:
    coordinator, registry, _ = _coordinator(10)

    coordinator.refresh(100.0)
    coordinator.force_refresh(101.0)

    assert registry.calls == 2
    assert coordinator.next_refresh_at == 111.0


def test_latest_snapshot_starts_empty() -> None:
    coordinator, registry, _ = _coordinator(10)

    assert coordinator.latest_snapshot() is EMPTY_SNAPSHOT
    assert registry.calls == 0


def test_reset_clears_snapshot_and_timer() -> None:
    coordinator, registry, _ = _coordinator(10)

    coordinator.refresh(100.0)
    coordinator.reset()

    assert coordinator.latest_snapshot() is EMPTY_SNAPSHOT
    assert coordinator.next_refresh_at is None

    coordinator.refresh(101.0)
    assert registry.calls == 2
