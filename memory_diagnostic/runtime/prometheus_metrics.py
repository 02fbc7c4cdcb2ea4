from __future__ import annotations

import json
import logging
import os
from typing import Any

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

from memory_diagnostic.core.events.events import SnapshotClearedEvent, SnapshotPublishedEvent

LOGGER = logging.getLogger(__name__)


class PrometheusUsageSink:
    """Event sink exporting usage snapshots as Prometheus gauges.

    Gauges live in the given CollectorRegistry (a private one by default), so
    a host can expose them from its own metrics endpoint.

    Optional environment:
    - PROMETHEUS_PUSHGATEWAY_URL: when set, every published snapshot is also
      pushed to this Pushgateway under the given job name.
    - PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON: JSON object used as grouping key.

    Pushing is best-effort: delivery failures are logged and never propagate.
    """

    def __init__(
        self,
        *,
        registry: CollectorRegistry | None = None,
        job: str = "memory_diagnostic",
    ) -> None:
        self._registry = registry if registry is not None else CollectorRegistry()
        self._job = job
        self._pushgateway_url = os.environ.get("PROMETHEUS_PUSHGATEWAY_URL")
        self._grouping_key = self._load_grouping_key()

        self._plugin_units = Gauge(
            "memory_diagnostic_plugin_units",
            documentation="Estimated relative memory units per plugin",
            labelnames=["plugin"],
            registry=self._registry,
        )
        self._total_units = Gauge(
            "memory_diagnostic_total_units",
            documentation="Estimated relative memory units across all active plugins",
            registry=self._registry,
        )
        self._exported: set[str] = set()

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def is_push_enabled(self) -> bool:
        return self._pushgateway_url is not None

    @staticmethod
    def _load_grouping_key() -> dict[str, str]:
        raw = os.environ.get("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON")
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning(
                "Invalid PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON; ignoring"
            )
            return {}

        if not isinstance(data, dict):
            return {}

        grouping: dict[str, str] = {}
        for key, value in data.items():
            if isinstance(key, str) and isinstance(value, str):
                grouping[key] = value
        return grouping

    def on_event(self, event: Any) -> None:
        if isinstance(event, SnapshotPublishedEvent):
            self._export(
                {entry.name: entry.units for entry in event.entries},
                event.total_units,
            )
            self._push()
        elif isinstance(event, SnapshotClearedEvent):
            self._export({}, 0)

    def _export(self, units_by_plugin: dict[str, int], total_units: int) -> None:
        # Plugins that disappeared since the last pass must not linger.
        for stale in self._exported - units_by_plugin.keys():
            self._plugin_units.remove(stale)

        for name, units in units_by_plugin.items():
            self._plugin_units.labels(plugin=name).set(units)

        self._total_units.set(total_units)
        self._exported = set(units_by_plugin)

    def _push(self) -> None:
        if not self._pushgateway_url:
            return

        try:
            push_to_gateway(
                gateway=self._pushgateway_url,
                job=self._job,
                registry=self._registry,
                grouping_key=self._grouping_key,
            )
        except OSError:
            LOGGER.exception("Prometheus push failed")
            return

        LOGGER.info(
            "Prometheus metrics pushed",
            extra={"job": self._job, "grouping_key": self._grouping_key},
        )
