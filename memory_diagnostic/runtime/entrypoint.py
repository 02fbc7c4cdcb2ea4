from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from memory_diagnostic.config.run_config import RunConfig
from memory_diagnostic.coordinator.update_coordinator import UpdateCoordinator
from memory_diagnostic.core.events.event_bus import EventBus
from memory_diagnostic.core.events.sinks.file_recorder import FileRecorderSink
from memory_diagnostic.core.events.sinks.sink_logging import LoggingEventSink
from memory_diagnostic.plugins.loader import register_plugins
from memory_diagnostic.plugins.registry import PluginRegistry
from memory_diagnostic.report.summary import print_usage_report, summarize_usage
from memory_diagnostic.runtime.prometheus_metrics import PrometheusUsageSink

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_event_bus(
    *,
    events_path: Path | None,
    prometheus: bool,
) -> EventBus:
    sinks: list = [LoggingEventSink(logging.getLogger("bus"))]

    if events_path is not None:
        sinks.append(FileRecorderSink(events_path))

    if prometheus:
        sinks.append(PrometheusUsageSink())

    return EventBus(sinks=sinks)


def _watch(
    *,
    coordinator: UpdateCoordinator,
    max_rows: int,
    ticks: int,
    tick_seconds: float,
) -> None:
    """Drive refresh() from a fixed-rate tick and print every new snapshot."""
    last_printed: float | None = None
    tick = 0

    while ticks <= 0 or tick < ticks:
        snapshot = coordinator.refresh(time.monotonic())

        if snapshot.computed_at != last_printed:
            print_usage_report(summarize_usage(snapshot, max_rows=max_rows))
            print()
            last_printed = snapshot.computed_at

        tick += 1
        time.sleep(tick_seconds)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Estimate and rank the relative memory usage of hosted plugins"
    )

    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to run JSON config (diagnostic settings + plugins).",
    )

    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep ticking and print a report after every refresh.",
    )

    parser.add_argument(
        "--ticks",
        type=int,
        default=0,
        help="Number of ticks in watch mode (0 = until interrupted).",
    )

    parser.add_argument(
        "--tick-seconds",
        type=float,
        default=1.0,
        help="Delay between ticks in watch mode.",
    )

    parser.add_argument(
        "--events-path",
        type=Path,
        default=None,
        help="Optional JSON-lines file receiving domain events.",
    )

    parser.add_argument(
        "--prometheus",
        action="store_true",
        help="Export gauges (and push if PROMETHEUS_PUSHGATEWAY_URL is set).",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Root log level.",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    if args.tick_seconds <= 0:
        print("Error: --tick-seconds must be positive.", file=sys.stderr)
        sys.exit(2)

    # ------------------------------------------------------------------
    # Load config and plugins
    # ------------------------------------------------------------------

    cfg = RunConfig.from_path(args.config)

    registry = PluginRegistry()
    register_plugins(registry, cfg.plugins)

    event_bus = _build_event_bus(
        events_path=args.events_path,
        prometheus=args.prometheus,
    )

    coordinator = UpdateCoordinator(
        registry=registry,
        config=cfg.diagnostic,
        event_bus=event_bus,
    )

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    try:
        if args.watch:
            # Start-up pass, then the regular tick-driven refreshes.
            coordinator.force_refresh(time.monotonic())
            _watch(
                coordinator=coordinator,
                max_rows=cfg.diagnostic.max_plugins,
                ticks=args.ticks,
                tick_seconds=args.tick_seconds,
            )
        else:
            snapshot = coordinator.force_refresh(time.monotonic())
            print_usage_report(summarize_usage(snapshot, max_rows=cfg.diagnostic.max_plugins))
    except KeyboardInterrupt:
        LOGGER.info("Interrupted")
    finally:
        coordinator.reset()
        event_bus.close()


if __name__ == "__main__":
    main()
