"""
Logging event sink.
"""
from __future__ import annotations

import logging
from typing import Any

from memory_diagnostic.core.events.events import (
    RefreshFailedEvent,
    SnapshotClearedEvent,
    SnapshotPublishedEvent,
)


class LoggingEventSink:
    """Logs coordinator events; refresh failures at WARNING, the rest at INFO.

    The event itself travels in ``extra["event"]`` so structured handlers can
    serialize it.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def on_event(self, event: Any) -> None:
        if isinstance(event, RefreshFailedEvent):
            self._logger.warning(
                "Usage refresh failed",
                extra={"event": event, "error_type": event.error_type},
            )
        elif isinstance(event, SnapshotPublishedEvent):
            top = event.entries[0].name if event.entries else None
            self._logger.info(
                "Usage snapshot published",
                extra={
                    "event": event,
                    "plugin_count": event.plugin_count,
                    "total_units": event.total_units,
                    "top_plugin": top,
                },
            )
        elif isinstance(event, SnapshotClearedEvent):
            self._logger.info("Usage snapshot cleared", extra={"event": event})
        else:
            self._logger.info("domain_event", extra={"event": event})
