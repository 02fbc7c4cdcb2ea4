"""
Simple synchronous event bus.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from memory_diagnostic.core.events.event_sink import EventSink

LOGGER = logging.getLogger(__name__)


class EventBus:
    """Dispatches events to registered sinks.

    Sinks are side-effects: a failing sink is logged and the remaining sinks
    still receive the event. The snapshot has already been published by the
    time events are emitted, so sink failures never affect readers.
    """

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def register(self, sink: EventSink) -> None:
        """Register a new sink."""
        self._sinks.append(sink)

    def emit(self, event: Any) -> None:
        """Emit an event to all sinks."""
        if self._closed:
            return

        for sink in self._sinks:
            try:
                sink.on_event(event)
            except Exception:  # pylint: disable=broad-exception-caught
                LOGGER.exception(
                    "Event sink failed",
                    extra={"sink": type(sink).__name__, "event_type": type(event).__name__},
                )

    def close(self) -> None:
        """
        Finalize all sinks that expose a close() method.
        """
        if self._closed:
            return

        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()

        self._closed = True
