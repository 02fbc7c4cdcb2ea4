from __future__ import annotations

from typing import Any

from memory_diagnostic.core.events.event_bus import EventBus


class NullEventBus(EventBus):
    """Sinkless bus the coordinator falls back to when no bus is wired.

    Registered sinks are ignored; nothing is ever delivered.
    """

    def __init__(self) -> None:
        super().__init__(sinks=())

    def register(self, sink: Any) -> None:
        return

    def emit(self, event: Any) -> None:
        return
