from __future__ import annotations

from typing import Protocol


class ConfigProvider(Protocol):
    """Read-only configuration consumed by the update coordinator."""

    def min_refresh_interval_seconds(self) -> int:
        """Minimum number of seconds between two estimation passes."""
