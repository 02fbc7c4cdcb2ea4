"""Diagnostic configuration model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_REFRESH_INTERVAL_SECONDS = 10
DEFAULT_MAX_PLUGINS = 10


class DiagnosticConfig(BaseModel):
    """User-facing settings of the memory diagnostic.

    Also serves as the ConfigProvider consumed by the update coordinator.
    """

    # How often to recalculate memory estimates.
    refresh_interval_seconds: int = Field(default=DEFAULT_REFRESH_INTERVAL_SECONDS, ge=1, le=300)

    # Maximum number of plugins to list in the report.
    max_plugins: int = Field(default=DEFAULT_MAX_PLUGINS, ge=1, le=50)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> DiagnosticConfig:
        """Create a DiagnosticConfig instance from a JSON-compatible object."""
        return cls.model_validate(obj)

    def min_refresh_interval_seconds(self) -> int:
        return self.refresh_interval_seconds
