"""Top-level CLI run configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from memory_diagnostic.config.diagnostic_config import DiagnosticConfig
from memory_diagnostic.plugins.plugin_config import PluginSpec


class RunConfig(BaseModel):
    """Diagnostic settings plus the plugins to host.

    JSON example:
        {
          "diagnostic": {"refresh_interval_seconds": 5, "max_plugins": 3},
          "plugins": [
            {"class_path": "acme.inventory.plugin:InventoryPlugin"}
          ]
        }
    """

    diagnostic: DiagnosticConfig = Field(default_factory=DiagnosticConfig)
    plugins: list[PluginSpec] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> RunConfig:
        return cls.model_validate(obj)

    @classmethod
    def from_path(cls, path: Path) -> RunConfig:
        if not path.exists():
            raise FileNotFoundError(path)
        return cls.from_json_obj(json.loads(path.read_text(encoding="utf-8")))
