"""Plugin configuration model.

This module defines the PluginSpec schema used to parse plugin entries of
the CLI configuration into loadable plugin definitions.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PluginSpec(BaseModel):
    """Plugin entry that collects arbitrary extra keys into ``params``.

    JSON example:
        {
          "class_path": "acme.inventory.plugin:InventoryPlugin",
          "name": "Inventory",
          "slots": 28
        }

    Result:
        class_path="acme.inventory.plugin:InventoryPlugin"
        name="Inventory", enabled=True
        params={"slots": 28}
    """

    class_path: str = Field(..., min_length=1, pattern=r"^[\w.]+:\w+$")
    name: str | None = None
    enabled: bool = True

    params: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _collect_extras_into_params(cls, data: Any) -> Any:
        """Collect unknown top-level keys into the ``params`` mapping.

        This allows flat JSON plugin entries without requiring a nested
        "params" object.
        """
        if not isinstance(data, dict):
            return data

        d = dict(data)

        explicit_params = d.pop("params", None)

        reserved = {"class_path", "name", "enabled"}

        extras = {k: v for k, v in d.items() if k not in reserved}

        for k in extras:
            d.pop(k, None)

        merged: dict[str, Any] = {}
        if isinstance(explicit_params, dict):
            merged.update(explicit_params)
        merged.update(extras)

        d["params"] = merged
        return d

    def to_init_params(self) -> dict[str, Any]:
        """Return a shallow copy of constructor parameters."""
        return dict(self.params)
