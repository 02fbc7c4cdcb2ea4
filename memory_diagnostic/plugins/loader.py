"""Dynamic plugin loading from ``module:Class`` paths."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from memory_diagnostic.plugins.plugin_config import PluginSpec
    from memory_diagnostic.plugins.registry import PluginRegistry

LOGGER = logging.getLogger(__name__)


def load_plugin_class(class_path: str) -> type:
    """Dynamically load a plugin class from a module path."""
    module_path, class_name = class_path.split(":")
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)

    if not isinstance(cls, type):
        raise TypeError(f"Loaded object {class_name} is not a class.")

    return cls


def build_plugin(spec: PluginSpec) -> Any:
    """Instantiate the plugin specified in the configuration."""
    cls = load_plugin_class(spec.class_path)
    return cls(**spec.to_init_params())


def register_plugins(registry: PluginRegistry, specs: list[PluginSpec]) -> list[Any]:
    """Build every spec and register it; returns the instances in order."""
    plugins: list[Any] = []
    for spec in specs:
        plugin = build_plugin(spec)
        registry.register(plugin, name=spec.name, enabled=spec.enabled)
        LOGGER.info(
            "Plugin registered",
            extra={"class_path": spec.class_path, "enabled": spec.enabled},
        )
        plugins.append(plugin)
    return plugins
