"""Plugin descriptors and display-name resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

T = TypeVar("T", bound=type)

DESCRIPTOR_ATTR = "__plugin_descriptor__"


@dataclass(frozen=True, slots=True)
class PluginDescriptor:
    name: str
    description: str = ""


def plugin_descriptor(name: str, description: str = "") -> Callable[[T], T]:
    """Class decorator attaching a PluginDescriptor.

    Example:
        @plugin_descriptor("Ground Items", description="Highlights loot")
        class GroundItemsPlugin:
            ...
    """

    def decorate(cls: T) -> T:
        setattr(cls, DESCRIPTOR_ATTR, PluginDescriptor(name=name, description=description))
        return cls

    return decorate


def descriptor_of(plugin_type: type) -> PluginDescriptor | None:
    descriptor = getattr(plugin_type, DESCRIPTOR_ATTR, None)
    if isinstance(descriptor, PluginDescriptor):
        return descriptor
    return None


def plugin_display_name(plugin: Any) -> str:
    """Return the descriptor name if non-empty, else the class name."""
    plugin_type = type(plugin)
    descriptor = descriptor_of(plugin_type)
    if descriptor is not None and descriptor.name:
        return descriptor.name
    return plugin_type.__name__
