"""In-memory plugin registry."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from memory_diagnostic.core.domain.ownership import ownership_domain_of
from memory_diagnostic.core.ports.component_registry import ComponentHandle
from memory_diagnostic.plugins.descriptor import plugin_display_name


@dataclass(slots=True, eq=False)
class _Registration:
    plugin: Any
    name: str
    enabled: bool


class PluginRegistry:
    """Tracks plugin instances and their enabled state.

    Implements the ComponentRegistry protocol. Registration order is the
    enumeration order reported by list_active().
    """

    def __init__(self) -> None:
        self._registrations: list[_Registration] = []
        self._lock = threading.Lock()

    def register(self, plugin: Any, *, name: str | None = None, enabled: bool = True) -> None:
        if plugin is None:
            raise ValueError("plugin must not be None")

        display_name = name if name else plugin_display_name(plugin)

        with self._lock:
            if self._find(plugin) is not None:
                raise ValueError(f"Plugin already registered: {display_name}")
            self._registrations.append(
                _Registration(plugin=plugin, name=display_name, enabled=enabled)
            )

    def unregister(self, plugin: Any) -> None:
        with self._lock:
            registration = self._find(plugin)
            if registration is None:
                raise KeyError(type(plugin).__name__)
            self._registrations = [r for r in self._registrations if r is not registration]

    def set_enabled(self, plugin: Any, enabled: bool) -> None:
        with self._lock:
            registration = self._find(plugin)
            if registration is None:
                raise KeyError(type(plugin).__name__)
            registration.enabled = enabled

    def is_enabled(self, plugin: Any) -> bool:
        with self._lock:
            registration = self._find(plugin)
            return registration is not None and registration.enabled

    def plugins(self) -> list[Any]:
        with self._lock:
            return [r.plugin for r in self._registrations]

    def list_active(self) -> list[ComponentHandle]:
        with self._lock:
            active = [r for r in self._registrations if r.enabled]

        return [
            ComponentHandle(
                instance=r.plugin,
                display_name=r.name,
                ownership_domain=ownership_domain_of(type(r.plugin)),
            )
            for r in active
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrations)

    def _find(self, plugin: Any) -> _Registration | None:
        # Identity, not equality: two equal plugin objects are distinct plugins.
        for registration in self._registrations:
            if registration.plugin is plugin:
                return registration
        return None
