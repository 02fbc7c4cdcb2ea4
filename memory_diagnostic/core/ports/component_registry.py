"""Component registry protocol.

This module defines the boundary through which the update coordinator
learns which plugins exist and are active. Concrete host integrations adapt
their plugin manager to this protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence


@dataclass(frozen=True, slots=True)
class ComponentHandle:
    """A live plugin instance as seen by one refresh.

    The instance is owned by the host; the coordinator only reads it for the
    duration of a single pass. instance may be None for a plugin that was
    torn down between enumeration and estimation.
    """

    instance: Any
    display_name: str
    ownership_domain: str | None


class ComponentRegistry(Protocol):
    """Host-facing plugin enumeration boundary."""

    def list_active(self) -> Sequence[ComponentHandle]:
        """Return the currently active plugins in enumeration order.

        May raise; a failed enumeration fails the refresh.
        """
