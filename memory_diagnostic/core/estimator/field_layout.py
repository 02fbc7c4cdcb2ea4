"""
Per-type field layout cache.

Python objects keep instance state in two places: slot descriptors declared
on the classes of the MRO, and the per-instance __dict__. The slot part is a
property of the type and is computed once per type; the __dict__ part can
only be read from each instance.
"""

# pylint: disable=broad-exception-caught
from __future__ import annotations

import logging
import threading
import types
from dataclasses import dataclass
from typing import Any, Iterator

LOGGER = logging.getLogger(__name__)


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


@dataclass(frozen=True, slots=True)
class SlotField:
    """A slot-backed instance field."""

    name: str
    descriptor: types.MemberDescriptorType


@dataclass(frozen=True, slots=True)
class FieldLayout:
    """Immutable field layout of one type.

    slots are ordered from the concrete type towards its bases; object itself
    is never walked. has_instance_dict is True when instances carry a
    __dict__ whose entries are read after the slots.
    """

    type_name: str
    slots: tuple[SlotField, ...]
    has_instance_dict: bool

    def iter_values(self, obj: Any) -> Iterator[Any]:
        """Yield the current value of every readable instance field.

        Unset slots, racing __dict__ mutations and failing descriptors are
        skipped: one bad field never aborts the walk.
        """
        for slot in self.slots:
            try:
                value = slot.descriptor.__get__(obj, type(obj))
            except Exception:
                LOGGER.debug(
                    "Skipping unreadable slot",
                    extra={"type": self.type_name, "field": slot.name},
                )
                continue
            yield value

        if not self.has_instance_dict:
            return

        try:
            instance_dict = object.__getattribute__(obj, "__dict__")
            # dict.copy() runs without calling back into Python code, so a
            # concurrent writer cannot invalidate the iteration below.
            items = instance_dict.copy().items()
        except Exception:
            LOGGER.debug(
                "Skipping unreadable instance dict",
                extra={"type": self.type_name},
            )
            return

        for name, value in items:
            if isinstance(name, str) and _is_dunder(name):
                continue
            yield value


def build_field_layout(type_: type) -> FieldLayout:
    """Compute the field layout of a type by walking its MRO."""
    slots: list[SlotField] = []
    seen: set[str] = set()

    for klass in type_.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if not isinstance(attr, types.MemberDescriptorType):
                continue
            if _is_dunder(name) or name in seen:
                continue
            seen.add(name)
            slots.append(SlotField(name=name, descriptor=attr))

    has_instance_dict = getattr(type_, "__dictoffset__", 0) != 0

    return FieldLayout(
        type_name=type_.__qualname__,
        slots=tuple(slots),
        has_instance_dict=has_instance_dict,
    )


class FieldShapeCache:
    """Compute-once cache of FieldLayout keyed by type.

    Shared across passes and plugins. Entries are never recomputed or
    evicted; the number of distinct plugin types in a process is small.
    """

    def __init__(self) -> None:
        self._layouts: dict[type, FieldLayout] = {}
        self._lock = threading.Lock()

    def get(self, type_: type) -> FieldLayout:
        layout = self._layouts.get(type_)
        if layout is not None:
            return layout

        with self._lock:
            layout = self._layouts.get(type_)
            if layout is None:
                layout = build_field_layout(type_)
                self._layouts[type_] = layout
            return layout

    def __len__(self) -> int:
        return len(self._layouts)

    def __contains__(self, type_: object) -> bool:
        return type_ in self._layouts
