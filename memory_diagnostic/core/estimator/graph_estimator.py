"""Recursive best-effort object graph estimator."""

from __future__ import annotations

import logging
from typing import Any

from memory_diagnostic.core.domain import units
from memory_diagnostic.core.domain.ownership import is_owned_type, ownership_domain_of
from memory_diagnostic.core.domain.shapes import Shape, classify, entry_count
from memory_diagnostic.core.estimator.field_layout import FieldShapeCache

LOGGER = logging.getLogger(__name__)


_SHAPE_COSTS: dict[Shape, tuple[int, int]] = {
    Shape.ARRAY: (units.ARRAY_BASE_UNITS, units.ARRAY_ENTRY_UNITS),
    Shape.CACHE: (units.CACHE_BASE_UNITS, units.CACHE_ENTRY_UNITS),
    Shape.MAP: (units.MAP_BASE_UNITS, units.MAP_ENTRY_UNITS),
    Shape.COLLECTION: (units.COLLECTION_BASE_UNITS, units.COLLECTION_ENTRY_UNITS),
    Shape.TEXT: (units.STRING_BASE_UNITS, units.STRING_CHAR_UNITS),
}


class GraphEstimator:
    """Estimates the relative size of the object graph owned by a plugin.

    Invariants:
    - Each distinct object (by identity) is costed at most once per call.
    - Arrays, caches, maps, collections and text are terminal: counted,
      never walked.
    - Objects whose type lives outside the owner domain cost 0 and are not
      walked.
    - Owned objects at max_depth are costed without their fields.

    estimate() only reads the inspected graph and never raises.
    """

    def __init__(
        self,
        *,
        field_cache: FieldShapeCache | None = None,
        max_depth: int = units.MAX_DEPTH,
    ) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self._field_cache = field_cache if field_cache is not None else FieldShapeCache()
        self._max_depth = max_depth

    @property
    def field_cache(self) -> FieldShapeCache:
        return self._field_cache

    def estimate(self, root: Any, owner_domain: str | None = None) -> int:
        """Return the unit estimate for root.

        owner_domain defaults to the ownership domain of root's type.
        """
        if root is None:
            return 0

        domain = owner_domain if owner_domain is not None else ownership_domain_of(type(root))

        # id -> object; holding the object keeps its id unique for the pass.
        visited: dict[int, Any] = {}
        return self._estimate_object(root, visited, 0, domain)

    def _estimate_object(
        self,
        obj: Any,
        visited: dict[int, Any],
        depth: int,
        owner_domain: str | None,
    ) -> int:
        if obj is None:
            return 0

        key = id(obj)
        if key in visited:
            return 0
        visited[key] = obj

        try:
            shape = classify(obj)
        except Exception:  # pylint: disable=broad-exception-caught
            # A __class__ property or ABC hook that raises: treat as unknown.
            LOGGER.debug("Shape classification failed", extra={"type": type(obj).__qualname__})
            return 0

        if shape is not Shape.OBJECT:
            base, per_entry = _SHAPE_COSTS[shape]
            return base + entry_count(obj, shape) * per_entry

        if not is_owned_type(type(obj), owner_domain):
            return 0

        total = units.OBJECT_UNITS

        if depth >= self._max_depth:
            return total

        layout = self._field_cache.get(type(obj))
        for value in layout.iter_values(obj):
            total += self._estimate_object(value, visited, depth + 1, owner_domain)

        return total
