"""
Structural shape classification.

Every reachable object is matched against a small closed set of shapes in a
fixed priority order; the first match wins. The order is a compatibility
contract (a tuple subclass that also looks like a cache is an array), not a
statement about which shape is "more correct".

Capabilities are checked on the runtime type, never through the instance:
objects that intercept attribute access or report a fake __class__ are
classified by what they actually are.

Shape probes are best-effort: an entry count that cannot be read (a released
memoryview, a closed StringIO, a broken __len__) is reported as zero.
"""

# pylint: disable=broad-exception-caught
from __future__ import annotations

import array
import io
import logging
from collections import UserString
from collections.abc import Collection, Mapping
from enum import Enum
from typing import Any

LOGGER = logging.getLogger(__name__)


class Shape(str, Enum):
    ARRAY = "array"
    CACHE = "cache"
    MAP = "map"
    COLLECTION = "collection"
    TEXT = "text"
    OBJECT = "object"


# Terminal shapes are counted, never traversed.
TERMINAL_SHAPES: frozenset[Shape] = frozenset(
    {
        Shape.ARRAY,
        Shape.CACHE,
        Shape.MAP,
        Shape.COLLECTION,
        Shape.TEXT,
    }
)

_ARRAY_TYPES: tuple[type, ...] = (tuple, bytes, bytearray, array.array, memoryview)
_TEXT_TYPES: tuple[type, ...] = (str, UserString, io.StringIO)

_MISSING = object()


def _type_attr(obj: Any, name: str) -> Any:
    """Look an attribute up on the type only.

    Instance-level __getattr__ hooks are never triggered, so proxies and
    mocks cannot pretend to have a capability.
    """
    try:
        return getattr(type(obj), name, _MISSING)
    except Exception:
        return _MISSING


def is_array_like(obj: Any) -> bool:
    return issubclass(type(obj), _ARRAY_TYPES)


def is_function_cache(obj: Any) -> bool:
    """functools.lru_cache / functools.cache wrappers."""
    return _type_attr(obj, "cache_info") is not _MISSING and callable(obj)


def is_bounded_cache(obj: Any) -> bool:
    """Mapping-backed caches that expose maxsize and currsize (cachetools style)."""
    if not issubclass(type(obj), Mapping):
        return False
    return (
        _type_attr(obj, "maxsize") is not _MISSING
        and _type_attr(obj, "currsize") is not _MISSING
    )


def is_cache_like(obj: Any) -> bool:
    return is_function_cache(obj) or is_bounded_cache(obj)


def is_map_like(obj: Any) -> bool:
    return issubclass(type(obj), Mapping)


def is_text_like(obj: Any) -> bool:
    return issubclass(type(obj), _TEXT_TYPES)


def is_collection_like(obj: Any) -> bool:
    # Strings are Collections in Python; they are priced as text.
    return issubclass(type(obj), Collection) and not is_text_like(obj)


def classify(obj: Any) -> Shape:
    """Return the shape of obj using the fixed priority order."""
    if issubclass(type(obj), type):
        # Classes are objects even when their metaclass is iterable (Enum).
        return Shape.OBJECT
    if is_array_like(obj):
        return Shape.ARRAY
    if is_cache_like(obj):
        return Shape.CACHE
    if is_map_like(obj):
        return Shape.MAP
    if is_collection_like(obj):
        return Shape.COLLECTION
    if is_text_like(obj):
        return Shape.TEXT
    return Shape.OBJECT


# ---------------------------------------------------------------------------
# Entry counting
# ---------------------------------------------------------------------------


def _safe_len(obj: Any) -> int:
    try:
        size = len(obj)
    except Exception:
        LOGGER.debug("len() failed during estimation", extra={"type": type(obj).__qualname__})
        return 0
    return max(0, int(size))


def _array_length(obj: Any) -> int:
    if isinstance(obj, memoryview):
        # Element count across all dimensions, not just the first one.
        try:
            return obj.nbytes // max(1, obj.itemsize)
        except Exception:
            return 0
    return _safe_len(obj)


def _cache_entries(obj: Any) -> int:
    if is_function_cache(obj):
        try:
            currsize = obj.cache_info().currsize
        except Exception:
            LOGGER.debug("cache_info() failed during estimation")
            return 0
        return max(0, int(currsize or 0))
    # currsize of a bounded mapping cache may be weighted; the entry count is len().
    return _safe_len(obj)


def _text_length(obj: Any) -> int:
    if isinstance(obj, io.StringIO):
        try:
            return len(obj.getvalue())
        except Exception:
            return 0
    return _safe_len(obj)


def entry_count(obj: Any, shape: Shape) -> int:
    """Return the element/entry/character count for a terminal shape."""
    if shape is Shape.ARRAY:
        return _array_length(obj)
    if shape is Shape.CACHE:
        return _cache_entries(obj)
    if shape is Shape.TEXT:
        return _text_length(obj)
    if shape in (Shape.MAP, Shape.COLLECTION):
        return _safe_len(obj)
    raise ValueError(f"Shape {shape.value} has no entry count")
