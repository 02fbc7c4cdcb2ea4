"""
Unit cost constants for the object-graph estimator.

Units are relative and dimensionless. They are NOT bytes: the numbers are
chosen so that typical containers and objects compare sensibly against each
other, which is all a ranking needs.
"""

from __future__ import annotations

# Maximum field recursion depth below the root object.
# The root is depth 0; owned objects at MAX_DEPTH are costed without fields.
MAX_DEPTH: int = 2

# Plain owned objects
OBJECT_UNITS: int = 16

# Fixed-length sequences (tuple, bytes, array.array, ...)
ARRAY_BASE_UNITS: int = 16
ARRAY_ENTRY_UNITS: int = 8

# Lists, sets, deques and other non-mapping collections
COLLECTION_BASE_UNITS: int = 24
COLLECTION_ENTRY_UNITS: int = 8

# Mappings
MAP_BASE_UNITS: int = 32
MAP_ENTRY_UNITS: int = 16

# Bounded caches exposing their current size
CACHE_BASE_UNITS: int = 48
CACHE_ENTRY_UNITS: int = 24

# Text
STRING_BASE_UNITS: int = 16
STRING_CHAR_UNITS: int = 2
