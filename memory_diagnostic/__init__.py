"""Public API for the memory_diagnostic package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Config API
# ----------------------------------------------------------------------
from memory_diagnostic.config.diagnostic_config import DiagnosticConfig

# ----------------------------------------------------------------------
# Coordinator API
# ----------------------------------------------------------------------
from memory_diagnostic.coordinator.update_coordinator import UpdateCoordinator

# ----------------------------------------------------------------------
# Domain Types
# ----------------------------------------------------------------------
from memory_diagnostic.core.domain.shapes import Shape, classify
from memory_diagnostic.core.domain.usage import EMPTY_SNAPSHOT, UsageEntry, UsageSnapshot

# ----------------------------------------------------------------------
# Estimator API
# ----------------------------------------------------------------------
from memory_diagnostic.core.estimator.field_layout import FieldShapeCache
from memory_diagnostic.core.estimator.graph_estimator import GraphEstimator

# ----------------------------------------------------------------------
# Ports (host integration)
# ----------------------------------------------------------------------
from memory_diagnostic.core.ports.component_registry import ComponentHandle, ComponentRegistry
from memory_diagnostic.core.ports.config_provider import ConfigProvider

# ----------------------------------------------------------------------
# Plugin hosting
# ----------------------------------------------------------------------
from memory_diagnostic.plugins.descriptor import plugin_descriptor, plugin_display_name
from memory_diagnostic.plugins.registry import PluginRegistry

# ----------------------------------------------------------------------
# Presentation
# ----------------------------------------------------------------------
from memory_diagnostic.report.summary import format_percent, format_units, summarize_usage

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Estimator
    "GraphEstimator",
    "FieldShapeCache",
    "Shape",
    "classify",

    # Coordinator
    "UpdateCoordinator",
    "UsageEntry",
    "UsageSnapshot",
    "EMPTY_SNAPSHOT",

    # Config
    "DiagnosticConfig",

    # Host integration
    "ComponentHandle",
    "ComponentRegistry",
    "ConfigProvider",
    "PluginRegistry",
    "plugin_descriptor",
    "plugin_display_name",

    # Presentation
    "summarize_usage",
    "format_units",
    "format_percent",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("memory-diagnostic")
except PackageNotFoundError:
    __version__ = "0.0.0"
