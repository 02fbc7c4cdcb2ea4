"""
Semantic test: objects outside the plugin's ownership domain cost nothing.

Invariant:
A plain object whose type is declared outside the root plugin's package
(another plugin, a library, the host) contributes 0 units and is never
walked, even when reachable through an owned object.
"""

from __future__ import annotations

from memory_diagnostic.core.domain import units
from memory_diagnostic.core.domain.ownership import (
    is_in_domain,
    ownership_domain_of,
)
from memory_diagnostic.core.estimator.graph_estimator import GraphEstimator


class LootPlugin:
    __module__ = "acme.loot.plugin"

    def __init__(self) -> None:
        self.client = None
        self.state = None


class LootState:
    __module__ = "acme.loot.state.tables"

    def __init__(self) -> None:
        self.host = None


class HostClient:
    __module__ = "host.client"

    def __init__(self) -> None:
        self.world = {str(i): i for i in range(1000)}
        self.players = list(range(500))
        self.plugin = None


class LootToolsHelper:
    # Shares a string prefix with the owner domain but is a different package.
    __module__ = "acme.lootools"

    def __init__(self) -> None:
        self.payload = list(range(100))


def test_direct_foreign_reference_contributes_zero() -> None:
    plugin = LootPlugin()
    client = HostClient()
    client.plugin = plugin
    plugin.client = client

    assert GraphEstimator().estimate(plugin) == units.OBJECT_UNITS


def test_foreign_reference_below_owned_object_contributes_zero() -> None:
    plugin = LootPlugin()
    state = LootState()
    state.host = HostClient()
    plugin.state = state

    assert GraphEstimator().estimate(plugin) == 2 * units.OBJECT_UNITS


def test_builtin_scalars_are_foreign() -> None:
    plugin = LootPlugin()
    plugin.client = 42
    plugin.state = 3.5

    assert GraphEstimator().estimate(plugin) == units.OBJECT_UNITS


def test_sibling_package_with_common_prefix_is_not_owned() -> None:
    plugin = LootPlugin()
    plugin.client = LootToolsHelper()

    assert GraphEstimator().estimate(plugin) == units.OBJECT_UNITS


def test_explicit_owner_domain_overrides_root_type() -> None:
    plugin = LootPlugin()
    plugin.state = LootState()

    # A domain covering the plugin module only leaves LootState foreign.
    assert GraphEstimator().estimate(plugin, owner_domain="acme.loot.plugin") == units.OBJECT_UNITS
    assert GraphEstimator().estimate(plugin, owner_domain="host") == 0
    assert GraphEstimator().estimate(plugin, owner_domain="acme") == 2 * units.OBJECT_UNITS


def test_ownership_domain_of_strips_the_module_segment() -> None:
    assert ownership_domain_of(LootPlugin) == "acme.loot"
    assert ownership_domain_of(HostClient) == "host"


def test_top_level_module_is_its_own_domain() -> None:
    class Standalone:
        __module__ = "standalone"

    assert ownership_domain_of(Standalone) == "standalone"


def test_domain_matching_is_segment_based() -> None:
    assert is_in_domain("acme.loot", "acme.loot")
    assert is_in_domain("acme.loot.state", "acme.loot")
    assert not is_in_domain("acme.lootools", "acme.loot")
    assert not is_in_domain("acme", "acme.loot")
    assert not is_in_domain(None, "acme.loot")
    assert not is_in_domain("acme.loot", None)
