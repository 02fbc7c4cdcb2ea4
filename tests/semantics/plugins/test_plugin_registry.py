"""Plugin registry, descriptor and loader tests."""

from __future__ import annotations

from collections import Counter, OrderedDict

import pytest

from memory_diagnostic.plugins.descriptor import plugin_descriptor, plugin_display_name
from memory_diagnostic.plugins.loader import build_plugin, load_plugin_class, register_plugins
from memory_diagnostic.plugins.plugin_config import PluginSpec
from memory_diagnostic.plugins.registry import PluginRegistry


@plugin_descriptor("Ground Items", description="Highlights loot")
class GroundItemsPlugin:
    __module__ = "acme.grounditems.plugin"


@plugin_descriptor("")
class UnnamedPlugin:
    __module__ = "acme.unnamed.plugin"


class BarePlugin:
    __module__ = "acme.bare.plugin"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BarePlugin)

    def __hash__(self) -> int:
        return 0


def test_display_name_prefers_descriptor() -> None:
    assert plugin_display_name(GroundItemsPlugin()) == "Ground Items"


def test_display_name_falls_back_to_class_name() -> None:
    assert plugin_display_name(UnnamedPlugin()) == "UnnamedPlugin"
    assert plugin_display_name(BarePlugin()) == "BarePlugin"


def test_list_active_reports_handles_in_registration_order() -> None:
    registry = PluginRegistry()
    ground = GroundItemsPlugin()
    bare = BarePlugin()
    registry.register(ground)
    registry.register(bare, name="Bare bones")

    handles = registry.list_active()

    assert [h.display_name for h in handles] == ["Ground Items", "Bare bones"]
    assert [h.ownership_domain for h in handles] == ["acme.grounditems", "acme.bare"]
    assert handles[0].instance is ground


def test_enable_disable() -> None:
    registry = PluginRegistry()
    plugin = GroundItemsPlugin()
    registry.register(plugin, enabled=False)

    assert registry.list_active() == []
    assert not registry.is_enabled(plugin)

    registry.set_enabled(plugin, True)

    assert registry.is_enabled(plugin)
    assert len(registry.list_active()) == 1


def test_registration_is_identity_based() -> None:
    registry = PluginRegistry()
    first = BarePlugin()
    second = BarePlugin()
    registry.register(first)
    registry.register(second)

    assert first == second
    assert len(registry) == 2

    with pytest.raises(ValueError):
        registry.register(first)


def test_unregister() -> None:
    registry = PluginRegistry()
    plugin = BarePlugin()
    registry.register(plugin)
    registry.unregister(plugin)

    assert registry.plugins() == []

    with pytest.raises(KeyError):
        registry.unregister(plugin)


def test_register_none_is_rejected() -> None:
    with pytest.raises(ValueError):
        PluginRegistry().register(None)


def test_load_plugin_class() -> None:
    assert load_plugin_class("collections:OrderedDict") is OrderedDict


def test_load_non_class_raises() -> None:
    with pytest.raises(TypeError):
        load_plugin_class("math:pi")


def test_build_and_register_plugins() -> None:
    registry = PluginRegistry()
    specs = [
        PluginSpec.model_validate({"class_path": "collections:Counter", "a": 2}),
        PluginSpec.model_validate({"class_path": "collections:OrderedDict", "name": "Ordered", "enabled": False}),
    ]

    plugins = register_plugins(registry, specs)

    assert plugins[0] == Counter(a=2)
    assert isinstance(build_plugin(specs[1]), OrderedDict)
    assert [h.display_name for h in registry.list_active()] == ["Counter"]
    assert not registry.is_enabled(plugins[1])


def test_unregister_removes_the_same_instance_among_equal_plugins() -> None:
    registry = PluginRegistry()
    first = BarePlugin()
    second = BarePlugin()
    registry.register(first, name="Same")
    registry.register(second, name="Same")

    registry.unregister(second)

    remaining = registry.plugins()
    assert len(remaining) == 1
    assert remaining[0] is first
    assert registry.is_enabled(first)
    assert not registry.is_enabled(second)
