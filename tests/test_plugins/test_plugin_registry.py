"""
Tests for the plugin registry.

Tests cover:
- Metadata defaults and copying
- Overwrite on duplicate name
- Read accessors (all, get, names)
- Default disable: LIFO unwind at most once per api, always raises
"""

from unittest.mock import MagicMock

import pytest

from pluginhost.domain.errors import OnlineDisableUnsupported
from pluginhost.plugins.api import PluginApi
from pluginhost.plugins.base import PluginMetadata
from pluginhost.plugins.registry import PluginRegistry, make_default_disable


def _enable(api):
    return None


class TestRegister:
    """Tests for PluginRegistry.register."""

    def test_fills_defaults_from_mapping(self):
        registry = PluginRegistry()

        definition = registry.register({"name": "foo"}, _enable)

        assert definition.name == "foo"
        assert definition.version == 1
        assert definition.author == "anonymous"
        assert definition.description == ""
        assert definition.enable is _enable

    def test_falsy_version_and_author_get_defaults(self):
        registry = PluginRegistry()

        definition = registry.register(
            {"name": "foo", "version": 0, "author": ""}, _enable
        )

        assert definition.version == 1
        assert definition.author == "anonymous"

    def test_accepts_metadata_object(self):
        registry = PluginRegistry()
        meta = PluginMetadata(name="foo", version=4, author="a", description="d")

        definition = registry.register(meta, _enable)

        assert definition.metadata == meta

    def test_metadata_is_copied(self):
        """Mutating the caller's metadata afterwards has no effect."""
        registry = PluginRegistry()
        meta = PluginMetadata(name="foo", description="before")

        registry.register(meta, _enable)
        meta.description = "after"

        assert registry.get("foo").description == "before"

    def test_custom_disable_kept(self):
        registry = PluginRegistry()
        disable = MagicMock()

        definition = registry.register({"name": "foo"}, _enable, disable)

        assert definition.disable is disable

    def test_missing_disable_gets_default(self):
        registry = PluginRegistry()

        definition = registry.register({"name": "foo"}, _enable)

        assert definition.disable.__name__ == "default_disable"

    def test_duplicate_name_overwrites(self):
        registry = PluginRegistry()
        first = registry.register({"name": "foo", "version": 1}, _enable)

        second = registry.register({"name": "foo", "version": 2}, _enable)

        assert registry.get("foo") is second
        assert registry.get("foo") is not first
        assert len(registry) == 1


class TestAccessors:
    """Tests for the registry's read accessors."""

    def test_names_sorted(self):
        registry = PluginRegistry()
        for name in ["zeta", "alpha", "mid"]:
            registry.register({"name": name}, _enable)

        assert registry.names() == ["alpha", "mid", "zeta"]

    def test_get_missing(self):
        assert PluginRegistry().get("nope") is None

    def test_all_is_a_copy(self):
        registry = PluginRegistry()
        registry.register({"name": "foo"}, _enable)

        plugins = registry.all()
        plugins.clear()

        assert "foo" in registry
        assert list(registry.all()) == ["foo"]

    def test_contains(self):
        registry = PluginRegistry()
        registry.register({"name": "foo"}, _enable)

        assert "foo" in registry
        assert "bar" not in registry


class TestDefaultDisable:
    """Tests for the disable substituted when a plugin supplies none."""

    def test_unwinds_then_raises(self):
        disable = make_default_disable("foo")
        api = MagicMock()

        with pytest.raises(OnlineDisableUnsupported, match="Refresh to disable"):
            disable(api, None)

        api.deregister_all.assert_called_once_with()

    def test_unwinds_at_most_once_per_api(self):
        disable = make_default_disable("foo")
        api = MagicMock()

        for _ in range(3):
            with pytest.raises(OnlineDisableUnsupported):
                disable(api, None)

        assert api.deregister_all.call_count == 1

    def test_each_api_unwound_once(self):
        """A re-enabled plugin gets a new api, which is unwound as well."""
        disable = make_default_disable("foo")
        first, second = MagicMock(), MagicMock()

        for api in (first, second, first, second):
            with pytest.raises(OnlineDisableUnsupported):
                disable(api, None)

        assert first.deregister_all.call_count == 1
        assert second.deregister_all.call_count == 1

    def test_unwinds_real_api_in_reverse_order(self, session, manager):
        definition = PluginRegistry().register({"name": "foo"}, _enable)
        api = PluginApi(session, definition, manager)
        definitions = session.bindings.definitions
        removed = []
        real_deregister = definitions.deregister_action

        def recording(name):
            removed.append(name)
            real_deregister(name)

        definitions.deregister_action = recording
        for name in ["foo.a", "foo.b", "foo.c"]:
            api.register_action(name, name, MagicMock())

        for _ in range(2):
            with pytest.raises(OnlineDisableUnsupported):
                definition.disable(api, None)

        assert removed == ["foo.c", "foo.b", "foo.a"]
        assert api.registrations == ()

    def test_error_names_plugin(self):
        disable = make_default_disable("foo")

        with pytest.raises(OnlineDisableUnsupported) as exc_info:
            disable(MagicMock(), None)

        assert exc_info.value.plugin_name == "foo"
        assert "doesn't support online disable" in str(exc_info.value)
