"""
Tests for the plugin runtime error types.
"""

import pytest

from pluginhost.domain.errors import (
    IllegalTransition,
    InternalConsistencyError,
    OnlineDisableUnsupported,
    PanicRequest,
    PluginError,
    RegistrationConflict,
    UnknownEmitter,
    UnregisteredPlugin,
)
from pluginhost.plugins.base import PluginStatus


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            IllegalTransition("foo", PluginStatus.ENABLED, "Plugin foo is already enabled"),
            UnregisteredPlugin("foo"),
            OnlineDisableUnsupported("foo"),
            PanicRequest("foo"),
            UnknownEmitter("foo", "window"),
            RegistrationConflict("Action", "foo.bar", "foo"),
        ],
    )
    def test_lifecycle_errors_are_plugin_errors(self, error):
        assert isinstance(error, PluginError)
        assert error.plugin_name == "foo"

    def test_internal_consistency_is_not_plugin_error(self):
        error = InternalConsistencyError("bookkeeping broken")

        assert isinstance(error, RuntimeError)
        assert not isinstance(error, PluginError)


class TestMessages:
    def test_unregistered(self):
        assert str(UnregisteredPlugin("foo")) == "No plugin registered as foo"

    def test_online_disable(self):
        assert str(OnlineDisableUnsupported("foo")) == (
            "The plugin 'foo' was disabled but doesn't support online disable "
            "functionality. Refresh to disable."
        )

    def test_panic(self):
        assert "Please report this problem to the plugin author" in str(PanicRequest("foo"))

    def test_unknown_emitter(self):
        error = UnknownEmitter("foo", "window")

        assert error.who == "window"
        assert isinstance(error, ValueError)
        assert str(error) == "Unknown hook listener 'window'"

    def test_registration_conflict(self):
        error = RegistrationConflict("Mode", "EASY")

        assert str(error) == "Mode 'EASY' is already registered"
        assert error.kind == "Mode"
        assert error.name == "EASY"

    def test_illegal_transition_keeps_status(self):
        error = IllegalTransition("foo", PluginStatus.DISABLING, "Still disabling plugin foo")

        assert error.status is PluginStatus.DISABLING
        assert str(error) == "Still disabling plugin foo"
