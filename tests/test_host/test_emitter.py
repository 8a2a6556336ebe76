"""
Tests for the in-process event emitter.
"""

from unittest.mock import MagicMock

import pytest

from pluginhost.host import EventEmitter


class TestListeners:
    """Tests for on/once/off/emit."""

    def test_emit_calls_listeners_in_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("change", lambda value: calls.append(("a", value)))
        emitter.on("change", lambda value: calls.append(("b", value)))

        emitter.emit("change", 1)

        assert calls == [("a", 1), ("b", 1)]

    def test_emit_without_listeners(self):
        EventEmitter().emit("nothing", 1, 2)

    def test_off_removes_listener(self):
        emitter = EventEmitter()
        listener = MagicMock()
        emitter.on("change", listener)

        emitter.off("change", listener)
        emitter.emit("change")

        listener.assert_not_called()
        assert emitter.listener_count("change") == 0

    def test_off_unknown_listener_raises(self):
        with pytest.raises(ValueError):
            EventEmitter().off("change", MagicMock())

    def test_once(self):
        emitter = EventEmitter()
        listener = MagicMock()
        emitter.once("change", listener)

        emitter.emit("change", 1)
        emitter.emit("change", 2)

        listener.assert_called_once_with(1)

    def test_failing_listener_does_not_stop_others(self, caplog):
        emitter = EventEmitter()
        second = MagicMock()

        def broken(*args):
            raise RuntimeError("listener failed")

        emitter.on("change", broken)
        emitter.on("change", second)

        emitter.emit("change", 1)

        second.assert_called_once_with(1)
        assert "listener failed" in caplog.text


class TestHooks:
    """Tests for add_hook/remove_hook/apply_hook."""

    def test_apply_hook_folds_in_order(self):
        emitter = EventEmitter()
        emitter.add_hook("render", lambda obj, info: obj + [info["tag"]])
        emitter.add_hook("render", lambda obj, info: obj + ["second"])

        assert emitter.apply_hook("render", [], {"tag": "first"}) == ["first", "second"]

    def test_apply_hook_without_hooks_returns_input(self):
        obj = {"a": 1}

        assert EventEmitter().apply_hook("render", obj, {}) is obj

    def test_remove_hook(self):
        emitter = EventEmitter()
        hook = MagicMock(side_effect=lambda obj, info: obj)
        emitter.add_hook("render", hook)

        emitter.remove_hook("render", hook)
        emitter.apply_hook("render", {}, {})

        hook.assert_not_called()
        assert emitter.hook_count("render") == 0

    def test_remove_unknown_hook_raises(self):
        with pytest.raises(ValueError):
            EventEmitter().remove_hook("render", MagicMock())
