"""
Plugin runtime.

Usage:
    from pluginhost.host import HostContext
    from pluginhost.plugins import PluginManager

    context = HostContext()
    context.registry.register({"name": "word-count"}, enable, disable)

    session = context.new_session()
    manager = PluginManager(session)
    await manager.enable("word-count")
    await manager.disable("word-count")

Plugin authors receive a PluginApi in their enable function and register
modes, mappings, motions, actions, listeners and hooks through it. Every
registration is undone by ``api.deregister_all()``.
"""

from .api import PluginApi, Registration
from .base import (
    Emitter,
    PluginDefinition,
    PluginInstanceInfo,
    PluginMetadata,
    PluginStatus,
)
from .registry import PluginRegistry
from .manager import PluginManager
from .loader import discover_plugins, load_configured_plugins, load_plugins

__all__ = [
    "Emitter",
    "PluginApi",
    "PluginDefinition",
    "PluginInstanceInfo",
    "PluginManager",
    "PluginMetadata",
    "PluginRegistry",
    "PluginStatus",
    "Registration",
    "discover_plugins",
    "load_configured_plugins",
    "load_plugins",
]
