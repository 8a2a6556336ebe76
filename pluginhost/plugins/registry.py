"""
Plugin registry: the catalog of plugin definitions known to a host.

The registry is an explicit object owned by the host context and shared
by every session's PluginManager. It is write-once-per-name in practice;
registering a name again silently replaces the earlier definition.
"""

import logging
import weakref
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from ..domain.errors import OnlineDisableUnsupported
from .base import PluginDefinition, PluginDisableFn, PluginEnableFn, PluginMetadata

if TYPE_CHECKING:
    from .api import PluginApi

logger = logging.getLogger(__name__)


def make_default_disable(plugin_name: str) -> PluginDisableFn:
    """
    Build the disable function used when a plugin does not supply one.

    It unwinds everything the plugin registered through *api* (at most once
    per api) and then always raises OnlineDisableUnsupported, telling the
    host that a full reload is needed to finish disabling.
    """
    unwound: "weakref.WeakSet[PluginApi]" = weakref.WeakSet()

    def default_disable(api: "PluginApi", value: Any = None) -> None:
        if api not in unwound:
            unwound.add(api)
            api.deregister_all()
        raise OnlineDisableUnsupported(plugin_name)

    return default_disable


class PluginRegistry:
    """Mapping from plugin name to its immutable definition."""

    def __init__(self) -> None:
        self._plugins: Dict[str, PluginDefinition] = {}

    def register(
        self,
        metadata: Union[PluginMetadata, Mapping[str, Any]],
        enable: PluginEnableFn,
        disable: Optional[PluginDisableFn] = None,
    ) -> PluginDefinition:
        """
        Register (or replace) a plugin definition.

        Args:
            metadata: PluginMetadata or a mapping with ``name`` and optional
                ``version``, ``author`` and ``description``
            enable: Called with a fresh PluginApi; its (awaited) result is
                kept as the plugin's value while enabled
            disable: Called with the api and value; defaults to a function
                that unwinds all registrations and then raises

        Returns:
            The stored PluginDefinition
        """
        if not isinstance(metadata, PluginMetadata):
            metadata = PluginMetadata(**dict(metadata))

        name = metadata.name
        definition = PluginDefinition(
            name=name,
            version=metadata.version or 1,
            author=metadata.author or "anonymous",
            description=metadata.description or "",
            enable=enable,
            disable=disable or make_default_disable(name),
        )

        if name in self._plugins:
            logger.debug(f"Replacing existing definition for plugin {name}")
        self._plugins[name] = definition
        logger.debug(f"Registered plugin: {name} v{definition.version}")
        return definition

    def all(self) -> Dict[str, PluginDefinition]:
        """Get a copy of all registered definitions."""
        return self._plugins.copy()

    def get(self, name: str) -> Optional[PluginDefinition]:
        return self._plugins.get(name)

    def names(self) -> List[str]:
        """Registered plugin names, sorted."""
        return sorted(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)
