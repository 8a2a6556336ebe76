"""
Plugin Manager: per-session enable/disable state machine.

    DISABLED  -- enable()  --> ENABLING --> ENABLED
    ENABLED   -- disable() --> DISABLING --> record removed (reads DISABLED)

UNREGISTERED names cannot transition: enable() logs an error and returns,
disable() raises UnregisteredPlugin. Any other call from a state that
forbids it raises IllegalTransition immediately rather than queueing.

Entering ENABLING/DISABLING is an atomic check-and-set, so two concurrent
calls for the same name can never both pass the status check.

Events:
    "status"               after every per-plugin status change (no payload)
    "enabledPluginsChange" after every completed enable/disable, with the
                           list of currently enabled plugin names
"""

import inspect
import logging
import threading
from typing import TYPE_CHECKING, Dict, List, Optional

from ..domain.errors import (
    IllegalTransition,
    InternalConsistencyError,
    UnregisteredPlugin,
)
from ..host.emitter import EventEmitter
from .api import PluginApi
from .base import PluginInstanceInfo, PluginStatus
from .registry import PluginRegistry

if TYPE_CHECKING:
    from ..host.document import Session

logger = logging.getLogger(__name__)

_ENABLE_ERRORS = {
    PluginStatus.ENABLING: "Already enabling plugin {name}",
    PluginStatus.DISABLING: "Still disabling plugin {name}",
    PluginStatus.ENABLED: "Plugin {name} is already enabled",
}

_DISABLE_ERRORS = {
    PluginStatus.ENABLING: "Still enabling plugin {name}",
    PluginStatus.DISABLING: "Already disabling plugin {name}",
    PluginStatus.DISABLED: "Plugin {name} already disabled",
}


class PluginManager(EventEmitter):
    """
    Enables and disables registered plugins for one session.

    Owns the table of live plugin instances (status, api, value). The
    registry is shared; the table is not.
    """

    def __init__(
        self, session: "Session", registry: Optional[PluginRegistry] = None
    ) -> None:
        super().__init__()
        self.session = session
        self.registry = registry if registry is not None else session.context.registry
        self._plugin_infos: Dict[str, PluginInstanceInfo] = {}
        self._transition_lock = threading.Lock()

    def get_info(self, name: str) -> Optional[PluginInstanceInfo]:
        return self._plugin_infos.get(name)

    def get_status(self, name: str) -> PluginStatus:
        if name not in self.registry:
            return PluginStatus.UNREGISTERED
        info = self._plugin_infos.get(name)
        return info.status if info else PluginStatus.DISABLED

    def set_status(self, name: str, status: PluginStatus) -> None:
        logger.debug(f"Plugin {name} status: {status.value}")
        if name not in self.registry:
            raise UnregisteredPlugin(name)
        info = self._plugin_infos.get(name)
        if info is None:
            self._plugin_infos[name] = PluginInstanceInfo(status=status)
        else:
            info.status = status
        self.emit("status")

    def _begin_transition(
        self, name: str, expected: PluginStatus, target: PluginStatus
    ) -> PluginStatus:
        """
        Atomically move *name* from *expected* to *target*.

        Returns:
            The status observed before the swap. The swap only happened if
            that equals *expected*.
        """
        with self._transition_lock:
            current = self.get_status(name)
            if current is expected:
                info = self._plugin_infos.get(name)
                if info is None:
                    self._plugin_infos[name] = PluginInstanceInfo(status=target)
                else:
                    info.status = target
        if current is expected:
            logger.debug(f"Plugin {name} status: {target.value}")
            self.emit("status")
        return current

    def enabled_plugins(self) -> List[str]:
        """Names of plugins currently ENABLED in this session."""
        return [
            name
            for name in self._plugin_infos
            if self.get_status(name) == PluginStatus.ENABLED
        ]

    def update_enabled_plugins(self) -> None:
        self.emit("enabledPluginsChange", self.enabled_plugins())

    async def enable(self, name: str) -> None:
        """
        Enable plugin *name* in this session.

        Raises:
            IllegalTransition: If the plugin is enabling, disabling or enabled
            Exception: Whatever the plugin's enable function raises; partial
                registrations are not rolled back
        """
        status = self._begin_transition(name, PluginStatus.DISABLED, PluginStatus.ENABLING)
        if status == PluginStatus.UNREGISTERED:
            logger.error(f"No plugin registered as {name}")
            return
        if status != PluginStatus.DISABLED:
            raise IllegalTransition(name, status, _ENABLE_ERRORS[status].format(name=name))

        plugin = self.registry.get(name)
        api = PluginApi(self.session, plugin, self)
        value = plugin.enable(api)
        if inspect.isawaitable(value):
            value = await value

        self._plugin_infos[name] = PluginInstanceInfo(
            status=PluginStatus.ENABLING, api=api, value=value
        )
        self.set_status(name, PluginStatus.ENABLED)
        logger.info(f"Enabled plugin: {name} v{plugin.version}")
        self.update_enabled_plugins()

    async def disable(self, name: str) -> None:
        """
        Disable plugin *name* in this session.

        The instance record is removed even if the plugin's disable function
        raises; that exception is then re-raised unchanged.

        Raises:
            UnregisteredPlugin: If no definition exists under *name*
            IllegalTransition: If the plugin is enabling, disabling or disabled
            InternalConsistencyError: If the enabled record is incomplete
        """
        status = self._begin_transition(name, PluginStatus.ENABLED, PluginStatus.DISABLING)
        if status == PluginStatus.UNREGISTERED:
            raise UnregisteredPlugin(name)
        if status != PluginStatus.ENABLED:
            raise IllegalTransition(name, status, _DISABLE_ERRORS[status].format(name=name))

        info = self._plugin_infos.get(name)
        if info is None:
            raise InternalConsistencyError(f"Enabled plugin {name} missing from info?")
        if info.api is None:
            raise InternalConsistencyError(f"Enabled plugin {name} missing api?")
        plugin = self.registry.get(name)
        if plugin is None:
            raise InternalConsistencyError(
                f"Enabled plugin {name} missing from registration?"
            )

        try:
            result = plugin.disable(info.api, info.value)
            if inspect.isawaitable(result):
                await result
        finally:
            self._plugin_infos.pop(name, None)
            logger.info(f"Disabled plugin: {name}")
            self.update_enabled_plugins()

    def get_plugin_status(self) -> Dict[str, Dict[str, object]]:
        """
        Get status of every registered plugin in this session.

        Returns:
            Dict of plugin_name -> status info
        """
        status = {}
        for name in self.registry.names():
            plugin = self.registry.get(name)
            info = self._plugin_infos.get(name)
            status[name] = {
                "status": self.get_status(name).value,
                "version": plugin.version,
                "author": plugin.author,
                "description": plugin.description,
                "registrations": len(info.api.registrations) if info and info.api else 0,
            }
        return status
