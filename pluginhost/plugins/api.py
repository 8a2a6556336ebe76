"""
The capability object handed to a plugin while it is enabled.

Every ``register_*`` call performs its effect on a host subsystem and then
pushes a Registration whose ``dispose()`` performs the exact inverse.
``deregister_all()`` disposes them newest-first, which is how both the
default disable and well-behaved custom disables unwind a plugin.

An explicit ``deregister_*`` call undoes one registration early and drops
its entry from the stack, so ``deregister_all()`` never undoes it twice.

A PluginApi is minted per enable call and never reused across a
disable/re-enable cycle.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Hashable, List, Optional, Tuple, Union

from ..domain.errors import PanicRequest, UnknownEmitter
from ..host.emitter import EventEmitter, Hook, Listener
from ..host.keys import Action, ActionDefinition, HotkeyMapping, Motion, MotionDefinition
from ..host.modes import Mode, ModeMetadata
from ..utils.logging import get_plugin_logger
from .base import Emitter, PluginDefinition

if TYPE_CHECKING:
    from ..host.document import Row, Session
    from .manager import PluginManager

logger = logging.getLogger(__name__)

RegistrationKey = Tuple[Hashable, ...]


class Registration:
    """Disposer handle for one capability registration."""

    def __init__(
        self,
        description: str,
        undo: Callable[[], None],
        key: Optional[RegistrationKey] = None,
    ) -> None:
        self.description = description
        self.key = key
        self._undo = undo

    def dispose(self) -> None:
        self._undo()

    def __repr__(self) -> str:
        return f"<Registration {self.description}>"


class PluginApi:
    """Per-plugin, per-session handle onto the host's extension points."""

    def __init__(
        self,
        session: "Session",
        definition: PluginDefinition,
        manager: "PluginManager",
    ) -> None:
        self.session = session
        self.metadata = definition.metadata
        self.name = definition.name
        self._manager = manager
        self.document = session.document
        self.cursor = session.cursor
        self.logger = get_plugin_logger(self.name)

        self._context = session.context
        self._definitions = session.bindings.definitions

        self._registrations: List[Registration] = []

    @property
    def registrations(self) -> Tuple[Registration, ...]:
        """Snapshot of the undo stack, oldest first."""
        return tuple(self._registrations)

    def _push(self, description: str, key: RegistrationKey, undo: Callable[[], None]) -> None:
        self._registrations.append(Registration(description, undo, key))

    def _forget(self, key: RegistrationKey) -> None:
        """Drop the newest registration with *key* after an explicit deregister."""
        for index in range(len(self._registrations) - 1, -1, -1):
            if self._registrations[index].key == key:
                del self._registrations[index]
                return

    # === Data storage ===

    async def set_data(self, key: str, value: Any) -> None:
        return await self.document.store.set_plugin_data(self.name, key, value)

    async def get_data(self, key: str, default: Any = None) -> Any:
        return await self.document.store.get_plugin_data(self.name, key, default)

    async def updated_data_for_render(self, row: "Row") -> None:
        """Mark *row* for re-rendering after this plugin's data for it changed."""
        await self.document.update_cached_plugin_data(row)

    # === Modes ===

    def register_mode(self, metadata: ModeMetadata) -> Mode:
        mode = self._context.modes.register(metadata)
        self._push(
            f"mode {metadata.name}",
            ("mode", metadata.name),
            lambda: self._context.modes.deregister(metadata),
        )
        return mode

    def deregister_mode(self, metadata: ModeMetadata) -> None:
        self._context.modes.deregister(metadata)
        self._forget(("mode", metadata.name))

    # === Default key mappings ===

    def register_default_mappings(self, mode: str, mappings: HotkeyMapping) -> None:
        self._context.default_mappings.register_mode_mappings(mode, mappings)
        self._push(
            f"mappings {mode}",
            ("mappings", mode, tuple(sorted(mappings))),
            lambda: self._context.default_mappings.deregister_mode_mappings(mode, mappings),
        )

    def deregister_default_mappings(self, mode: str, mappings: HotkeyMapping) -> None:
        self._context.default_mappings.deregister_mode_mappings(mode, mappings)
        self._forget(("mappings", mode, tuple(sorted(mappings))))

    # === Motions and actions ===

    def register_motion(
        self, name: str, description: str, definition: MotionDefinition
    ) -> Motion:
        motion = Motion(name, description, definition)
        self._definitions.register_motion(motion)
        self._push(
            f"motion {name}",
            ("motion", name),
            lambda: self._definitions.deregister_motion(name),
        )
        return motion

    def deregister_motion(self, name: str) -> None:
        self._definitions.deregister_motion(name)
        self._forget(("motion", name))

    def register_action(
        self,
        name: str,
        description: str,
        definition: ActionDefinition,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Action:
        action = Action(name, description, definition, dict(metadata or {}))
        self._definitions.register_action(action)
        self._push(
            f"action {name}",
            ("action", name),
            lambda: self._definitions.deregister_action(name),
        )
        return action

    def deregister_action(self, name: str) -> None:
        self._definitions.deregister_action(name)
        self._forget(("action", name))

    # === Listeners and hooks ===

    def _get_emitter(self, who: Union[Emitter, str]) -> EventEmitter:
        try:
            target = Emitter(who)
        except ValueError:
            raise UnknownEmitter(self.name, who) from None
        if target is Emitter.DOCUMENT:
            return self.document
        return self.session

    def register_listener(
        self, who: Union[Emitter, str], event: str, listener: Listener
    ) -> None:
        emitter = self._get_emitter(who)
        emitter.on(event, listener)
        self._push(
            f"listener {Emitter(who).value}:{event}",
            ("listener", Emitter(who), event, listener),
            lambda: emitter.off(event, listener),
        )

    def deregister_listener(
        self, who: Union[Emitter, str], event: str, listener: Listener
    ) -> None:
        emitter = self._get_emitter(who)
        emitter.off(event, listener)
        self._forget(("listener", Emitter(who), event, listener))

    def register_hook(self, who: Union[Emitter, str], event: str, transform: Hook) -> None:
        emitter = self._get_emitter(who)
        emitter.add_hook(event, transform)
        self._push(
            f"hook {Emitter(who).value}:{event}",
            ("hook", Emitter(who), event, transform),
            lambda: self._remove_hook(emitter, event, transform),
        )
        # a hook can change plugin data for every row
        self.document.cache.clear()

    def deregister_hook(self, who: Union[Emitter, str], event: str, transform: Hook) -> None:
        self._remove_hook(self._get_emitter(who), event, transform)
        self._forget(("hook", Emitter(who), event, transform))

    def _remove_hook(self, emitter: EventEmitter, event: str, transform: Hook) -> None:
        emitter.remove_hook(event, transform)
        self.document.cache.clear()

    # === Teardown ===

    def deregister_all(self) -> None:
        """Dispose every registration made through this api, newest first.

        Safe to call repeatedly. If a disposer raises, the error propagates
        and the registrations older than it remain on the stack.
        """
        if self._registrations:
            logger.debug(
                f"Unwinding {len(self._registrations)} registrations for plugin {self.name}"
            )
        while self._registrations:
            registration = self._registrations.pop()
            registration.dispose()

    async def panic(self) -> None:
        """Declare this plugin broken. Always raises PanicRequest."""
        # TODO: disable the plugin through self._manager before raising once
        # hosts can handle a plugin disappearing mid-operation
        raise PanicRequest(self.name)

    def __repr__(self) -> str:
        return (
            f"<PluginApi plugin={self.name!r} "
            f"registrations={len(self._registrations)}>"
        )
