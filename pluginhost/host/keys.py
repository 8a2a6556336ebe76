"""
Key definitions and default key mappings.

Motions move the cursor, actions change the document. Both are registered
by name with KeyDefinitions. DefaultKeyMappings holds, per mode, which key
sequences trigger which action.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..domain.errors import RegistrationConflict

logger = logging.getLogger(__name__)

MotionDefinition = Callable[..., Any]
ActionDefinition = Callable[..., Any]
# action name -> list of key sequences, e.g. {"move-left": [["h"], ["left"]]}
HotkeyMapping = Dict[str, List[List[str]]]


@dataclass
class Motion:
    name: str
    description: str
    definition: MotionDefinition


@dataclass
class Action:
    name: str
    description: str
    definition: ActionDefinition
    metadata: Dict[str, Any] = field(default_factory=dict)


class KeyDefinitions:
    """Registry of named motions and actions."""

    def __init__(self) -> None:
        self._motions: Dict[str, Motion] = {}
        self._actions: Dict[str, Action] = {}

    def register_motion(self, motion: Motion) -> None:
        """
        Register a motion.

        Raises:
            RegistrationConflict: If a motion with the same name exists
        """
        if motion.name in self._motions:
            raise RegistrationConflict("Motion", motion.name)
        self._motions[motion.name] = motion
        logger.debug(f"Registered motion: {motion.name}")

    def deregister_motion(self, name: str) -> None:
        if name not in self._motions:
            raise KeyError(f"Motion '{name}' is not registered")
        del self._motions[name]
        logger.debug(f"Deregistered motion: {name}")

    def get_motion(self, name: str) -> Optional[Motion]:
        return self._motions.get(name)

    def register_action(self, action: Action) -> None:
        """
        Register an action.

        Raises:
            RegistrationConflict: If an action with the same name exists
        """
        if action.name in self._actions:
            raise RegistrationConflict("Action", action.name)
        self._actions[action.name] = action
        logger.debug(f"Registered action: {action.name}")

    def deregister_action(self, name: str) -> None:
        if name not in self._actions:
            raise KeyError(f"Action '{name}' is not registered")
        del self._actions[name]
        logger.debug(f"Deregistered action: {name}")

    def get_action(self, name: str) -> Optional[Action]:
        return self._actions.get(name)


class DefaultKeyMappings:
    """Per-mode default hotkey mappings shared by every session of a host."""

    def __init__(self) -> None:
        self._mappings: Dict[str, HotkeyMapping] = {}

    def register_mode_mappings(self, mode: str, mappings: HotkeyMapping) -> None:
        """
        Merge *mappings* into the table for *mode*.

        Raises:
            RegistrationConflict: If any action in *mappings* is already mapped
                in that mode. Nothing is merged in that case.
        """
        existing = self._mappings.get(mode, {})
        for action_name in mappings:
            if action_name in existing:
                raise RegistrationConflict("Mapping", f"{mode}:{action_name}")
        if not mappings:
            return
        table = self._mappings.setdefault(mode, {})
        for action_name, sequences in mappings.items():
            table[action_name] = [list(seq) for seq in sequences]
        logger.debug(f"Registered {len(mappings)} default mappings for mode {mode}")

    def deregister_mode_mappings(self, mode: str, mappings: HotkeyMapping) -> None:
        """Remove exactly the actions named in *mappings* from *mode*'s table."""
        table = self._mappings.get(mode, {})
        for action_name in mappings:
            if action_name not in table:
                raise KeyError(f"No default mapping for {action_name} in mode {mode}")
        for action_name in mappings:
            del table[action_name]
        if not table:
            self._mappings.pop(mode, None)
        logger.debug(f"Deregistered {len(mappings)} default mappings for mode {mode}")

    def get(self, mode: str) -> HotkeyMapping:
        """Return a copy of *mode*'s mapping table."""
        return {k: [list(s) for s in v] for k, v in self._mappings.get(mode, {}).items()}

    def modes(self) -> List[str]:
        """Modes that currently have at least one default mapping."""
        return list(self._mappings.keys())


class KeyBindings:
    """Per-session key bindings, backed by a set of key definitions."""

    def __init__(self, definitions: Optional[KeyDefinitions] = None) -> None:
        self.definitions = definitions or KeyDefinitions()
