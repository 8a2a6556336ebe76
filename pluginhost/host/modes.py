import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..domain.errors import RegistrationConflict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModeMetadata:
    """Description of an editing mode a plugin can contribute."""

    name: str
    description: str = ""
    cursor_between: bool = False
    within_row: bool = False
    hotkey_type: str = "normal"


@dataclass
class Mode:
    """A registered mode. ``id`` is assigned by the registry."""

    id: int
    metadata: ModeMetadata

    @property
    def name(self) -> str:
        return self.metadata.name


class ModeRegistry:
    """Host-wide table of editing modes, keyed by mode name."""

    def __init__(self) -> None:
        self._modes: Dict[str, Mode] = {}
        self._next_id = 1

    def register(self, metadata: ModeMetadata) -> Mode:
        """
        Register a mode.

        Raises:
            RegistrationConflict: If a mode with the same name exists
        """
        if metadata.name in self._modes:
            raise RegistrationConflict("Mode", metadata.name)
        mode = Mode(id=self._next_id, metadata=metadata)
        self._next_id += 1
        self._modes[metadata.name] = mode
        logger.debug(f"Registered mode: {metadata.name} (id={mode.id})")
        return mode

    def deregister(self, metadata: ModeMetadata) -> None:
        """
        Remove a previously registered mode.

        Raises:
            KeyError: If no mode with that name is registered
        """
        if metadata.name not in self._modes:
            raise KeyError(f"Mode '{metadata.name}' is not registered")
        del self._modes[metadata.name]
        logger.debug(f"Deregistered mode: {metadata.name}")

    def get(self, name: str) -> Optional[Mode]:
        return self._modes.get(name)

    def names(self) -> List[str]:
        return list(self._modes.keys())
