"""
Base types for the plugin system.

A plugin is a named pair of functions: ``enable(api)`` attaches behavior to
a session through a PluginApi and returns an opaque value, and
``disable(api, value)`` detaches it again.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Union

if TYPE_CHECKING:
    from .api import PluginApi


class PluginStatus(Enum):
    """Plugin lifecycle states within one session.

    UNREGISTERED is synthetic: it is reported for names with no definition
    and is never stored.
    """

    UNREGISTERED = "unregistered"
    DISABLING = "disabling"
    DISABLED = "disabled"
    ENABLING = "enabling"
    ENABLED = "enabled"


class Emitter(Enum):
    """Collaborator emitters a plugin may attach listeners and hooks to."""

    DOCUMENT = "document"
    SESSION = "session"


PluginEnableFn = Callable[["PluginApi"], Union[Any, Awaitable[Any]]]
PluginDisableFn = Callable[["PluginApi", Any], Union[None, Awaitable[None]]]


@dataclass
class PluginMetadata:
    """
    Plugin metadata supplied at registration.

    Attributes:
        name: Unique plugin identifier (e.g., "easy-motion")
        version: Integer plugin version
        author: Plugin author name
        description: Human-readable description
    """

    name: str
    version: int = 1
    author: str = "anonymous"
    description: str = ""

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Plugin name cannot be empty")


@dataclass(frozen=True)
class PluginDefinition:
    """A registered plugin: metadata plus its enable and disable functions."""

    name: str
    version: int
    author: str
    description: str
    enable: PluginEnableFn
    disable: PluginDisableFn

    @property
    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name=self.name,
            version=self.version,
            author=self.author,
            description=self.description,
        )

    def __repr__(self) -> str:
        return f"<PluginDefinition name={self.name!r} version={self.version}>"


@dataclass
class PluginInstanceInfo:
    """Per-session record for a plugin that is enabled or transitioning."""

    status: PluginStatus
    api: Optional["PluginApi"] = None
    value: Any = None
