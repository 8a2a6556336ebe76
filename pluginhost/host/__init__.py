"""
Host-side collaborators the plugin runtime attaches to.

These are small in-memory implementations of the document/session model,
the mode registry and the key registries. HostContext ties the host-wide
ones together and is imported last because it depends on the plugin
registry.
"""

from .emitter import EventEmitter, Hook, Listener
from .modes import Mode, ModeMetadata, ModeRegistry
from .keys import Action, DefaultKeyMappings, HotkeyMapping, KeyBindings, KeyDefinitions, Motion
from .document import Cursor, Document, PluginDataStore, Row, RowCache, Session
from .context import HostContext

__all__ = [
    "Action",
    "Cursor",
    "DefaultKeyMappings",
    "Document",
    "EventEmitter",
    "Hook",
    "HostContext",
    "HotkeyMapping",
    "KeyBindings",
    "KeyDefinitions",
    "Listener",
    "Mode",
    "ModeMetadata",
    "ModeRegistry",
    "Motion",
    "PluginDataStore",
    "Row",
    "RowCache",
    "Session",
]
