"""
Host application context.

Owns the objects that are shared by every session of one host: the plugin
registry, the mode registry and the default key mappings. Passing the
context explicitly replaces module-level singletons.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..core.config import Settings, get_settings
from ..plugins.registry import PluginRegistry
from .document import Document, Session
from .keys import DefaultKeyMappings
from .modes import ModeRegistry


@dataclass
class HostContext:
    registry: PluginRegistry = field(default_factory=PluginRegistry)
    modes: ModeRegistry = field(default_factory=ModeRegistry)
    default_mappings: DefaultKeyMappings = field(default_factory=DefaultKeyMappings)
    settings: Settings = field(default_factory=get_settings)

    def new_session(self, document: Optional[Document] = None) -> Session:
        """Create a session over *document* (a fresh one if omitted)."""
        return Session(self, document if document is not None else Document())
