"""
Document and session objects the plugin runtime attaches to.

These are intentionally thin in-memory implementations: a persistent
per-plugin key-value store, a per-row cache of derived plugin data, and
the Document/Session emitters plugins subscribe to.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from .emitter import EventEmitter
from .keys import KeyBindings

if TYPE_CHECKING:
    from .context import HostContext

logger = logging.getLogger(__name__)

Row = int

PLUGIN_ROW_CONTENTS_HOOK = "pluginRowContents"


class PluginDataStore:
    """Key-value storage namespaced by plugin name."""

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}

    async def set_plugin_data(self, plugin_name: str, key: str, value: Any) -> None:
        self._data.setdefault(plugin_name, {})[key] = value

    async def get_plugin_data(
        self, plugin_name: str, key: str, default: Any = None
    ) -> Any:
        return self._data.get(plugin_name, {}).get(key, default)


class RowCache:
    """Derived per-row plugin data. Cleared whenever a hook may change it."""

    def __init__(self) -> None:
        self._plugin_data: Dict[Row, Any] = {}

    def get_plugin_data(self, row: Row) -> Any:
        return self._plugin_data.get(row)

    def set_plugin_data(self, row: Row, data: Any) -> None:
        self._plugin_data[row] = data

    def clear(self) -> None:
        self._plugin_data.clear()
        logger.debug("Row cache cleared")

    def __len__(self) -> int:
        return len(self._plugin_data)


class Document(EventEmitter):
    """A document: emitter plus plugin data store and row cache."""

    def __init__(
        self,
        store: Optional[PluginDataStore] = None,
        cache: Optional[RowCache] = None,
    ) -> None:
        super().__init__()
        self.store = store if store is not None else PluginDataStore()
        self.cache = cache if cache is not None else RowCache()
        self._text: Dict[Row, str] = {}

    def get_text(self, row: Row) -> str:
        return self._text.get(row, "")

    def set_text(self, row: Row, text: str) -> None:
        self._text[row] = text
        self.emit("rowChange", row)

    async def update_cached_plugin_data(self, row: Row) -> Any:
        """Recompute the plugin data for *row* and notify renderers."""
        data = self.apply_hook(
            PLUGIN_ROW_CONTENTS_HOOK, {}, {"row": row, "text": self.get_text(row)}
        )
        self.cache.set_plugin_data(row, data)
        self.emit("rowChange", row)
        return data


@dataclass
class Cursor:
    row: Row = 0
    col: int = 0


class Session(EventEmitter):
    """One editing session over a document, owned by a host context."""

    def __init__(
        self,
        context: "HostContext",
        document: Document,
        bindings: Optional[KeyBindings] = None,
        cursor: Optional[Cursor] = None,
    ) -> None:
        super().__init__()
        self.context = context
        self.document = document
        self.bindings = bindings or KeyBindings()
        self.cursor = cursor or Cursor()
