"""In-process event emitter with listener and hook support.

Listeners observe events; hooks transform a value. Both are keyed by event
name. A failing listener logs the error but does not prevent remaining
listeners from running.
"""

import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]
# A hook receives the current value and an info dict and returns the new value
Hook = Callable[[Any, Dict[str, Any]], Any]


class EventEmitter:
    """Simple synchronous publish/subscribe primitive."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}
        self._hooks: Dict[str, List[Hook]] = {}

    # === Listeners ===

    def on(self, event: str, listener: Listener) -> None:
        """Register *listener* for *event*."""
        self._listeners.setdefault(event, []).append(listener)

    def once(self, event: str, listener: Listener) -> None:
        """Register *listener* for the next *event* only."""

        def _once(*args: Any) -> Any:
            self.off(event, _once)
            return listener(*args)

        self.on(event, _once)

    def off(self, event: str, listener: Listener) -> None:
        """Remove one registration of *listener* for *event*.

        Raises:
            ValueError: If the listener is not registered for the event
        """
        listeners = self._listeners.get(event, [])
        listeners.remove(listener)
        if not listeners:
            self._listeners.pop(event, None)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str, *args: Any) -> None:
        """Dispatch *args* to all listeners registered for *event*."""
        for listener in list(self._listeners.get(event, [])):
            try:
                listener(*args)
            except Exception:
                logger.exception(
                    "Listener %s failed for %s",
                    getattr(listener, "__name__", listener),
                    event,
                )

    # === Hooks ===

    def add_hook(self, event: str, transform: Hook) -> None:
        """Register a transform *hook* for *event*."""
        self._hooks.setdefault(event, []).append(transform)

    def remove_hook(self, event: str, transform: Hook) -> None:
        """Remove one registration of *transform* for *event*.

        Raises:
            ValueError: If the hook is not registered for the event
        """
        hooks = self._hooks.get(event, [])
        hooks.remove(transform)
        if not hooks:
            self._hooks.pop(event, None)

    def hook_count(self, event: str) -> int:
        return len(self._hooks.get(event, []))

    def apply_hook(self, event: str, obj: Any, info: Dict[str, Any]) -> Any:
        """Fold every hook registered for *event* over *obj*, in order."""
        for transform in list(self._hooks.get(event, [])):
            obj = transform(obj, info)
        return obj
