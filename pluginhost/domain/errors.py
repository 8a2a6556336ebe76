"""
Typed errors for the plugin runtime.

Ordinary lifecycle failures derive from PluginError so a host can catch and
display them in one place. InternalConsistencyError is deliberately outside
that hierarchy: it signals a host bug, not a plugin or user mistake.
"""

from typing import Any


class PluginError(Exception):
    """Base class for plugin lifecycle errors."""

    def __init__(self, plugin_name: str, message: str) -> None:
        self.plugin_name = plugin_name
        super().__init__(message)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class IllegalTransition(PluginError):
    """enable/disable was called from a status that forbids it."""

    def __init__(self, plugin_name: str, status: Any, message: str) -> None:
        self.status = status
        super().__init__(plugin_name, message)


class UnregisteredPlugin(PluginError):
    """No plugin definition exists under the given name."""

    def __init__(self, plugin_name: str) -> None:
        super().__init__(plugin_name, f"No plugin registered as {plugin_name}")


class OnlineDisableUnsupported(PluginError):
    """Raised by the default disable after unwinding the plugin's registrations."""

    def __init__(self, plugin_name: str) -> None:
        super().__init__(
            plugin_name,
            f"The plugin '{plugin_name}' was disabled but doesn't support "
            "online disable functionality. Refresh to disable.",
        )


class PanicRequest(PluginError):
    """A plugin declared itself broken via PluginApi.panic()."""

    def __init__(self, plugin_name: str) -> None:
        super().__init__(
            plugin_name,
            f"Plugin '{plugin_name}' has encountered a major problem. "
            "Please report this problem to the plugin author.",
        )


# ---------------------------------------------------------------------------
# Capability registration
# ---------------------------------------------------------------------------


class UnknownEmitter(PluginError, ValueError):
    """A listener or hook targeted an emitter other than document/session."""

    def __init__(self, plugin_name: str, who: Any) -> None:
        self.who = who
        super().__init__(plugin_name, f"Unknown hook listener {who!r}")


class RegistrationConflict(PluginError):
    """A host registry rejected a registration (usually a duplicate name)."""

    def __init__(self, kind: str, name: str, plugin_name: str = "") -> None:
        self.kind = kind
        self.name = name
        super().__init__(plugin_name, f"{kind} {name!r} is already registered")


# ---------------------------------------------------------------------------
# Host bugs
# ---------------------------------------------------------------------------


class InternalConsistencyError(RuntimeError):
    """Manager bookkeeping is inconsistent; indicates a host-side bug."""
