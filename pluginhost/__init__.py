"""pluginhost: plugin lifecycle and capability-registration runtime."""

__version__ = "0.1.0"
