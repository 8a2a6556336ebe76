"""
Application configuration using Pydantic Settings.

Centralizes runtime configuration with environment variable support.
"""

from functools import lru_cache
from typing import Optional, Set

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Plugin host settings with environment variable support."""

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_to_file: bool = False

    # Plugin discovery
    plugins_dir: str = "./plugins"
    # Comma-separated plugin names; empty means every discovered plugin loads
    plugin_allowlist: Optional[str] = None

    class Config:
        env_prefix = "PLUGINHOST_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    def allowlist(self) -> Set[str]:
        """Return the parsed plugin allowlist (empty set when unrestricted)."""
        if not self.plugin_allowlist or not self.plugin_allowlist.strip():
            return set()
        return {s.strip() for s in self.plugin_allowlist.split(",") if s.strip()}


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
