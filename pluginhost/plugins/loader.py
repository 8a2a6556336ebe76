"""
Discover on-disk plugins and register them with a PluginRegistry.

Layout of a plugin directory:

    plugins/
      word_count/
        plugin.yaml   name, version, author, description, enabled
        plugin.py     module-level ``enable(api)`` and optional ``disable(api, value)``

Directories starting with "_" are ignored. Loading only registers
definitions; enabling them is up to each session's PluginManager.
"""

import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple, Union

import yaml

from ..core.config import Settings, get_settings
from .base import PluginMetadata
from .registry import PluginRegistry

logger = logging.getLogger(__name__)

MANIFEST_NAME = "plugin.yaml"
MODULE_NAME = "plugin.py"


def _iter_plugin_dirs(plugins_path: Path) -> Iterator[Path]:
    if not plugins_path.exists():
        logger.debug(f"Plugin path does not exist: {plugins_path}")
        return

    for plugin_dir in sorted(plugins_path.iterdir()):
        if not plugin_dir.is_dir() or plugin_dir.name.startswith("_"):
            continue
        if not (plugin_dir / MANIFEST_NAME).exists():
            logger.debug(f"Plugin dir {plugin_dir.name} missing {MANIFEST_NAME}, skipping")
            continue
        yield plugin_dir


def _read_manifest(plugin_dir: Path) -> Dict[str, Any]:
    with open(plugin_dir / MANIFEST_NAME) as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"{MANIFEST_NAME} must contain a mapping")
    config.setdefault("name", plugin_dir.name)
    return config


def discover_plugins(plugins_path: Union[str, Path]) -> List[str]:
    """
    Discover available plugins under *plugins_path*.

    Returns:
        List of plugin names found
    """
    discovered = []
    for plugin_dir in _iter_plugin_dirs(Path(plugins_path)):
        try:
            name = _read_manifest(plugin_dir)["name"]
            discovered.append(name)
            logger.info(f"Discovered plugin: {name} at {plugin_dir}")
        except Exception as e:
            logger.error(f"Error reading {MANIFEST_NAME} in {plugin_dir}: {e}")

    return discovered


def _load_plugin_module(name: str, plugin_dir: Path) -> ModuleType:
    plugin_file = plugin_dir / MODULE_NAME
    spec = importlib.util.spec_from_file_location(f"pluginhost_plugin_{plugin_dir.name}", plugin_file)
    if not spec or not spec.loader:
        raise ImportError(f"Cannot load plugin {name} from {plugin_file}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    if not callable(getattr(module, "enable", None)):
        raise ImportError(f"Plugin {name} does not define an enable(api) function")
    return module


def _load_plugin(registry: PluginRegistry, config: Dict[str, Any], plugin_dir: Path) -> None:
    name = config["name"]
    module = _load_plugin_module(name, plugin_dir)
    metadata = PluginMetadata(
        name=name,
        version=config.get("version", 1),
        author=config.get("author", "anonymous"),
        description=config.get("description", ""),
    )
    disable = getattr(module, "disable", None)
    registry.register(metadata, module.enable, disable if callable(disable) else None)
    logger.info(f"Loaded plugin: {name} v{metadata.version}")


def load_plugins(
    registry: PluginRegistry,
    plugins_path: Union[str, Path],
    allowlist: Optional[Set[str]] = None,
) -> Dict[str, bool]:
    """
    Load every plugin under *plugins_path* into *registry*.

    Args:
        registry: Registry to add definitions to
        plugins_path: Directory containing plugin directories
        allowlist: If non-empty, only plugins named here are loaded

    Returns:
        Dict of plugin_name -> success. Plugins skipped by the allowlist or
        by ``enabled: false`` are not included.
    """
    results: Dict[str, bool] = {}
    skipped: List[Tuple[str, str]] = []  # (name, reason)

    if allowlist:
        logger.info(f"Plugin allowlist active: {sorted(allowlist)}")

    for plugin_dir in _iter_plugin_dirs(Path(plugins_path)):
        try:
            config = _read_manifest(plugin_dir)
        except Exception as e:
            logger.error(f"Error loading plugin config from {plugin_dir}: {e}")
            continue

        name = config["name"]
        if allowlist and name not in allowlist:
            skipped.append((name, "not in allowlist"))
            continue
        if not config.get("enabled", True):
            skipped.append((name, "disabled in config"))
            continue

        try:
            _load_plugin(registry, config, plugin_dir)
            results[name] = True
        except Exception as e:
            logger.error(f"Error loading plugin {name}: {e}", exc_info=True)
            results[name] = False

    if skipped:
        logger.info(
            f"Plugin audit: {len(skipped)} plugin(s) skipped: "
            + ", ".join(f"{n} ({r})" for n, r in skipped)
        )

    loaded = sum(results.values())
    logger.info(f"Loaded {loaded}/{len(results)} plugins")
    return results


def load_configured_plugins(
    registry: PluginRegistry, settings: Optional[Settings] = None
) -> Dict[str, bool]:
    """Load plugins from the directory and allowlist named in settings."""
    settings = settings or get_settings()
    return load_plugins(registry, settings.plugins_dir, settings.allowlist())
