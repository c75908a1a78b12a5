"""Runtime plugin activation helpers."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
import os
from pathlib import Path
from typing import Iterator

from changepack.plugins.base import PLUGIN_CONFIG_ENV_VAR
from changepack.plugins.loader import load_plugin_manager_from_file
from changepack.plugins.manager import PluginManager

_ACTIVE_MANAGER: ContextVar[PluginManager | None] = ContextVar(
    "changepack_active_plugin_manager",
    default=None,
)
_NO_PLUGINS = PluginManager(plugins=())
_env_managers: dict[str, PluginManager] = {}


def get_active_plugin_manager() -> PluginManager:
    """Context override first, then ``CHANGEKIT_PLUGIN_CONFIG``, else no plugins."""
    manager = _ACTIVE_MANAGER.get()
    if manager is not None:
        return manager

    config_path = os.getenv(PLUGIN_CONFIG_ENV_VAR, "").strip()
    if not config_path:
        return _NO_PLUGINS

    if config_path not in _env_managers:
        _env_managers[config_path] = load_plugin_manager_from_file(config_path)
    return _env_managers[config_path]


@contextmanager
def use_plugin_manager(manager: PluginManager) -> Iterator[PluginManager]:
    """Activate a plugin manager for the current context."""
    token = _ACTIVE_MANAGER.set(manager)
    try:
        yield manager
    finally:
        _ACTIVE_MANAGER.reset(token)


@contextmanager
def use_plugins_from_config(path: str | Path) -> Iterator[PluginManager]:
    """Load plugins from a config file and activate them in the current context."""
    with use_plugin_manager(load_plugin_manager_from_file(path)) as manager:
        yield manager


def reset_plugin_runtime_cache() -> None:
    """Forget managers loaded from the environment (for tests)."""
    _env_managers.clear()
