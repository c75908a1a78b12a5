"""Versioned plugin configuration loader.

Config shape::

    {
      "config_version": 1,
      "plugins": [
        {"entrypoint": "package.module:Factory", "options": {...},
         "enabled": true, "hooks": ["on_diff_end"]}
      ]
    }
"""

from __future__ import annotations

import importlib
import inspect
import json
from pathlib import Path
from typing import Any

from changepack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from changepack.plugins.exceptions import PluginConfigError, PluginLoadError
from changepack.plugins.manager import PluginManager

LIFECYCLE_HOOKS: tuple[str, ...] = ("on_diff_start", "on_diff_end")
_ENTRY_KEYS = frozenset({"entrypoint", "options", "enabled", "hooks"})


def load_plugin_manager_from_file(path: str | Path) -> PluginManager:
    """Load a plugin manager from a JSON config file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise PluginConfigError(f"Plugin config not found: {config_path}") from error
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON ({config_path}): {error}") from error
    return load_plugin_manager(raw, source=str(config_path))


def load_plugin_manager(raw: Any, *, source: str = "<memory>") -> PluginManager:
    """Build a plugin manager from an already-parsed config mapping."""
    if not isinstance(raw, dict):
        raise PluginConfigError(f"Plugin config must be a JSON object ({source}).")

    version = raw.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            f"Unsupported plugin config version {version!r} in {source}; "
            f"expected {PLUGIN_CONFIG_VERSION}."
        )

    entries = raw.get("plugins", [])
    if not isinstance(entries, list):
        raise PluginConfigError("Plugin config key 'plugins' must be a JSON array.")

    plugins: list[object] = []
    seen_names: set[str] = set()
    for index, entry in enumerate(entries, start=1):
        plugin = _build_plugin(entry, index=index)
        if plugin is None:
            continue
        name = str(getattr(plugin, "name", plugin.__class__.__name__))
        if name in seen_names:
            raise PluginConfigError(f"Plugin entry #{index} duplicates plugin name '{name}'.")
        seen_names.add(name)
        plugins.append(plugin)

    return PluginManager(plugins=tuple(plugins))


def _build_plugin(entry: Any, *, index: int) -> object | None:
    if not isinstance(entry, dict):
        raise PluginConfigError(f"Plugin entry #{index} must be a JSON object.")

    unknown = sorted(set(entry) - _ENTRY_KEYS)
    if unknown:
        raise PluginConfigError(
            f"Plugin entry #{index} contains unsupported keys: {', '.join(unknown)}"
        )

    enabled = entry.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(f"Plugin entry #{index} key 'enabled' must be boolean.")
    if not enabled:
        return None

    entrypoint = entry.get("entrypoint")
    if not isinstance(entrypoint, str) or ":" not in entrypoint:
        raise PluginConfigError(
            f"Plugin entry #{index} key 'entrypoint' must be 'module:attribute'."
        )

    options = entry.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(f"Plugin entry #{index} key 'options' must be a JSON object.")

    hooks = _parse_hooks(entry.get("hooks"), index=index)

    target = _resolve_entrypoint(entrypoint, index=index)
    plugin = _instantiate(target, entrypoint=entrypoint, options=options, index=index)
    _check_api_version(plugin, entrypoint=entrypoint, index=index)
    if hooks is None:
        return plugin
    return _HookFilter(plugin=plugin, hooks=hooks)


def _parse_hooks(raw: Any, *, index: int) -> frozenset[str] | None:
    if raw is None:
        return None
    if not isinstance(raw, list) or not all(isinstance(hook, str) for hook in raw):
        raise PluginConfigError(f"Plugin entry #{index} key 'hooks' must be a list of names.")
    unknown = sorted(set(raw) - set(LIFECYCLE_HOOKS))
    if unknown:
        raise PluginConfigError(
            f"Plugin entry #{index} names unknown hooks: {', '.join(unknown)}"
        )
    return frozenset(raw)


def _resolve_entrypoint(entrypoint: str, *, index: int) -> object:
    module_name, _, attribute = entrypoint.partition(":")
    try:
        module = importlib.import_module(module_name)
    except Exception as error:
        raise PluginLoadError(
            f"Plugin entry #{index} failed to import module '{module_name}': {error}"
        ) from error

    target = getattr(module, attribute, None)
    if target is None:
        raise PluginLoadError(
            f"Plugin entry #{index} could not find attribute '{attribute}' in '{module_name}'."
        )
    return target


def _instantiate(
    target: object,
    *,
    entrypoint: str,
    options: dict[str, Any],
    index: int,
) -> object:
    if not (inspect.isclass(target) or callable(target)):
        if options:
            raise PluginLoadError(
                f"Plugin entry #{index} uses non-callable '{entrypoint}' and cannot accept options."
            )
        return target

    try:
        return target(**options)
    except Exception as error:
        raise PluginLoadError(
            f"Plugin entry #{index} failed to instantiate '{entrypoint}' "
            f"with options {sorted(options)}: {error}"
        ) from error


def _check_api_version(plugin: object, *, entrypoint: str, index: int) -> None:
    declared = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    supported_major = PLUGIN_API_VERSION.split(".", 1)[0]
    if declared.split(".", 1)[0] != supported_major:
        raise PluginLoadError(
            f"Plugin entry #{index} '{entrypoint}' declares unsupported api_version "
            f"{declared!r}; supported major version is {supported_major}."
        )


class _HookFilter:
    """Exposes only the configured hooks of a wrapped plugin."""

    def __init__(self, *, plugin: object, hooks: frozenset[str]) -> None:
        self.plugin = plugin
        self.hooks = hooks
        self.name = getattr(plugin, "name", plugin.__class__.__name__)
        self.api_version = getattr(plugin, "api_version", PLUGIN_API_VERSION)

    def __getattr__(self, attribute: str) -> Any:
        if attribute in LIFECYCLE_HOOKS and attribute not in self.hooks:
            raise AttributeError(attribute)
        return getattr(self.plugin, attribute)
