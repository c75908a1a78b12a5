"""Plugin subsystem for ChangeKit lifecycle extensions."""

from changepack.plugins.base import (
    PLUGIN_API_VERSION,
    PLUGIN_CONFIG_ENV_VAR,
    PLUGIN_CONFIG_VERSION,
    DiffEndEvent,
    DiffStartEvent,
    LifecyclePlugin,
)
from changepack.plugins.exceptions import PluginConfigError, PluginError, PluginLoadError
from changepack.plugins.loader import (
    LIFECYCLE_HOOKS,
    load_plugin_manager,
    load_plugin_manager_from_file,
)
from changepack.plugins.manager import PluginDiagnostic, PluginManager
from changepack.plugins.reference import ChangeTallyPlugin, LifecycleTracePlugin
from changepack.plugins.runtime import (
    get_active_plugin_manager,
    reset_plugin_runtime_cache,
    use_plugin_manager,
    use_plugins_from_config,
)

__all__ = [
    "PLUGIN_API_VERSION",
    "PLUGIN_CONFIG_VERSION",
    "PLUGIN_CONFIG_ENV_VAR",
    "LIFECYCLE_HOOKS",
    "PluginError",
    "PluginConfigError",
    "PluginLoadError",
    "DiffStartEvent",
    "DiffEndEvent",
    "LifecyclePlugin",
    "PluginDiagnostic",
    "PluginManager",
    "LifecycleTracePlugin",
    "ChangeTallyPlugin",
    "load_plugin_manager",
    "load_plugin_manager_from_file",
    "get_active_plugin_manager",
    "use_plugin_manager",
    "use_plugins_from_config",
    "reset_plugin_runtime_cache",
]
