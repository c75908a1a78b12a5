"""Plugin subsystem exceptions."""

from changepack.core.exceptions import ChangesetError


class PluginError(ChangesetError):
    """Base class for plugin subsystem errors."""


class PluginConfigError(PluginError):
    """Plugin config is malformed."""


class PluginLoadError(PluginError):
    """A plugin entrypoint could not be imported or instantiated."""
