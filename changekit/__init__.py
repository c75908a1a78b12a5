"""Stable public API surface for ChangeKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from typing import Any, Mapping

from changepack import __version__
from changepack.changeset import (
    Additions,
    Changes,
    Changeset,
    Modifications,
    PureChanges,
    PureChangeset,
    Removals,
)
from changepack.core import (
    Add,
    Change,
    ChangesetError,
    ChangesetInvariantError,
    Different,
    Diffable,
    DiffStrategy,
    Equal,
    HasChanges,
    Modify,
    PureChange,
    Remove,
    UnsupportedStrategyError,
)
from changepack.diff import (
    ArbitraryStrategy,
    SimpleStrategy,
    diff_with,
    map_value_diff,
    nested_scopes,
    register_strategy,
    resolve_strategy,
    with_sorted_keys,
)
from changepack.diff import scopes
from changepack.differs import MapChangeset, SetChangeset, diff_sets
from changepack.differs import diff_maps as _diff_maps

__all__ = [
    "__version__",
    "Add",
    "Remove",
    "Modify",
    "Change",
    "PureChange",
    "Equal",
    "Different",
    "HasChanges",
    "Diffable",
    "DiffStrategy",
    "PureChangeset",
    "Changeset",
    "MapChangeset",
    "SetChangeset",
    "Additions",
    "Removals",
    "Modifications",
    "PureChanges",
    "Changes",
    "SimpleStrategy",
    "ArbitraryStrategy",
    "scopes",
    "map_value_diff",
    "nested_scopes",
    "register_strategy",
    "resolve_strategy",
    "ChangesetError",
    "UnsupportedStrategyError",
    "ChangesetInvariantError",
    "diff_with",
    "diff_maps",
    "diff_sets",
]


def diff_maps(
    source: Mapping[Any, Any],
    target: Mapping[Any, Any],
    strategy: str | DiffStrategy | None = None,
    *,
    sort_keys: bool = False,
) -> MapChangeset:
    """Diff two mappings without lifecycle hooks.

    ``strategy`` is resolved the same way as for ``diff_with``: a strategy
    object, a registered name, or None for the default recursive scope.
    """
    resolved = resolve_strategy(strategy)
    if sort_keys:
        resolved = with_sorted_keys(resolved)
    return _diff_maps(source, target, resolved, sort_keys=sort_keys)
