"""Diff strategies, scopes and the generic entry point."""

from changepack.diff.engine import collection_kind, diff_with
from changepack.diff.registry import list_strategies, register_strategy, resolve_strategy
from changepack.diff.scopes import (
    Arbitrary,
    Base,
    MapValueScopes,
    Simple,
    Strict,
    map_value_diff,
    nested_scopes,
)
from changepack.diff.strategies import (
    ArbitraryStrategy,
    SimpleStrategy,
    structural_kind,
    with_sorted_keys,
)

__all__ = [
    "diff_with",
    "collection_kind",
    "SimpleStrategy",
    "ArbitraryStrategy",
    "structural_kind",
    "with_sorted_keys",
    "Simple",
    "Arbitrary",
    "Strict",
    "Base",
    "MapValueScopes",
    "map_value_diff",
    "nested_scopes",
    "register_strategy",
    "resolve_strategy",
    "list_strategies",
]
