"""Named strategy registry and resolution."""

from __future__ import annotations

from changepack.core.exceptions import UnsupportedStrategyError
from changepack.core.protocols import DiffStrategy
from changepack.diff.scopes import Arbitrary, Base, Simple, Strict, map_value_diff, nested_scopes

_LEVEL_SEPARATOR = ">"

_REGISTRY: dict[str, DiffStrategy] = {
    "simple": Simple,
    "arbitrary": Arbitrary,
    "strict": Strict,
    "arbitrarily": map_value_diff.Arbitrarily,
    "simply": map_value_diff.Simply,
}


def register_strategy(name: str, strategy: DiffStrategy, *, replace: bool = False) -> None:
    """Register a strategy preset under ``name``."""
    key = _normalize_name(name)
    if not key or _LEVEL_SEPARATOR in key:
        raise UnsupportedStrategyError(f"invalid strategy name: {name!r}")
    if key in _REGISTRY and not replace:
        raise UnsupportedStrategyError(f"strategy already registered: {key}")
    _validate_strategy(strategy)
    _REGISTRY[key] = strategy


def list_strategies() -> list[tuple[str, str]]:
    """Registered ``(name, result shape)`` pairs, sorted by name."""
    return [(name, _REGISTRY[name].describe_shape()) for name in sorted(_REGISTRY)]


def resolve_strategy(strategy: str | DiffStrategy | None) -> DiffStrategy:
    """Resolve a strategy object, a registered name, or None for the default.

    Names may chain levels with ``>``, e.g. ``"arbitrarily>simply"``.
    """
    if strategy is None:
        return Base

    if isinstance(strategy, str):
        names = [_normalize_name(part) for part in strategy.split(_LEVEL_SEPARATOR)]
        levels = [_lookup(name) for name in names]
        if len(levels) == 1:
            return levels[0]
        return nested_scopes(*levels)

    _validate_strategy(strategy)
    return strategy


def _lookup(name: str) -> DiffStrategy:
    try:
        return _REGISTRY[name]
    except KeyError as error:
        known = ", ".join(sorted(_REGISTRY))
        raise UnsupportedStrategyError(
            f"unknown strategy {name!r}; expected one of: {known}"
        ) from error


def _validate_strategy(strategy: object) -> None:
    if not isinstance(strategy, DiffStrategy):
        raise UnsupportedStrategyError(
            f"{type(strategy).__name__} does not implement the diff strategy interface "
            "(name, describe_shape, supports, compare, has_changes)"
        )


def _normalize_name(name: str) -> str:
    return name.strip().lower()
