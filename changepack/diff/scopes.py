"""Preset strategy scopes.

The same mapping type may need its values diffed recursively in one place
and by plain equality in another, so the scope is chosen per call rather
than per collection type.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from changepack.core.exceptions import UnsupportedStrategyError
from changepack.core.protocols import DiffStrategy
from changepack.diff.strategies import ArbitraryStrategy, SimpleStrategy

Simple = SimpleStrategy()
Arbitrary = ArbitraryStrategy()
Strict = ArbitraryStrategy(name="strict", strict=True)

# Default scope for calls that do not pick one.
Base = Arbitrary


@dataclass(frozen=True, slots=True)
class MapValueScopes:
    """How the values of a mapping are compared."""

    Arbitrarily: ArbitraryStrategy
    Simply: SimpleStrategy


map_value_diff = MapValueScopes(
    Arbitrarily=ArbitraryStrategy(name="arbitrarily"),
    Simply=SimpleStrategy(name="simply"),
)


def nested_scopes(*levels: DiffStrategy) -> DiffStrategy:
    """Chain value strategies per nesting level, outermost first.

    ``nested_scopes(map_value_diff.Arbitrarily, map_value_diff.Simply)``
    diffs the outer mapping's values recursively and the inner mappings'
    values by equality.
    """
    if not levels:
        raise UnsupportedStrategyError("nested_scopes needs at least one strategy")

    strategy = levels[-1]
    for level in reversed(levels[:-1]):
        if not isinstance(level, ArbitraryStrategy):
            raise UnsupportedStrategyError(
                f"strategy '{level.name}' does not recurse and cannot wrap '{strategy.name}'"
            )
        strategy = replace(level, name=f"{level.name}>{strategy.name}", nested=strategy)
    return strategy
