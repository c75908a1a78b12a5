"""Value comparison strategies used by the map differ."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import AbstractSet, Any, Literal, Mapping

from changepack.core.change import Different, Equal, Modification
from changepack.core.exceptions import UnsupportedStrategyError
from changepack.core.protocols import Diffable, DiffStrategy, HasChanges
from changepack.core.types import ChangeShape
from changepack.differs.mapping import diff_maps
from changepack.differs.sets import diff_sets

StructuralKind = Literal["diffable", "map", "set"]


@dataclass(frozen=True, slots=True)
class SimpleStrategy:
    """Leaf comparison by equality; never looks inside the values."""

    name: str = "simple"

    def describe_shape(self) -> ChangeShape:
        return "modification"

    def supports(self, source: Any, target: Any) -> bool:
        return True

    def compare(self, source: Any, target: Any) -> Modification:
        if source == target:
            return Equal(source)
        return Different(source, target)

    def has_changes(self, result: HasChanges) -> bool:
        return result.has_changes()


@dataclass(frozen=True, slots=True)
class ArbitraryStrategy:
    """Recursive comparison for values that are themselves diffable.

    Mappings are diffed with the map differ using ``nested`` for their own
    values (this strategy again when unset, so recursion goes all the way
    down), sets with the set differ, and objects exposing ``diff_with`` are
    asked to diff themselves. Anything else bottoms out at ``leaf`` unless
    ``strict`` is set, in which case such pairs are unsupported.
    """

    name: str = "arbitrary"
    nested: DiffStrategy | None = None
    leaf: DiffStrategy = SimpleStrategy()
    strict: bool = False
    sort_keys: bool = False

    def describe_shape(self) -> ChangeShape:
        # Decomposable pairs yield changesets; leaf pairs still yield the
        # Equal/Different result of ``leaf``.
        return "changeset"

    def supports(self, source: Any, target: Any) -> bool:
        """Whether every value this strategy would reach can be compared.

        Mapping pairs are checked all the way down through the value
        strategy, so a strict scope rejects a nested leaf here rather than
        partway through ``compare``.
        """
        kind = structural_kind(source, target)
        if kind is None:
            return not self.strict and self.leaf.supports(source, target)
        if kind != "map":
            return True
        value_strategy = self._value_strategy()
        if value_strategy is self and not self.strict:
            return True
        return all(
            value_strategy.supports(source[key], target[key])
            for key in source.keys() & target.keys()
        )

    def compare(self, source: Any, target: Any) -> HasChanges:
        kind = structural_kind(source, target)
        if kind == "diffable":
            return source.diff_with(target)
        if kind == "map":
            return diff_maps(source, target, self._value_strategy(), sort_keys=self.sort_keys)
        if kind == "set":
            return diff_sets(source, target, sort_keys=self.sort_keys)
        if self.strict:
            raise UnsupportedStrategyError(
                f"strategy '{self.name}' cannot decompose "
                f"{type(source).__name__} -> {type(target).__name__}"
            )
        return self.leaf.compare(source, target)

    def has_changes(self, result: HasChanges) -> bool:
        return result.has_changes()

    def _value_strategy(self) -> DiffStrategy:
        return self.nested if self.nested is not None else self


def with_sorted_keys(strategy: DiffStrategy) -> DiffStrategy:
    """Copy of ``strategy`` whose nested map and set diffs sort their output."""
    if not isinstance(strategy, ArbitraryStrategy):
        return strategy
    nested = strategy.nested
    if nested is not None:
        nested = with_sorted_keys(nested)
    return replace(strategy, sort_keys=True, nested=nested)


def structural_kind(source: Any, target: Any) -> StructuralKind | None:
    """Return how a value pair can be decomposed, or None for leaves."""
    if isinstance(source, Mapping) and isinstance(target, Mapping):
        return "map"
    if isinstance(source, AbstractSet) and isinstance(target, AbstractSet):
        return "set"
    if isinstance(source, Diffable) and isinstance(target, type(source)):
        return "diffable"
    return None
