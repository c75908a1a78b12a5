"""Key-partitioning differ for mapping collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import chain
import logging
from typing import Any, ClassVar, Hashable, Iterable, Mapping

from changepack.changeset.base import Changeset
from changepack.core.change import Add, Modify, Remove
from changepack.core.exceptions import ChangesetInvariantError, UnsupportedStrategyError
from changepack.core.protocols import DiffStrategy
from changepack.core.types import CollectionKind
from changepack.differs.ordering import deterministic_order

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True, slots=True)
class MapChangeset(Changeset):
    """Changeset of two mappings, compared key by key."""

    kind: ClassVar[CollectionKind] = "map"

    strategy_name: str = field(default="simple", compare=False)


def diff_maps(
    source: Mapping[Any, Any],
    target: Mapping[Any, Any],
    strategy: DiffStrategy,
    *,
    sort_keys: bool = False,
) -> MapChangeset:
    """Diff two mappings in O(n + m) over the key union.

    Keys only in ``target`` become additions, keys only in ``source`` become
    removals, and keys on both sides are compared with ``strategy``; a
    ``Modify`` is kept only when the strategy reports changes.
    """
    added: list[Add[Any, Any]] = []
    removed: list[Remove[Any, Any]] = []
    compared: list[tuple[Any, Any, Any]] = []

    for key in _key_union(source, target, sort_keys=sort_keys):
        source_value = source.get(key, _MISSING)
        target_value = target.get(key, _MISSING)

        if source_value is _MISSING and target_value is _MISSING:
            raise ChangesetInvariantError(
                f"key {key!r} is in the key union but in neither mapping"
            )
        if source_value is _MISSING:
            added.append(Add(key, target_value))
        elif target_value is _MISSING:
            removed.append(Remove(key, source_value))
        else:
            compared.append((key, source_value, target_value))

    _ensure_supported(strategy, compared)

    modified: list[Modify[Any, Any]] = []
    for key, source_value, target_value in compared:
        result = strategy.compare(source_value, target_value)
        if strategy.has_changes(result):
            modified.append(Modify(key, result))

    logger.debug(
        "diffed mappings strategy=%s added=%d removed=%d compared=%d modified=%d",
        strategy.name,
        len(added),
        len(removed),
        len(compared),
        len(modified),
    )
    return MapChangeset(
        source=source,
        target=target,
        added=tuple(added),
        removed=tuple(removed),
        modified=tuple(modified),
        strategy_name=strategy.name,
    )


def _key_union(
    source: Mapping[Any, Any],
    target: Mapping[Any, Any],
    *,
    sort_keys: bool,
) -> Iterable[Hashable]:
    # Source keys first, then target-only keys, each exactly once.
    keys = dict.fromkeys(chain(source.keys(), target.keys()))
    if not sort_keys:
        return keys
    return deterministic_order(keys)


def _ensure_supported(
    strategy: DiffStrategy,
    compared: list[tuple[Any, Any, Any]],
) -> None:
    for key, source_value, target_value in compared:
        if not strategy.supports(source_value, target_value):
            raise UnsupportedStrategyError(
                f"strategy '{strategy.name}' is not defined for values at key {key!r} "
                f"({type(source_value).__name__} -> {type(target_value).__name__})"
            )
