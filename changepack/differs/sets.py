"""Membership differ for set collections."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import AbstractSet, Any, ClassVar, Iterable

from changepack.changeset.base import PureChangeset
from changepack.core.change import Add, Remove
from changepack.core.types import CollectionKind
from changepack.differs.ordering import deterministic_order

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SetChangeset(PureChangeset):
    """Changeset of two sets.

    Elements have no sub-structure to recurse into, so there is no
    ``modified`` bucket and ``modifications()`` is always empty. Each
    element is reported as both key and value.
    """

    kind: ClassVar[CollectionKind] = "set"

    modified: ClassVar[tuple[()]] = ()


def diff_sets(
    source: AbstractSet[Any],
    target: AbstractSet[Any],
    *,
    sort_keys: bool = False,
) -> SetChangeset:
    """Diff two sets with their native difference operation.

    Buckets follow set iteration order, which depends on hashing; pass
    ``sort_keys=True`` for a stable order across runs.
    """
    only_target: Iterable[Any] = target - source
    only_source: Iterable[Any] = source - target
    if sort_keys:
        only_target = deterministic_order(only_target)
        only_source = deterministic_order(only_source)
    added = tuple(Add(item, item) for item in only_target)
    removed = tuple(Remove(item, item) for item in only_source)

    logger.debug("diffed sets added=%d removed=%d", len(added), len(removed))
    return SetChangeset(source=source, target=target, added=added, removed=removed)
