"""Changeset aggregates returned by the collection differs.

A changeset holds references into the two collections it was computed from;
it never copies keys or values. Callers must not mutate either input while
the changeset is still in use (``diff_with(..., snapshot=True)`` trades a
deep copy for that guarantee).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from changepack.changeset.iterators import (
    Additions,
    Changes,
    Modifications,
    PureChanges,
    Removals,
)
from changepack.core.change import Add, Modify, Remove
from changepack.core.types import CollectionKind


@dataclass(frozen=True, slots=True)
class PureChangeset:
    """Additions and removals only.

    Used directly for collections whose elements have no sub-structure, so
    ``modifications()`` is always empty.
    """

    kind: ClassVar[CollectionKind]

    source: Any = field(repr=False, compare=False)
    target: Any = field(repr=False, compare=False)
    added: tuple[Add[Any, Any], ...]
    removed: tuple[Remove[Any, Any], ...]

    def is_empty(self) -> bool:
        return not self.added and not self.removed

    def has_changes(self) -> bool:
        return not self.is_empty()

    def additions(self) -> Additions:
        return Additions(self.added)

    def removals(self) -> Removals:
        return Removals(self.removed)

    def modifications(self) -> Modifications:
        return Modifications.empty()

    def pure_changes(self) -> PureChanges:
        return PureChanges(self.additions(), self.removals())

    def changes(self) -> Changes:
        return Changes(self.additions(), self.removals(), self.modifications())


@dataclass(frozen=True, slots=True)
class Changeset(PureChangeset):
    """Additions, removals and modifications of a keyed collection."""

    modified: tuple[Modify[Any, Any], ...] = ()

    def is_empty(self) -> bool:
        return not self.added and not self.removed and not self.modified

    def modifications(self) -> Modifications:
        return Modifications(self.modified)
