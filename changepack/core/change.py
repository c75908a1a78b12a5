"""Change vocabulary shared by every differ."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from changepack.core.protocols import HasChanges
from changepack.core.types import ChangeKind

K = TypeVar("K")
V = TypeVar("V")
D = TypeVar("D", bound=HasChanges)


@dataclass(frozen=True, slots=True)
class Add(Generic[K, V]):
    """A value present in the target but not in the source."""

    key: K
    value: V

    @property
    def kind(self) -> ChangeKind:
        return "add"


@dataclass(frozen=True, slots=True)
class Remove(Generic[K, V]):
    """A value present in the source but not in the target."""

    key: K
    value: V

    @property
    def kind(self) -> ChangeKind:
        return "remove"


@dataclass(frozen=True, slots=True)
class Modify(Generic[K, D]):
    """A key present on both sides whose values differ.

    ``modification`` is whatever the value strategy produced: a leaf
    ``Different`` node or a nested changeset.
    """

    key: K
    modification: D

    @property
    def kind(self) -> ChangeKind:
        return "modify"


PureChange = Union[Add[Any, Any], Remove[Any, Any]]
Change = Union[Add[Any, Any], Remove[Any, Any], Modify[Any, Any]]


@dataclass(frozen=True, slots=True)
class Equal(Generic[V]):
    """Leaf comparison result for values that compare equal."""

    value: V

    def has_changes(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Different(Generic[V]):
    """Leaf comparison result for values that do not compare equal."""

    source: V
    target: V

    def has_changes(self) -> bool:
        return True


Modification = Union[Equal[Any], Different[Any]]
