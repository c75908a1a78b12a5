"""Exhaustion-stable iterators over precomputed change buckets."""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, TypeVar

from changepack.core.change import Add, Change, Modify, PureChange, Remove

T = TypeVar("T")


class _StableIterator(Generic[T]):
    """Yields from a bucket, then keeps reporting exhaustion.

    The wrapped iterator is dropped the first time it runs out, so it can
    never be advanced past its end or restarted.
    """

    __slots__ = ("_iter",)

    def __init__(self, items: Iterable[T]) -> None:
        self._iter: Iterator[T] | None = iter(items)

    def __iter__(self) -> "_StableIterator[T]":
        return self

    def __next__(self) -> T:
        if self._iter is None:
            raise StopIteration
        try:
            return next(self._iter)
        except StopIteration:
            self._iter = None
            raise

    @property
    def exhausted(self) -> bool:
        return self._iter is None


class Additions(_StableIterator[Add[Any, Any]]):
    """Additions that bring the source closer to the target."""

    __slots__ = ()


class Removals(_StableIterator[Remove[Any, Any]]):
    """Removals that bring the source closer to the target."""

    __slots__ = ()


class Modifications(_StableIterator[Modify[Any, Any]]):
    """Modifications of keys present on both sides."""

    __slots__ = ()

    @classmethod
    def empty(cls) -> "Modifications":
        return cls(())


class PureChanges:
    """Additions until they run out, then removals."""

    __slots__ = ("_additions", "_removals")

    def __init__(self, additions: Additions, removals: Removals) -> None:
        self._additions = additions
        self._removals = removals

    def __iter__(self) -> "PureChanges":
        return self

    def __next__(self) -> PureChange:
        for source in (self._additions, self._removals):
            try:
                return next(source)
            except StopIteration:
                continue
        raise StopIteration


class Changes:
    """Additions, then removals, then modifications.

    Consumers such as change-log renderers rely on presence changes being
    reported before nested modifications.
    """

    __slots__ = ("_pure", "_modifications")

    def __init__(
        self,
        additions: Additions,
        removals: Removals,
        modifications: Modifications,
    ) -> None:
        self._pure = PureChanges(additions, removals)
        self._modifications = modifications

    def __iter__(self) -> "Changes":
        return self

    def __next__(self) -> Change:
        try:
            return next(self._pure)
        except StopIteration:
            return next(self._modifications)
