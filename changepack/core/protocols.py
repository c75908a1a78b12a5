"""Capability protocols for diff results and value strategies."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from changepack.core.types import ChangeShape


@runtime_checkable
class HasChanges(Protocol):
    """Anything a value-level comparison can return."""

    def has_changes(self) -> bool: ...


@runtime_checkable
class Diffable(Protocol):
    """A value that knows how to diff itself against another instance."""

    def diff_with(self, other: Any) -> HasChanges: ...


@runtime_checkable
class DiffStrategy(Protocol):
    """Selects how two values stored under the same key are compared.

    ``describe_shape`` tells callers what ``compare`` returns before any
    comparison runs; ``supports`` lets the differ reject value pairs the
    strategy is not defined for, ahead of the first ``compare`` call.
    """

    name: str

    def describe_shape(self) -> ChangeShape: ...

    def supports(self, source: Any, target: Any) -> bool: ...

    def compare(self, source: Any, target: Any) -> HasChanges: ...

    def has_changes(self, result: HasChanges) -> bool: ...
