"""Core change models and protocols for ChangeKit."""

from changepack.core.change import (
    Add,
    Change,
    Different,
    Equal,
    Modification,
    Modify,
    PureChange,
    Remove,
)
from changepack.core.exceptions import (
    ChangesetError,
    ChangesetInvariantError,
    UnsupportedStrategyError,
)
from changepack.core.protocols import Diffable, DiffStrategy, HasChanges
from changepack.core.types import CHANGE_KINDS, ChangeKind, ChangeShape, CollectionKind

__all__ = [
    "Add",
    "Remove",
    "Modify",
    "Change",
    "PureChange",
    "Equal",
    "Different",
    "Modification",
    "HasChanges",
    "Diffable",
    "DiffStrategy",
    "ChangesetError",
    "UnsupportedStrategyError",
    "ChangesetInvariantError",
    "CHANGE_KINDS",
    "ChangeKind",
    "ChangeShape",
    "CollectionKind",
]
