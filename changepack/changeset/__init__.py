"""Changeset aggregates and their lazy iterators."""

from changepack.changeset.base import Changeset, PureChangeset
from changepack.changeset.iterators import (
    Additions,
    Changes,
    Modifications,
    PureChanges,
    Removals,
)

__all__ = [
    "PureChangeset",
    "Changeset",
    "Additions",
    "Removals",
    "Modifications",
    "PureChanges",
    "Changes",
]
