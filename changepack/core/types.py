"""Type definitions for ChangeKit core models."""

from typing import Literal

ChangeKind = Literal["add", "remove", "modify"]

CHANGE_KINDS: tuple[str, ...] = (
    "add",
    "remove",
    "modify",
)

ChangeShape = Literal["modification", "changeset"]

CollectionKind = Literal["map", "set"]
