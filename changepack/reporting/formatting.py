"""CLI-friendly rendering for changesets."""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any, Iterator

from changepack.changeset.base import PureChangeset
from changepack.core.change import Add, Different, Equal, Modify, Remove
from changepack.core.protocols import HasChanges
from changepack.core.types import ChangeKind

MISSING = "<MISSING>"

_KIND_MARKERS: dict[str, str] = {"add": "+", "remove": "-", "modify": "~"}


@dataclass(frozen=True, slots=True)
class ChangeLine:
    """One leaf-level change at a JSON pointer path."""

    path: str
    kind: ChangeKind
    source: Any
    target: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "kind": self.kind,
            "source": _jsonable(self.source),
            "target": _jsonable(self.target),
        }


def summarize_changeset(changeset: PureChangeset) -> dict[str, int]:
    return {
        "added": len(changeset.added),
        "removed": len(changeset.removed),
        "modified": len(changeset.modified),
    }


def flatten_changes(changeset: PureChangeset, *, path: str = "") -> Iterator[ChangeLine]:
    """Walk ``changes()`` depth-first, descending into nested changesets.

    Each level reports its additions and removals before recursing into its
    modifications.
    """
    for change in changeset.changes():
        child_path = f"{path}/{escape_json_pointer(str(change.key))}"
        if isinstance(change, Add):
            yield ChangeLine(child_path, "add", MISSING, change.value)
        elif isinstance(change, Remove):
            yield ChangeLine(child_path, "remove", change.value, MISSING)
        else:
            yield from _flatten_modification(change, path=child_path)


def _flatten_modification(change: Modify[Any, Any], *, path: str) -> Iterator[ChangeLine]:
    modification = change.modification
    if isinstance(modification, PureChangeset):
        yield from flatten_changes(modification, path=path)
    elif isinstance(modification, Different):
        yield ChangeLine(path, "modify", modification.source, modification.target)
    else:
        yield ChangeLine(path, "modify", MISSING, modification)


def changeset_to_dict(changeset: PureChangeset) -> dict[str, Any]:
    """Nested JSON-ready description of a changeset."""
    return {
        "kind": changeset.kind,
        "strategy": getattr(changeset, "strategy_name", None),
        "is_empty": changeset.is_empty(),
        "summary": summarize_changeset(changeset),
        "added": [
            {"key": _jsonable(add.key), "value": _jsonable(add.value)}
            for add in changeset.additions()
        ],
        "removed": [
            {"key": _jsonable(remove.key), "value": _jsonable(remove.value)}
            for remove in changeset.removals()
        ],
        "modified": [
            {
                "key": _jsonable(modify.key),
                "modification": _modification_to_dict(modify.modification),
            }
            for modify in changeset.modifications()
        ],
    }


def _modification_to_dict(modification: HasChanges) -> dict[str, Any]:
    if isinstance(modification, PureChangeset):
        return {"type": "changeset", "changeset": changeset_to_dict(modification)}
    if isinstance(modification, Different):
        return {
            "type": "different",
            "source": _jsonable(modification.source),
            "target": _jsonable(modification.target),
        }
    if isinstance(modification, Equal):
        return {"type": "equal", "value": _jsonable(modification.value)}
    return {"type": type(modification).__name__, "repr": repr(modification)}


def render_changeset_summary(changeset: PureChangeset) -> str:
    summary = summarize_changeset(changeset)
    return (
        f"kind={changeset.kind} "
        f"added={summary['added']} removed={summary['removed']} "
        f"modified={summary['modified']}"
    )


def render_changes(changeset: PureChangeset, *, max_changes: int = 8) -> str:
    if changeset.is_empty():
        return "no changes detected"

    limit = max(1, max_changes)
    lines = ["changes:"]
    remaining = 0
    for index, line in enumerate(flatten_changes(changeset)):
        if index >= limit:
            remaining += 1
            continue
        marker = _KIND_MARKERS[line.kind]
        if line.kind == "add":
            lines.append(f"  {marker} {line.path}: {_render_value(line.target)}")
        elif line.kind == "remove":
            lines.append(f"  {marker} {line.path}: {_render_value(line.source)}")
        else:
            lines.append(
                f"  {marker} {line.path}: "
                f"{_render_value(line.source)} -> {_render_value(line.target)}"
            )
    if remaining:
        lines.append(f"  ... {remaining} additional change(s) omitted")
    return "\n".join(lines)


def escape_json_pointer(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _render_value(value: Any) -> str:
    if value is MISSING:
        return MISSING
    return json.dumps(_jsonable(value), ensure_ascii=True, sort_keys=True)


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset)):
        items = [_jsonable(item) for item in value]
        return sorted(items, key=lambda item: json.dumps(item, sort_keys=True, default=str))
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return repr(value)
