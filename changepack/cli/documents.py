"""JSON document loading for the CLI."""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Any

from changepack.core.exceptions import ChangesetError


class DocumentError(ChangesetError):
    """A CLI input document could not be read or parsed."""


def load_document(path: Path, *, lists_as_sets: bool = False) -> Any:
    """Read a JSON (or gzip-compressed ``.gz`` JSON) document.

    With ``lists_as_sets`` every JSON array whose items are hashable is
    loaded as a ``frozenset`` so it is diffed by membership. Items that
    compare equal collapse into one member (``[1, 1.0, true]`` is ``{1}``).
    """
    try:
        if path.suffix == ".gz":
            with gzip.open(path, "rt", encoding="utf-8") as handle:
                text = handle.read()
        else:
            text = path.read_text(encoding="utf-8")
    except FileNotFoundError as error:
        raise DocumentError(f"document not found: {path}") from error
    except (OSError, UnicodeDecodeError) as error:
        raise DocumentError(f"could not read {path}: {error}") from error

    try:
        value = json.loads(text)
    except json.JSONDecodeError as error:
        raise DocumentError(f"invalid JSON in {path}: {error}") from error

    return _freeze_lists(value) if lists_as_sets else value


def _freeze_lists(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _freeze_lists(item) for key, item in value.items()}
    if isinstance(value, list):
        items = [_freeze_lists(item) for item in value]
        try:
            return frozenset(items)
        except TypeError:
            # Arrays of objects stay ordered lists and compare as leaves.
            return items
    return value
