"""Generic diff entry point with strategy resolution and lifecycle hooks."""

from __future__ import annotations

import copy
import logging
from typing import Any, Sized

from changepack.core.exceptions import UnsupportedStrategyError
from changepack.core.protocols import DiffStrategy, HasChanges
from changepack.differs.mapping import diff_maps
from changepack.differs.sets import diff_sets
from changepack.diff.registry import resolve_strategy
from changepack.diff.strategies import StructuralKind, structural_kind, with_sorted_keys
from changepack.plugins import DiffEndEvent, DiffStartEvent, get_active_plugin_manager

logger = logging.getLogger(__name__)


def diff_with(
    source: Any,
    target: Any,
    strategy: str | DiffStrategy | None = None,
    *,
    sort_keys: bool = False,
    snapshot: bool = False,
) -> HasChanges:
    """Compute the changes that turn ``source`` into ``target``.

    Mappings are partitioned by key and their common values compared with
    ``strategy`` (a strategy object, a registered name, or None for the
    default recursive scope). Sets are diffed by membership and take no
    strategy. Objects exposing their own ``diff_with`` are delegated to.

    ``sort_keys=True`` orders the keys and set members of every nested
    changeset as well as the top level.

    The result references the inputs instead of copying them; pass
    ``snapshot=True`` to diff deep copies when the inputs may change while
    the result is still in use.

    Lifecycle plugins come from the active context or, failing that, the
    file named by ``CHANGEKIT_PLUGIN_CONFIG``. That file is read on first
    use, so a missing or malformed one makes this raise
    ``PluginConfigError`` before anything is diffed.
    """
    kind = collection_kind(source, target)
    resolved = _resolve_for(kind, strategy)
    if sort_keys and resolved is not None:
        resolved = with_sorted_keys(resolved)
    strategy_name = resolved.name if resolved is not None else None

    plugin_manager = get_active_plugin_manager()
    plugin_manager.on_diff_start(
        DiffStartEvent(
            collection_kind=kind,
            strategy=strategy_name,
            source_size=_size(source),
            target_size=_size(target),
            sort_keys=sort_keys,
            snapshot=snapshot,
        )
    )

    try:
        if snapshot:
            source = copy.deepcopy(source)
            target = copy.deepcopy(target)

        if kind == "map":
            result: HasChanges = diff_maps(source, target, resolved, sort_keys=sort_keys)
        elif kind == "set":
            result = diff_sets(source, target, sort_keys=sort_keys)
        else:
            result = source.diff_with(target)
    except Exception as error:
        plugin_manager.on_diff_end(
            DiffEndEvent(
                collection_kind=kind,
                strategy=strategy_name,
                status="error",
                error_type=error.__class__.__name__,
                error_message=str(error),
            )
        )
        raise

    counts = _bucket_counts(result)
    logger.debug("diff_with kind=%s strategy=%s counts=%s", kind, strategy_name, counts)
    plugin_manager.on_diff_end(
        DiffEndEvent(
            collection_kind=kind,
            strategy=strategy_name,
            status="ok",
            added=counts.get("added"),
            removed=counts.get("removed"),
            modified=counts.get("modified"),
            is_empty=not result.has_changes(),
        )
    )
    return result


def collection_kind(source: Any, target: Any) -> StructuralKind:
    """Classify an input pair, raising when no differ is defined for it."""
    kind = structural_kind(source, target)
    if kind is not None:
        return kind
    raise UnsupportedStrategyError(
        f"no differ for collection pair {type(source).__name__} -> {type(target).__name__}"
    )


def _resolve_for(kind: StructuralKind, strategy: str | DiffStrategy | None) -> DiffStrategy | None:
    if kind == "map":
        return resolve_strategy(strategy)
    if strategy is not None:
        raise UnsupportedStrategyError(
            f"{kind} diffs take no value strategy (got {_strategy_label(strategy)})"
        )
    return None


def _strategy_label(strategy: str | DiffStrategy) -> str:
    if isinstance(strategy, str):
        return repr(strategy)
    return repr(getattr(strategy, "name", type(strategy).__name__))


def _size(value: Any) -> int:
    return len(value) if isinstance(value, Sized) else 0


def _bucket_counts(result: HasChanges) -> dict[str, int]:
    counts: dict[str, int] = {}
    for bucket in ("added", "removed", "modified"):
        items = getattr(result, bucket, None)
        if items is not None:
            counts[bucket] = len(items)
    return counts
