from dataclasses import dataclass, field
from typing import Any

import pytest

from changepack.core import (
    Add,
    ChangesetInvariantError,
    Different,
    Modify,
    Remove,
    UnsupportedStrategyError,
)
from changepack.diff import (
    Arbitrary,
    Simple,
    SimpleStrategy,
    Strict,
    map_value_diff,
    nested_scopes,
)
from changepack.differs import MapChangeset, SetChangeset, diff_maps
from changepack.differs import mapping as mapping_module


def _scenario_a() -> tuple[dict[int, set[int]], dict[int, set[int]]]:
    source = {1: {1, 2, 3}, 2: {1, 2, 3}, 3: {1, 2, 3}}
    target = {1: {1, 2, 3}, 2: {1, 3}, 4: {1, 2, 3}}
    return source, target


@dataclass
class RecordingStrategy:
    name: str = "recording"
    calls: list[tuple[Any, Any]] = field(default_factory=list)

    def describe_shape(self) -> str:
        return "modification"

    def supports(self, source: Any, target: Any) -> bool:
        return isinstance(source, int) and isinstance(target, int)

    def compare(self, source: Any, target: Any) -> Any:
        self.calls.append((source, target))
        return SimpleStrategy().compare(source, target)

    def has_changes(self, result: Any) -> bool:
        return result.has_changes()


def test_map_leaf_strategy_reports_add_remove_and_modify() -> None:
    source, target = _scenario_a()

    changeset = diff_maps(source, target, map_value_diff.Simply)

    assert isinstance(changeset, MapChangeset)
    assert list(changeset.additions()) == [Add(4, {1, 2, 3})]
    assert list(changeset.removals()) == [Remove(3, {1, 2, 3})]
    assert list(changeset.modifications()) == [Modify(2, Different({1, 2, 3}, {1, 3}))]
    assert changeset.strategy_name == "simply"


def test_map_recursive_strategy_diffs_set_values() -> None:
    source, target = _scenario_a()

    changeset = diff_maps(source, target, Arbitrary)

    [modify] = list(changeset.modifications())
    assert modify.key == 2
    assert isinstance(modify.modification, SetChangeset)
    assert list(modify.modification.removals()) == [Remove(2, 2)]
    assert list(modify.modification.additions()) == []


def test_map_changeset_references_inputs_without_copying() -> None:
    source, target = _scenario_a()

    changeset = diff_maps(source, target, Simple)

    assert changeset.source is source
    assert changeset.target is target
    [add] = changeset.added
    [remove] = changeset.removed
    assert add.value is target[4]
    assert remove.value is source[3]


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ({}, {}),
        ({"a": 1}, {}),
        ({}, {"a": 1}),
        ({"a": 1, "b": 2, "c": 3}, {"b": 2, "c": 4, "d": 5}),
        ({1: "x", "1": "y"}, {"1": "z", 2: "x"}),
    ],
)
def test_map_key_partition_is_exact(source: dict[Any, Any], target: dict[Any, Any]) -> None:
    changeset = diff_maps(source, target, Simple)

    added = {change.key for change in changeset.added}
    removed = {change.key for change in changeset.removed}
    modified = {change.key for change in changeset.modified}
    common = source.keys() & target.keys()

    assert added == target.keys() - source.keys()
    assert removed == source.keys() - target.keys()
    assert modified <= common
    assert added | removed | common == source.keys() | target.keys()
    assert len(changeset.added) + len(changeset.removed) + len(common) == len(
        source.keys() | target.keys()
    )


def test_map_empty_inputs_degrade_to_pure_changes() -> None:
    only_source = diff_maps({"a": 1, "b": 2}, {}, Simple)
    only_target = diff_maps({}, {"a": 1}, Simple)

    assert [change.key for change in only_source.removals()] == ["a", "b"]
    assert list(only_source.modifications()) == []
    assert list(only_target.additions()) == [Add("a", 1)]
    assert list(only_target.modifications()) == []


def test_map_additions_and_removals_are_dual() -> None:
    left = {"a": 1, "b": 2, "c": 3}
    right = {"b": 2, "c": 30, "d": 4}

    forward = diff_maps(left, right, Simple)
    backward = diff_maps(right, left, Simple)

    assert {(c.key, c.value) for c in forward.additions()} == {
        (c.key, c.value) for c in backward.removals()
    }
    assert {(c.key, c.value) for c in forward.removals()} == {
        (c.key, c.value) for c in backward.additions()
    }


def test_map_equal_values_never_produce_modify_entries() -> None:
    changeset = diff_maps({"a": 1, "b": [1, 2]}, {"a": 1, "b": [1, 2]}, Simple)

    assert changeset.is_empty() is True
    assert changeset.has_changes() is False
    assert changeset.modified == ()


def test_map_every_modify_reports_changes() -> None:
    changeset = diff_maps(
        {"a": {"x": 1}, "b": {"x": 1}, "c": 3},
        {"a": {"x": 1}, "b": {"x": 2}, "c": 4},
        Arbitrary,
    )

    assert [modify.key for modify in changeset.modifications()] == ["b", "c"]
    assert all(modify.modification.has_changes() for modify in changeset.modifications())


def test_map_sort_keys_orders_buckets() -> None:
    source = {"c": 1, "a": 1}
    target = {"d": 1, "b": 1}

    unsorted_keys = [c.key for c in diff_maps(source, target, Simple).changes()]
    sorted_keys = [c.key for c in diff_maps(source, target, Simple, sort_keys=True).changes()]

    assert unsorted_keys == ["d", "b", "c", "a"]
    assert sorted_keys == ["b", "d", "a", "c"]


def test_map_sort_keys_handles_mixed_key_types() -> None:
    changeset = diff_maps({1: "a", "x": "b"}, {}, Simple, sort_keys=True)

    assert [remove.key for remove in changeset.removals()] == [1, "x"]


def test_map_rejects_unsupported_values_before_comparing() -> None:
    strategy = RecordingStrategy()

    with pytest.raises(UnsupportedStrategyError, match="key 'b'"):
        diff_maps({"a": 1, "b": "x"}, {"a": 2, "b": "y"}, strategy)

    assert strategy.calls == []


def test_map_key_union_outside_both_inputs_is_invariant_violation(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(mapping_module, "_key_union", lambda source, target, sort_keys: ["ghost"])

    with pytest.raises(ChangesetInvariantError) as excinfo:
        diff_maps({"a": 1}, {"a": 1}, Simple)

    assert isinstance(excinfo.value, AssertionError)


def test_map_none_values_are_present_not_missing() -> None:
    changeset = diff_maps({"a": None}, {"a": None, "b": None}, Simple)

    assert list(changeset.additions()) == [Add("b", None)]
    assert list(changeset.removals()) == []
    assert changeset.modified == ()


@dataclass
class RecordingStrictStrategy:
    name: str = "recording-strict"
    calls: list[tuple[Any, Any]] = field(default_factory=list)

    def describe_shape(self) -> str:
        return "changeset"

    def supports(self, source: Any, target: Any) -> bool:
        return Strict.supports(source, target)

    def compare(self, source: Any, target: Any) -> Any:
        self.calls.append((source, target))
        return Strict.compare(source, target)

    def has_changes(self, result: Any) -> bool:
        return result.has_changes()


def test_map_strict_rejects_nested_leaves_before_comparing() -> None:
    strategy = RecordingStrictStrategy()

    with pytest.raises(UnsupportedStrategyError, match=r"key 'a' \(dict -> dict\)"):
        diff_maps({"a": {"x": 1}, "b": {"y": {1}}}, {"a": {"x": 1}, "b": {"y": {2}}}, strategy)

    assert strategy.calls == []


def test_map_strict_accepts_fully_decomposable_nesting() -> None:
    changeset = diff_maps({"a": {"x": {1, 2}}}, {"a": {"x": {2, 3}}}, Strict)

    [outer] = list(changeset.modifications())
    [inner] = list(outer.modification.modifications())
    assert isinstance(inner.modification, SetChangeset)
    assert list(inner.modification.additions()) == [Add(3, 3)]


def test_map_strict_inner_level_is_checked_up_front() -> None:
    strategy = nested_scopes(map_value_diff.Arbitrarily, Strict)

    with pytest.raises(UnsupportedStrategyError, match="key 'a'"):
        diff_maps({"a": {"x": 1}}, {"a": {"x": 2}}, strategy)
