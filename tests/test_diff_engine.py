from dataclasses import dataclass

import pytest

from changepack.core import Different, Equal, UnsupportedStrategyError
from changepack.diff import collection_kind, diff_with, map_value_diff, nested_scopes
from changepack.differs import MapChangeset, SetChangeset


@dataclass(frozen=True)
class Document:
    body: str

    def diff_with(self, other: "Document") -> Equal | Different:
        return Equal(self) if self == other else Different(self, other)


@pytest.mark.parametrize(
    "value",
    [
        {},
        {"a": 1},
        {"a": {"b": {"c": {1, 2}}}, "d": [1, 2]},
        set(),
        {1, 2, 3},
        frozenset({"x"}),
    ],
)
def test_diff_with_itself_is_empty(value: object) -> None:
    changeset = diff_with(value, value)

    assert changeset.is_empty() is True
    assert list(changeset.changes()) == []


def test_diff_with_dispatches_on_collection_kind() -> None:
    assert isinstance(diff_with({"a": 1}, {"a": 2}), MapChangeset)
    assert isinstance(diff_with({1}, {2}), SetChangeset)
    assert collection_kind({}, {}) == "map"
    assert collection_kind(set(), frozenset()) == "set"


def test_diff_with_default_strategy_recurses() -> None:
    changeset = diff_with({"a": {"b": 1}}, {"a": {"b": 2}})

    [modify] = list(changeset.modifications())
    assert isinstance(modify.modification, MapChangeset)
    assert changeset.strategy_name == "arbitrary"


def test_diff_with_accepts_strategy_names_and_objects() -> None:
    by_name = diff_with({"a": {"b": 1}}, {"a": {"b": 2}}, "simple")
    by_object = diff_with({"a": {"b": 1}}, {"a": {"b": 2}}, map_value_diff.Simply)

    assert [m.modification for m in by_name.modifications()] == [
        Different({"b": 1}, {"b": 2})
    ]
    assert by_object.strategy_name == "simply"


def test_diff_with_rejects_pairs_without_a_differ() -> None:
    with pytest.raises(UnsupportedStrategyError, match="no differ"):
        diff_with(1, 2)

    with pytest.raises(UnsupportedStrategyError, match="no differ"):
        diff_with({"a": 1}, {1})

    with pytest.raises(UnsupportedStrategyError, match="no differ"):
        diff_with([1, 2], [1, 2])


def test_diff_with_rejects_value_strategy_for_sets() -> None:
    with pytest.raises(UnsupportedStrategyError, match="set diffs take no value strategy"):
        diff_with({1}, {2}, "simple")


def test_diff_with_rejects_unknown_strategy_before_diffing() -> None:
    with pytest.raises(UnsupportedStrategyError, match="unknown strategy"):
        diff_with({"a": 1}, {"a": 2}, "does-not-exist")


def test_diff_with_delegates_to_diffable_objects() -> None:
    assert diff_with(Document("a"), Document("b")) == Different(Document("a"), Document("b"))
    assert diff_with(Document("a"), Document("a")).has_changes() is False


def test_diff_with_references_inputs_by_default() -> None:
    source = {"a": [1]}
    target = {"a": [2]}

    changeset = diff_with(source, target, "simple")

    assert changeset.source is source
    [modify] = list(changeset.modifications())
    assert modify.modification.source is source["a"]


def test_diff_with_snapshot_isolates_result_from_later_mutation() -> None:
    source = {"a": [1]}
    target = {"a": [2]}

    changeset = diff_with(source, target, "simple", snapshot=True)
    source["a"].append(99)
    source["b"] = 1

    assert changeset.source is not source
    assert changeset.source == {"a": [1]}
    [modify] = list(changeset.modifications())
    assert modify.modification == Different([1], [2])


def test_diff_with_sort_keys_orders_nested_changesets() -> None:
    changeset = diff_with(
        {"outer": {}, "tags": set()},
        {"outer": {"zz": 1, "aa": 2, "mm": 3}, "tags": {"pear", "apple", "fig"}},
        sort_keys=True,
    )

    nested = {modify.key: modify.modification for modify in changeset.modifications()}
    assert [add.key for add in nested["outer"].additions()] == ["aa", "mm", "zz"]
    assert [add.key for add in nested["tags"].additions()] == ["apple", "fig", "pear"]


def test_diff_with_sort_keys_reaches_chained_levels() -> None:
    strategy = nested_scopes(map_value_diff.Arbitrarily, map_value_diff.Arbitrarily)

    changeset = diff_with(
        {"a": {"b": {}}},
        {"a": {"b": {"z": 1, "k": 2}}},
        strategy,
        sort_keys=True,
    )

    [outer] = list(changeset.modifications())
    [inner] = list(outer.modification.modifications())
    assert [add.key for add in inner.modification.additions()] == ["k", "z"]
    assert changeset.strategy_name == "arbitrarily>arbitrarily"


def test_diff_with_sort_keys_orders_top_level_sets() -> None:
    changeset = diff_with({"kiwi"}, {"pear", "apple", "fig"}, sort_keys=True)

    assert [add.key for add in changeset.additions()] == ["apple", "fig", "pear"]
    assert [remove.key for remove in changeset.removals()] == ["kiwi"]
