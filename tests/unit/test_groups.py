import pytest

from discovery.search.groups import Group, GroupSortingAlgorithm, sort_groups
from discovery.search.keys import AttributeType, GroupKey
from discovery.search.models import CorrelationResult, ResultFile


def _key(name: str) -> GroupKey:
    return GroupKey((0, name.casefold()), name, AttributeType.DATA_SOURCE)


def _group(name: str, count: int, min_freq: int | None = None, max_freq: int | None = None) -> Group:
    return Group(key=_key(name), count=count, min_frequency_count=min_freq, max_frequency_count=max_freq)


class TestGroup:
    def test_add_counts_without_keeping_members(self) -> None:
        group = Group(key=_key("A"))
        group.add(ResultFile(object_id=1, name="a"))
        group.add(ResultFile(object_id=2, name="b"))
        assert group.count == 2
        assert group.members == []

    def test_add_keeps_members_when_asked(self) -> None:
        group = Group(key=_key("A"))
        record = ResultFile(object_id=1, name="a")
        group.add(record, keep_member=True)
        assert group.members == [record]

    def test_tracks_frequency_range(self) -> None:
        group = Group(key=_key("A"))
        for object_id, count in [(1, 5), (2, 1), (3, 40)]:
            record = ResultFile(object_id=object_id, name="x")
            record.attach_correlation(CorrelationResult(frequency_count=count))
            group.add(record)
        group.add(ResultFile(object_id=4, name="no data"))
        assert group.min_frequency_count == 1
        assert group.max_frequency_count == 40


class TestSortGroups:
    def test_by_size_descending(self) -> None:
        groups = [_group("A", 3), _group("B", 7)]
        ordered = sort_groups(groups, GroupSortingAlgorithm.BY_GROUP_SIZE)
        assert [g.key.name for g in ordered] == ["B", "A"]

    def test_by_size_ties_broken_by_name(self) -> None:
        groups = [_group("b", 2), _group("a", 2), _group("c", 5)]
        ordered = sort_groups(groups, GroupSortingAlgorithm.BY_GROUP_SIZE)
        assert [g.key.name for g in ordered] == ["c", "a", "b"]

    def test_by_name(self) -> None:
        groups = [_group("beta", 1), _group("Alpha", 9), _group("gamma", 5)]
        ordered = sort_groups(groups, GroupSortingAlgorithm.BY_GROUP_NAME)
        assert [g.key.name for g in ordered] == ["Alpha", "beta", "gamma"]

    def test_by_min_frequency_rarest_first_missing_last(self) -> None:
        groups = [_group("a", 1, None, None), _group("b", 1, 20, 30), _group("c", 1, 2, 90)]
        ordered = sort_groups(groups, GroupSortingAlgorithm.BY_MIN_FREQUENCY)
        assert [g.key.name for g in ordered] == ["c", "b", "a"]

    def test_by_max_frequency(self) -> None:
        groups = [_group("a", 1, None, None), _group("b", 1, 20, 30), _group("c", 1, 2, 90)]
        ordered = sort_groups(groups, GroupSortingAlgorithm.BY_MAX_FREQUENCY)
        assert [g.key.name for g in ordered] == ["b", "c", "a"]

    def test_by_priority_pins_listed_keys(self) -> None:
        groups = [_group("a", 9), _group("b", 1), _group("c", 5), _group("d", 2)]
        ordered = sort_groups(groups, GroupSortingAlgorithm.BY_PRIORITY, ["c", "b"])
        assert [g.key.name for g in ordered] == ["c", "b", "a", "d"]

    def test_order_independent_of_input_order(self) -> None:
        groups = [_group("x", 2), _group("y", 2), _group("z", 1)]
        for algorithm in GroupSortingAlgorithm:
            forward = sort_groups(groups, algorithm)
            backward = sort_groups(list(reversed(groups)), algorithm)
            assert [g.key for g in forward] == [g.key for g in backward]

    def test_unknown_algorithm_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown group sorting algorithm"):
            sort_groups([], "random")  # type: ignore[arg-type]
