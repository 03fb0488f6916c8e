"""Groups and the algorithms that order them."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from discovery.search.keys import GroupKey
from discovery.search.models import ResultFile


class GroupSortingAlgorithm(str, Enum):
    """Rule ordering groups relative to one another."""

    BY_GROUP_NAME = "by_group_name"
    BY_GROUP_SIZE = "by_group_size"
    BY_MIN_FREQUENCY = "by_min_frequency"
    BY_MAX_FREQUENCY = "by_max_frequency"
    BY_PRIORITY = "by_priority"


@dataclass
class Group:
    """Members sharing one GroupKey.

    The size pass only counts members; the page pass keeps them so they can
    be sorted and sliced into `page`.
    """

    key: GroupKey
    count: int = 0
    min_frequency_count: int | None = None
    max_frequency_count: int | None = None
    members: list[ResultFile] = field(default_factory=list)
    page: list[ResultFile] = field(default_factory=list)

    def add(self, record: ResultFile, keep_member: bool = False) -> None:
        self.count += 1
        frequency_count = record.frequency_count
        if frequency_count is not None:
            if self.min_frequency_count is None or frequency_count < self.min_frequency_count:
                self.min_frequency_count = frequency_count
            if self.max_frequency_count is None or frequency_count > self.max_frequency_count:
                self.max_frequency_count = frequency_count
        if keep_member:
            self.members.append(record)


def _by_group_name(group: Group, priority: Sequence[str]) -> tuple:
    return (group.key,)


def _by_group_size(group: Group, priority: Sequence[str]) -> tuple:
    return (-group.count, group.key)


def _by_min_frequency(group: Group, priority: Sequence[str]) -> tuple:
    value = group.min_frequency_count
    return (value is None, value or 0, group.key)


def _by_max_frequency(group: Group, priority: Sequence[str]) -> tuple:
    value = group.max_frequency_count
    return (value is None, value or 0, group.key)


def _by_priority(group: Group, priority: Sequence[str]) -> tuple:
    try:
        rank = list(priority).index(group.key.name)
    except ValueError:
        rank = len(priority)
    return (rank, group.key)


_GROUP_SORT_KEYS: dict[GroupSortingAlgorithm, Callable[[Group, Sequence[str]], tuple]] = {
    GroupSortingAlgorithm.BY_GROUP_NAME: _by_group_name,
    GroupSortingAlgorithm.BY_GROUP_SIZE: _by_group_size,
    GroupSortingAlgorithm.BY_MIN_FREQUENCY: _by_min_frequency,
    GroupSortingAlgorithm.BY_MAX_FREQUENCY: _by_max_frequency,
    GroupSortingAlgorithm.BY_PRIORITY: _by_priority,
}


def sort_groups(
    groups: Iterable[Group],
    algorithm: GroupSortingAlgorithm,
    priority: Sequence[str] = (),
) -> list[Group]:
    """Order groups; every algorithm falls back to key order on ties."""
    sort_key = _GROUP_SORT_KEYS.get(algorithm)
    if sort_key is None:
        raise ValueError(f"Unknown group sorting algorithm '{algorithm}'")
    return sorted(groups, key=lambda g: sort_key(g, priority))
