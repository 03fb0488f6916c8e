"""Grouping attributes and the keys they derive from a record."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from discovery.search.models import FileSize, FileType, ResultFile

NO_VALUE_NAME = "None"


class AttributeType(str, Enum):
    """Record attribute a search groups by."""

    FILE_SIZE = "file_size"
    FREQUENCY = "frequency"
    FILE_TYPE = "file_type"
    PARENT_PATH = "parent_path"
    DATA_SOURCE = "data_source"
    HASH_LIST_NAME = "hash_list_name"
    INTERESTING_ITEM_SET = "interesting_item_set"
    FILE_TAG = "file_tag"
    NO_GROUPING = "no_grouping"


@dataclass(frozen=True, order=True)
class GroupKey:
    """Identity of one group.

    Keys compare by (sort_value, name). Keys from one attribute share a
    sort_value shape, so the order within a search is total.
    """

    sort_value: tuple
    name: str
    attribute: AttributeType = field(default=AttributeType.NO_GROUPING, compare=False)

    def __str__(self) -> str:
        return self.name


def _named_key(attribute: AttributeType, value: str | None) -> GroupKey:
    # records without a value go to a trailing "None" group
    if not value:
        return GroupKey((1, ""), NO_VALUE_NAME, attribute)
    return GroupKey((0, value.casefold()), value, attribute)


def _first_of(values: tuple[str, ...]) -> str | None:
    present = sorted(v for v in values if v)
    return present[0] if present else None


def _file_size_key(record: ResultFile) -> GroupKey:
    bucket = FileSize.from_size(record.size)
    if bucket is None:
        return GroupKey((len(FileSize),), "Unknown size", AttributeType.FILE_SIZE)
    return GroupKey((bucket.ranking,), bucket.label, AttributeType.FILE_SIZE)


def _frequency_key(record: ResultFile) -> GroupKey:
    frequency = record.frequency
    return GroupKey((frequency.ranking,), frequency.label, AttributeType.FREQUENCY)


def _file_type_key(record: ResultFile) -> GroupKey:
    file_type = record.file_type or FileType.OTHER
    return GroupKey((file_type.ranking,), file_type.value, AttributeType.FILE_TYPE)


def _parent_path_key(record: ResultFile) -> GroupKey:
    return _named_key(AttributeType.PARENT_PATH, record.parent_path)


def _data_source_key(record: ResultFile) -> GroupKey:
    if record.data_source_id is None:
        return GroupKey((1, "", -1), NO_VALUE_NAME, AttributeType.DATA_SOURCE)
    name = record.data_source_name or f"Data source {record.data_source_id}"
    return GroupKey((0, name.casefold(), record.data_source_id), name, AttributeType.DATA_SOURCE)


def _hash_list_key(record: ResultFile) -> GroupKey:
    return _named_key(AttributeType.HASH_LIST_NAME, _first_of(record.hash_set_names))


def _interesting_item_key(record: ResultFile) -> GroupKey:
    return _named_key(AttributeType.INTERESTING_ITEM_SET, _first_of(record.interesting_item_sets))


def _file_tag_key(record: ResultFile) -> GroupKey:
    return _named_key(AttributeType.FILE_TAG, _first_of(record.tag_names))


def _no_grouping_key(record: ResultFile) -> GroupKey:
    return GroupKey((0,), "All Files", AttributeType.NO_GROUPING)


_KEY_EXTRACTORS: dict[AttributeType, Callable[[ResultFile], GroupKey]] = {
    AttributeType.FILE_SIZE: _file_size_key,
    AttributeType.FREQUENCY: _frequency_key,
    AttributeType.FILE_TYPE: _file_type_key,
    AttributeType.PARENT_PATH: _parent_path_key,
    AttributeType.DATA_SOURCE: _data_source_key,
    AttributeType.HASH_LIST_NAME: _hash_list_key,
    AttributeType.INTERESTING_ITEM_SET: _interesting_item_key,
    AttributeType.FILE_TAG: _file_tag_key,
    AttributeType.NO_GROUPING: _no_grouping_key,
}


def group_key_for(attribute: AttributeType, record: ResultFile) -> GroupKey:
    """Derive the group key of a record for the given grouping attribute."""
    extractor = _KEY_EXTRACTORS.get(attribute)
    if extractor is None:
        raise ValueError(f"Unknown grouping attribute '{attribute}'")
    return extractor(record)
