"""Orderings for the files inside one group."""

from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from enum import Enum

from discovery.search.models import ResultFile


class FileSortingMethod(str, Enum):
    BY_FILE_NAME = "by_file_name"
    BY_FILE_SIZE = "by_file_size"
    BY_MODIFIED_TIME = "by_modified_time"
    BY_FREQUENCY = "by_frequency"
    BY_FILE_TYPE = "by_file_type"
    BY_DATA_SOURCE = "by_data_source"
    BY_FULL_PATH = "by_full_path"


def _tie_break(record: ResultFile) -> tuple:
    return (record.full_path, record.object_id)


def _timestamp(value: datetime) -> float:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def _by_file_name(record: ResultFile) -> tuple:
    return (record.name.casefold(), *_tie_break(record))


def _by_file_size(record: ResultFile) -> tuple:
    size = record.size
    return (size is None, size or 0, *_tie_break(record))


def _by_modified_time(record: ResultFile) -> tuple:
    mtime = record.modified_time
    return (mtime is None, _timestamp(mtime) if mtime else 0.0, *_tie_break(record))


def _by_frequency(record: ResultFile) -> tuple:
    # rarest first; files without correlation data last
    count = record.frequency_count
    return (count is None, record.frequency.ranking, count or 0, *_tie_break(record))


def _by_file_type(record: ResultFile) -> tuple:
    return (record.file_type.ranking, record.name.casefold(), *_tie_break(record))


def _by_data_source(record: ResultFile) -> tuple:
    name = record.data_source_name
    return (name is None, (name or "").casefold(), record.data_source_id or 0, *_tie_break(record))


def _by_full_path(record: ResultFile) -> tuple:
    return (record.full_path.casefold(), *_tie_break(record))


_FILE_SORT_KEYS: dict[FileSortingMethod, Callable[[ResultFile], tuple]] = {
    FileSortingMethod.BY_FILE_NAME: _by_file_name,
    FileSortingMethod.BY_FILE_SIZE: _by_file_size,
    FileSortingMethod.BY_MODIFIED_TIME: _by_modified_time,
    FileSortingMethod.BY_FREQUENCY: _by_frequency,
    FileSortingMethod.BY_FILE_TYPE: _by_file_type,
    FileSortingMethod.BY_DATA_SOURCE: _by_data_source,
    FileSortingMethod.BY_FULL_PATH: _by_full_path,
}


def sort_files(files: Iterable[ResultFile], method: FileSortingMethod) -> list[ResultFile]:
    """Return files in the total order defined by method."""
    sort_key = _FILE_SORT_KEYS.get(method)
    if sort_key is None:
        raise ValueError(f"Unknown file sorting method '{method}'")
    return sorted(files, key=sort_key)
