"""Composable record filters.

Every filter is an immutable predicate over a ResultFile. A search keeps an
ordered list of filters and a record survives only if all of them match.
Missing attribute values never match.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from discovery.logging.logger import Log
from discovery.search.cancel import CancelToken
from discovery.search.exceptions import FilterEvaluationError
from discovery.search.models import FileSize, FileType, Frequency, KnownStatus, ResultFile


class AbstractFilter(ABC):
    """Contract for all search filters."""

    requires_correlation: ClassVar[bool] = False

    @abstractmethod
    def matches(self, record: ResultFile) -> bool:
        """Return True if the record passes this filter.

        Raises:
            FilterEvaluationError: if the record cannot be evaluated.
        """

    @property
    @abstractmethod
    def description(self) -> str:
        """Human readable summary of the filter."""


@dataclass(frozen=True)
class SizeFilter(AbstractFilter):
    sizes: frozenset[FileSize]

    def matches(self, record: ResultFile) -> bool:
        bucket = FileSize.from_size(record.size)
        return bucket is not None and bucket in self.sizes

    @property
    def description(self) -> str:
        labels = sorted(self.sizes, key=lambda s: s.ranking)
        return "Size is one of: " + ", ".join(s.label for s in labels)


@dataclass(frozen=True)
class FileTypeFilter(AbstractFilter):
    types: frozenset[FileType]

    def matches(self, record: ResultFile) -> bool:
        return record.file_type in self.types

    @property
    def description(self) -> str:
        names = sorted(t.value for t in self.types)
        return "File type is one of: " + ", ".join(names)


@dataclass(frozen=True)
class DataSourceFilter(AbstractFilter):
    data_source_ids: frozenset[int]

    def matches(self, record: ResultFile) -> bool:
        return record.data_source_id is not None and record.data_source_id in self.data_source_ids

    @property
    def description(self) -> str:
        ids = ", ".join(str(i) for i in sorted(self.data_source_ids))
        return f"Data source is one of: {ids}"


@dataclass(frozen=True)
class ParentSearchTerm:
    """A path fragment for ParentPathFilter.

    full_path terms must equal the parent path; others match as substrings.
    Both are case-insensitive.
    """

    term: str
    full_path: bool = False
    included: bool = True

    def matches(self, parent_path: str) -> bool:
        needle = self.term.casefold()
        hay = parent_path.casefold()
        if self.full_path:
            return _with_slash(hay) == _with_slash(needle)
        return needle in hay


def _with_slash(path: str) -> str:
    return path if path.endswith("/") else path + "/"


@dataclass(frozen=True)
class ParentPathFilter(AbstractFilter):
    """Include terms are OR'ed together; any matching exclude term rejects."""

    terms: tuple[ParentSearchTerm, ...]

    def matches(self, record: ResultFile) -> bool:
        if record.parent_path is None:
            return False
        includes = [t for t in self.terms if t.included]
        excludes = [t for t in self.terms if not t.included]
        if includes and not any(t.matches(record.parent_path) for t in includes):
            return False
        return not any(t.matches(record.parent_path) for t in excludes)

    @property
    def description(self) -> str:
        parts = []
        for t in self.terms:
            verb = "in" if t.included else "not in"
            kind = "path" if t.full_path else "path containing"
            parts.append(f"{verb} {kind} '{t.term}'")
        return "Parent " + " and ".join(parts)


@dataclass(frozen=True)
class KnownFilter(AbstractFilter):
    """Drops files the case database marks as known (NSRL)."""

    def matches(self, record: ResultFile) -> bool:
        return record.known_status is not KnownStatus.KNOWN

    @property
    def description(self) -> str:
        return "Exclude known files"


@dataclass(frozen=True)
class ModifiedTimeFilter(AbstractFilter):
    start: datetime | None = None
    end: datetime | None = None

    def matches(self, record: ResultFile) -> bool:
        mtime = record.modified_time
        if mtime is None:
            return False
        try:
            if self.start is not None and mtime < self.start:
                return False
            if self.end is not None and mtime > self.end:
                return False
        except TypeError as exc:
            # naive vs aware datetimes
            raise FilterEvaluationError(
                f"Cannot compare modified time of file {record.object_id}: {exc}"
            ) from exc
        return True

    @property
    def description(self) -> str:
        start = self.start.isoformat() if self.start else "any"
        end = self.end.isoformat() if self.end else "any"
        return f"Modified between {start} and {end}"


@dataclass(frozen=True)
class HashSetFilter(AbstractFilter):
    set_names: frozenset[str]

    def matches(self, record: ResultFile) -> bool:
        return not self.set_names.isdisjoint(record.hash_set_names)

    @property
    def description(self) -> str:
        return "In hash set: " + ", ".join(sorted(self.set_names))


@dataclass(frozen=True)
class InterestingItemFilter(AbstractFilter):
    set_names: frozenset[str]

    def matches(self, record: ResultFile) -> bool:
        return not self.set_names.isdisjoint(record.interesting_item_sets)

    @property
    def description(self) -> str:
        return "In interesting item set: " + ", ".join(sorted(self.set_names))


@dataclass(frozen=True)
class TagsFilter(AbstractFilter):
    tag_names: frozenset[str]

    def matches(self, record: ResultFile) -> bool:
        return not self.tag_names.isdisjoint(record.tag_names)

    @property
    def description(self) -> str:
        return "Tagged as: " + ", ".join(sorted(self.tag_names))


@dataclass(frozen=True)
class FrequencyFilter(AbstractFilter):
    requires_correlation: ClassVar[bool] = True

    frequencies: frozenset[Frequency]

    def matches(self, record: ResultFile) -> bool:
        if record.correlation is None:
            return False
        return record.frequency in self.frequencies

    @property
    def description(self) -> str:
        labels = sorted(self.frequencies, key=lambda f: f.ranking)
        return "Frequency is one of: " + ", ".join(f.label for f in labels)


@dataclass(frozen=True)
class PreviouslyNotableFilter(AbstractFilter):
    """Keeps files flagged notable in another case."""

    requires_correlation: ClassVar[bool] = True

    def matches(self, record: ResultFile) -> bool:
        if record.correlation is None:
            return False
        return record.correlation.known_status is KnownStatus.NOTABLE

    @property
    def description(self) -> str:
        return "Previously marked notable"


def split_filters(
    filters: Sequence[AbstractFilter],
) -> tuple[list[AbstractFilter], list[AbstractFilter]]:
    """Split filters into (metadata-only, correlation-dependent), keeping order."""
    local = [f for f in filters if not f.requires_correlation]
    correlated = [f for f in filters if f.requires_correlation]
    return local, correlated


def passes_all(record: ResultFile, filters: Sequence[AbstractFilter]) -> bool:
    """Conjunction of filters over one record; evaluation errors exclude the record."""
    for search_filter in filters:
        try:
            if not search_filter.matches(record):
                return False
        except (FilterEvaluationError, AttributeError, TypeError, ValueError) as exc:
            Log.debug(
                f"Filter '{search_filter.description}' could not evaluate "
                f"file {record.object_id}, excluding: {exc}"
            )
            return False
    return True


def apply_filters(
    records: Iterable[ResultFile],
    filters: Sequence[AbstractFilter],
    cancel: CancelToken | None = None,
) -> Iterator[ResultFile]:
    """Yield the records that satisfy every filter."""
    for record in records:
        if cancel is not None:
            cancel.raise_if_cancelled()
        if passes_all(record, filters):
            yield record
