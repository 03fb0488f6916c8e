from dataclasses import dataclass

from discovery.search.exceptions import InvalidCriteriaError
from discovery.search.filters import AbstractFilter, FileTypeFilter
from discovery.search.groups import GroupSortingAlgorithm
from discovery.search.keys import AttributeType, GroupKey
from discovery.search.models import FileType
from discovery.search.sorting import FileSortingMethod


@dataclass(frozen=True)
class SearchCriteria:
    """Everything that identifies one logical search.

    Equal criteria against an unchanged corpus yield equal groups and orderings.
    """

    filters: tuple[AbstractFilter, ...] = ()
    grouping: AttributeType = AttributeType.FILE_SIZE
    group_sort: GroupSortingAlgorithm = GroupSortingAlgorithm.BY_GROUP_SIZE
    file_sort: FileSortingMethod = FileSortingMethod.BY_FILE_NAME
    group_priority: tuple[str, ...] = ()
    use_correlation: bool = True
    result_type: FileType | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.filters, tuple):
            object.__setattr__(self, "filters", tuple(self.filters))
        if not isinstance(self.group_priority, tuple):
            object.__setattr__(self, "group_priority", tuple(self.group_priority))

    @property
    def needs_correlation(self) -> bool:
        """True when grouping, group order or filtering depends on correlation data."""
        if not self.use_correlation:
            return False
        if self.grouping is AttributeType.FREQUENCY:
            return True
        if self.group_sort in (
            GroupSortingAlgorithm.BY_MIN_FREQUENCY,
            GroupSortingAlgorithm.BY_MAX_FREQUENCY,
        ):
            return True
        return any(f.requires_correlation for f in self.filters)

    @property
    def resolved_result_type(self) -> FileType:
        """Explicit result type, else the single type selected by a FileTypeFilter."""
        if self.result_type is not None:
            return self.result_type
        for search_filter in self.filters:
            if isinstance(search_filter, FileTypeFilter) and len(search_filter.types) == 1:
                return next(iter(search_filter.types))
        return FileType.OTHER


@dataclass(frozen=True)
class PageRequest:
    group_key: GroupKey
    offset: int = 0
    page_size: int = 100

    def validate(self) -> None:
        if self.offset < 0:
            raise InvalidCriteriaError(f"Page offset must be >= 0, got {self.offset}")
        if self.page_size <= 0:
            raise InvalidCriteriaError(f"Page size must be > 0, got {self.page_size}")

    @property
    def page_index(self) -> int:
        return self.offset // self.page_size
