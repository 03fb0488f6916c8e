from dataclasses import dataclass, field

from discovery.search.criteria import SearchCriteria
from discovery.search.keys import GroupKey
from discovery.search.models import FileType, ResultFile


@dataclass(frozen=True)
class SearchCompleteEvent:
    """A size pass finished; group_sizes is in group-sort order."""

    group_sizes: dict[GroupKey, int]
    criteria: SearchCriteria
    operation_id: str = ""


@dataclass(frozen=True)
class SearchCancelledEvent:
    """A size pass was cancelled or failed; carries no results."""

    operation_id: str = ""


@dataclass(frozen=True)
class PageRetrievedEvent:
    """One page of one group, already enriched and sorted."""

    result_type: FileType
    page_index: int
    results: list[ResultFile] = field(default_factory=list)
    group_key: GroupKey | None = None
    criteria: SearchCriteria | None = None
    operation_id: str = ""


DiscoveryEvent = SearchCompleteEvent | SearchCancelledEvent | PageRetrievedEvent
