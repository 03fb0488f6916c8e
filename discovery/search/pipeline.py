from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from discovery.correlation.enricher import CorrelationEnricher
from discovery.search.cancel import CancelToken
from discovery.search.criteria import PageRequest, SearchCriteria
from discovery.search.groups import Group
from discovery.search.keys import GroupKey
from discovery.search.models import ResultFile


@dataclass(slots=True)
class SearchContext:
    criteria: SearchCriteria
    user_name: str
    cancel: CancelToken
    enricher: CorrelationEnricher
    page_request: PageRequest | None = None
    groups: dict[GroupKey, Group] = field(default_factory=dict)
    ordered_groups: list[Group] = field(default_factory=list)
    scanned: int = 0
    matched: int = 0
    page: list[ResultFile] = field(default_factory=list)

    @property
    def target_key(self) -> GroupKey | None:
        return self.page_request.group_key if self.page_request is not None else None


class SearchStep(ABC):
    @abstractmethod
    def run(self, context: SearchContext) -> SearchContext:
        raise NotImplementedError
