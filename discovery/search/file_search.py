"""Size pass and page pass over the file corpus."""

from discovery.correlation.base import BaseCorrelator
from discovery.correlation.enricher import CorrelationEnricher
from discovery.corpus.base import BaseCorpus
from discovery.logging.logger import Log
from discovery.search.cancel import CancelToken
from discovery.search.criteria import PageRequest, SearchCriteria
from discovery.search.exceptions import InvalidCriteriaError
from discovery.search.filters import AbstractFilter
from discovery.search.groups import GroupSortingAlgorithm
from discovery.search.keys import AttributeType, GroupKey
from discovery.search.models import ResultFile
from discovery.search.pipeline import SearchContext, SearchStep
from discovery.search.sorting import FileSortingMethod
from discovery.search.steps import (
    EnrichMembersStep,
    ScanCorpusStep,
    SlicePageStep,
    SortFilesStep,
    SortGroupsStep,
)


class FileSearch:
    """Runs discovery searches against one corpus and an optional correlator.

    Holds no per-search state; every call builds its own groups and records.
    """

    def __init__(self, corpus: BaseCorpus, correlator: BaseCorrelator | None = None) -> None:
        self._corpus = corpus
        self._correlator = correlator

    def get_group_sizes(
        self,
        criteria: SearchCriteria,
        user_name: str,
        cancel: CancelToken | None = None,
    ) -> dict[GroupKey, int]:
        """Count the members of every group, in group-sort order.

        Raises:
            InvalidCriteriaError: if the criteria are malformed.
            CorpusUnavailableError: if the corpus cannot be read.
            SearchCancelled: if cancel is set during the pass.
        """
        _validate(criteria)
        context = self._new_context(criteria, user_name, cancel)
        steps: list[SearchStep] = [ScanCorpusStep(self._corpus), SortGroupsStep()]
        context = _run_steps(steps, context)
        sizes = {group.key: group.count for group in context.ordered_groups}
        Log.info(f"Size pass found {len(sizes)} groups, {context.matched} files")
        return sizes

    def get_files_in_group(
        self,
        criteria: SearchCriteria,
        user_name: str,
        page_request: PageRequest,
        cancel: CancelToken | None = None,
    ) -> list[ResultFile]:
        """Return one ordered, correlation-enriched page of one group.

        An unknown group key yields an empty page.

        Raises:
            InvalidCriteriaError: if the criteria or page request are malformed.
            CorpusUnavailableError: if the corpus cannot be read.
            SearchCancelled: if cancel is set during the pass.
        """
        _validate(criteria)
        page_request.validate()
        context = self._new_context(criteria, user_name, cancel)
        context.page_request = page_request
        steps: list[SearchStep] = [
            ScanCorpusStep(self._corpus),
            EnrichMembersStep(),
            SortFilesStep(),
            SlicePageStep(),
        ]
        context = _run_steps(steps, context)
        Log.info(
            f"Page pass for group '{page_request.group_key}' returned {len(context.page)} "
            f"files (page {page_request.page_index})"
        )
        return context.page

    def _new_context(
        self,
        criteria: SearchCriteria,
        user_name: str,
        cancel: CancelToken | None,
    ) -> SearchContext:
        correlator = self._correlator if criteria.use_correlation else None
        return SearchContext(
            criteria=criteria,
            user_name=user_name,
            cancel=cancel if cancel is not None else CancelToken(),
            enricher=CorrelationEnricher(correlator),
        )


def _run_steps(steps: list[SearchStep], context: SearchContext) -> SearchContext:
    for step in steps:
        context.cancel.raise_if_cancelled()
        context = step.run(context)
    return context


def _validate(criteria: SearchCriteria) -> None:
    if not isinstance(criteria.grouping, AttributeType):
        raise InvalidCriteriaError(f"Unknown grouping attribute '{criteria.grouping}'")
    if not isinstance(criteria.group_sort, GroupSortingAlgorithm):
        raise InvalidCriteriaError(f"Unknown group sorting algorithm '{criteria.group_sort}'")
    if not isinstance(criteria.file_sort, FileSortingMethod):
        raise InvalidCriteriaError(f"Unknown file sorting method '{criteria.file_sort}'")
    for search_filter in criteria.filters:
        if not isinstance(search_filter, AbstractFilter):
            raise InvalidCriteriaError(f"Not a search filter: {search_filter!r}")
