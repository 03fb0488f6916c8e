from collections.abc import Iterator

from discovery.corpus.base import BaseCorpus
from discovery.logging.logger import Log
from discovery.search.filters import apply_filters, passes_all, split_filters
from discovery.search.groups import Group, sort_groups
from discovery.search.keys import group_key_for
from discovery.search.models import ResultFile
from discovery.search.pipeline import SearchContext, SearchStep
from discovery.search.sorting import sort_files


class ScanCorpusStep(SearchStep):
    """Stream the corpus through the filters and bucket survivors by group key.

    With a page request only the requested group is kept, members included.
    """

    def __init__(self, corpus: BaseCorpus) -> None:
        self._corpus = corpus

    def run(self, context: SearchContext) -> SearchContext:
        criteria = context.criteria
        local_filters, correlated_filters = split_filters(criteria.filters)
        enrich_while_scanning = criteria.needs_correlation
        target = context.target_key
        keep_members = target is not None

        records = self._counted(self._corpus.iter_files(context.user_name), context)
        for record in apply_filters(records, local_filters, context.cancel):
            if enrich_while_scanning:
                context.enricher.enrich(record)
            if correlated_filters and not passes_all(record, correlated_filters):
                continue
            key = group_key_for(criteria.grouping, record)
            if target is not None and key != target:
                continue
            group = context.groups.get(key)
            if group is None:
                group = Group(key=key)
                context.groups[key] = group
            group.add(record, keep_member=keep_members)
            context.matched += 1

        Log.debug(
            f"Scanned {context.scanned} files, {context.matched} matched "
            f"in {len(context.groups)} groups"
        )
        return context

    @staticmethod
    def _counted(records: Iterator[ResultFile], context: SearchContext) -> Iterator[ResultFile]:
        for record in records:
            context.scanned += 1
            yield record


class SortGroupsStep(SearchStep):
    def run(self, context: SearchContext) -> SearchContext:
        context.cancel.raise_if_cancelled()
        context.ordered_groups = sort_groups(
            context.groups.values(),
            context.criteria.group_sort,
            context.criteria.group_priority,
        )
        return context


class EnrichMembersStep(SearchStep):
    """Attach correlation data to every member of the requested group."""

    def run(self, context: SearchContext) -> SearchContext:
        group = _target_group(context)
        if group is None or not context.criteria.use_correlation:
            return context
        context.enricher.enrich_all(group.members, context.cancel)
        if context.enricher.offline:
            Log.warning(f"Correlation data unavailable for group '{group.key}'")
        return context


class SortFilesStep(SearchStep):
    def run(self, context: SearchContext) -> SearchContext:
        context.cancel.raise_if_cancelled()
        group = _target_group(context)
        if group is not None:
            group.members = sort_files(group.members, context.criteria.file_sort)
        return context


class SlicePageStep(SearchStep):
    def run(self, context: SearchContext) -> SearchContext:
        context.cancel.raise_if_cancelled()
        request = context.page_request
        group = _target_group(context)
        if request is None or group is None:
            context.page = []
            return context
        group.page = group.members[request.offset : request.offset + request.page_size]
        context.page = list(group.page)
        return context


def _target_group(context: SearchContext) -> Group | None:
    target = context.target_key
    if target is None:
        return None
    return context.groups.get(target)
