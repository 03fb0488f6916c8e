import getpass

from discovery.config.settings import Settings
from discovery.corpus.factory import CorpusFactory
from discovery.correlation.factory import CorrelatorFactory
from discovery.events.bus import EventBus
from discovery.logging.logger import Log
from discovery.search.criteria import PageRequest, SearchCriteria
from discovery.search.exceptions import InvalidCriteriaError
from discovery.search.file_search import FileSearch
from discovery.search.groups import GroupSortingAlgorithm
from discovery.search.keys import AttributeType, GroupKey
from discovery.search.sorting import FileSortingMethod
from discovery.worker.operation import SearchOperation
from discovery.worker.page_pass_worker import PagePassWorker
from discovery.worker.size_pass_worker import SizePassWorker


class DiscoveryService:
    """Entry point for callers: starts operations and returns their handles.

    Results arrive only through the event bus. Starting a pass never
    cancels an earlier one; superseding stale requests is up to the caller.
    """

    def __init__(
        self,
        search: FileSearch,
        bus: EventBus,
        user_name: str,
        page_size: int = 100,
    ) -> None:
        self._search = search
        self._bus = bus
        self._user_name = user_name
        self._page_size = page_size

    @property
    def bus(self) -> EventBus:
        return self._bus

    def start_size_pass(self, criteria: SearchCriteria) -> SizePassWorker:
        worker = SizePassWorker(self._search, self._bus, criteria, self._user_name)
        Log.info(f"Starting size pass {worker.id} grouped by {criteria.grouping.value}")
        worker.start()
        return worker

    def start_page_pass(
        self,
        criteria: SearchCriteria,
        group_key: GroupKey,
        page_request: PageRequest | None = None,
    ) -> PagePassWorker:
        """Start fetching one page of the group named by group_key.

        Without a page_request the first page of the default size is fetched.
        """
        if page_request is None:
            page_request = PageRequest(group_key, offset=0, page_size=self._page_size)
        elif page_request.group_key != group_key:
            raise InvalidCriteriaError(
                f"Page request targets group '{page_request.group_key.name}', "
                f"not '{group_key.name}'"
            )
        worker = PagePassWorker(self._search, self._bus, criteria, self._user_name, page_request)
        Log.info(
            f"Starting page pass {worker.id} for group '{group_key.name}' "
            f"offset {page_request.offset} size {page_request.page_size}"
        )
        worker.start()
        return worker

    def cancel(self, handle: SearchOperation) -> bool:
        return handle.cancel()


def default_criteria(settings: Settings) -> SearchCriteria:
    """Criteria built from the default_* settings, with no filters."""
    return SearchCriteria(
        grouping=AttributeType(settings.default_grouping.lower()),
        group_sort=GroupSortingAlgorithm(settings.default_group_sort.lower()),
        file_sort=FileSortingMethod(settings.default_file_sort.lower()),
        use_correlation=settings.correlation_enabled,
    )


def build_service(settings: Settings, bus: EventBus | None = None) -> DiscoveryService:
    """Build a DiscoveryService with the configured corpus and correlator."""
    corpus = CorpusFactory.create(settings)
    correlator = CorrelatorFactory.create(settings)
    search = FileSearch(corpus, correlator)
    user_name = settings.search_user or getpass.getuser()
    return DiscoveryService(
        search,
        bus if bus is not None else EventBus(),
        user_name,
        page_size=settings.default_page_size,
    )
