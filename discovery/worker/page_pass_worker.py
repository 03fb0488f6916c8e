from discovery.events.bus import EventBus
from discovery.events.models import PageRetrievedEvent
from discovery.search.cancel import CancelToken
from discovery.search.criteria import PageRequest, SearchCriteria
from discovery.search.file_search import FileSearch
from discovery.search.models import ResultFile
from discovery.worker.operation import OperationState, SearchOperation


class PagePassWorker(SearchOperation):
    """Retrieves one page of one group; silent unless it completes."""

    kind = "page-pass"
    failure_state = OperationState.CANCELLED

    def __init__(
        self,
        search: FileSearch,
        bus: EventBus,
        criteria: SearchCriteria,
        user_name: str,
        page_request: PageRequest,
    ) -> None:
        super().__init__(search, bus, criteria, user_name)
        self.page_request = page_request
        self.results: list[ResultFile] = []

    def _do_in_background(self, cancel: CancelToken) -> None:
        self.results = self._search.get_files_in_group(
            self.criteria, self._user_name, self.page_request, cancel
        )

    def _terminal_event(self, state: OperationState) -> object | None:
        if state is not OperationState.COMPLETED:
            return None
        return PageRetrievedEvent(
            result_type=self.criteria.resolved_result_type,
            page_index=self.page_request.page_index,
            results=list(self.results),
            group_key=self.page_request.group_key,
            criteria=self.criteria,
            operation_id=self.id,
        )
