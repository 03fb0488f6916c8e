from discovery.events.bus import EventBus
from discovery.events.models import SearchCancelledEvent, SearchCompleteEvent
from discovery.search.cancel import CancelToken
from discovery.search.criteria import SearchCriteria
from discovery.search.file_search import FileSearch
from discovery.search.keys import GroupKey
from discovery.worker.operation import OperationState, SearchOperation


class SizePassWorker(SearchOperation):
    """Computes group sizes for a search and announces them on the bus.

    A failed pass is reported as cancelled; partial results are never published.
    """

    kind = "size-pass"

    def __init__(
        self,
        search: FileSearch,
        bus: EventBus,
        criteria: SearchCriteria,
        user_name: str,
    ) -> None:
        super().__init__(search, bus, criteria, user_name)
        self.group_sizes: dict[GroupKey, int] = {}

    def _do_in_background(self, cancel: CancelToken) -> None:
        self.group_sizes = self._search.get_group_sizes(self.criteria, self._user_name, cancel)

    def _terminal_event(self, state: OperationState) -> object | None:
        if state is OperationState.COMPLETED:
            return SearchCompleteEvent(
                group_sizes=dict(self.group_sizes),
                criteria=self.criteria,
                operation_id=self.id,
            )
        return SearchCancelledEvent(operation_id=self.id)
