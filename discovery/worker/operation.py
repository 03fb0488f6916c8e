import threading
import uuid
from abc import ABC, abstractmethod
from enum import Enum

from discovery.events.bus import EventBus
from discovery.logging.logger import Log
from discovery.search.cancel import CancelToken
from discovery.search.criteria import SearchCriteria
from discovery.search.exceptions import SearchCancelled
from discovery.search.file_search import FileSearch


class OperationState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


TERMINAL_STATES = frozenset(
    {OperationState.COMPLETED, OperationState.CANCELLED, OperationState.FAILED}
)


class SearchOperation(ABC):
    """One search on its own background thread: start -> work -> publish.

    The terminal state is decided under a lock shared with cancel(), so a
    cancel that arrives before the decision always wins and a cancel that
    arrives after it is a no-op.
    """

    kind = "operation"
    failure_state = OperationState.FAILED

    def __init__(
        self,
        search: FileSearch,
        bus: EventBus,
        criteria: SearchCriteria,
        user_name: str,
    ) -> None:
        self.id = uuid.uuid4().hex
        self.criteria = criteria
        self._search = search
        self._bus = bus
        self._user_name = user_name
        self._cancel = CancelToken()
        self._lock = threading.Lock()
        self._state = OperationState.PENDING
        self._thread = threading.Thread(
            target=self._run,
            name=f"{self.kind}-{self.id[:8]}",
            daemon=True,
        )

    @property
    def state(self) -> OperationState:
        with self._lock:
            return self._state

    @property
    def done(self) -> bool:
        return self.state in TERMINAL_STATES

    def start(self) -> "SearchOperation":
        self._thread.start()
        return self

    def cancel(self) -> bool:
        """Request cooperative cancellation. Returns False if already finished."""
        with self._lock:
            if self._state in TERMINAL_STATES:
                return False
            self._cancel.cancel()
        Log.info(f"Cancellation requested for {self.kind} {self.id}")
        return True

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the worker thread. Returns True if it finished."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        if not self._enter_running():
            self._publish(OperationState.CANCELLED)
            return
        Log.info(f"{self.kind} {self.id} started")
        outcome = OperationState.COMPLETED
        try:
            self._do_in_background(self._cancel)
        except SearchCancelled:
            outcome = OperationState.CANCELLED
        except Exception as exc:
            Log.error(f"{self.kind} {self.id} failed: {exc}")
            outcome = self.failure_state
        final = self._finish(outcome)
        Log.info(f"{self.kind} {self.id} finished: {final.value}")
        self._publish(final)

    def _enter_running(self) -> bool:
        with self._lock:
            if self._cancel.is_cancelled():
                self._state = OperationState.CANCELLED
                return False
            self._state = OperationState.RUNNING
            return True

    def _finish(self, outcome: OperationState) -> OperationState:
        with self._lock:
            if outcome is OperationState.COMPLETED and self._cancel.is_cancelled():
                outcome = OperationState.CANCELLED
            self._state = outcome
            return outcome

    def _publish(self, state: OperationState) -> None:
        event = self._terminal_event(state)
        if event is not None:
            self._bus.publish(event)

    @abstractmethod
    def _do_in_background(self, cancel: CancelToken) -> None:
        """Run the search, storing results on self. Raise to fail."""

    @abstractmethod
    def _terminal_event(self, state: OperationState) -> object | None:
        """Event to publish for the final state, or None to stay silent."""
