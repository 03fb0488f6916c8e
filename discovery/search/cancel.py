import threading

from discovery.search.exceptions import SearchCancelled


class CancelToken:
    """Cooperative cancellation flag shared between a caller and one search."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SearchCancelled()
