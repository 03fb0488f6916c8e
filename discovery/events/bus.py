import threading
from collections.abc import Callable
from typing import Any

from discovery.events.models import DiscoveryEvent
from discovery.logging.logger import Log

Handler = Callable[[Any], None]


class EventBus:
    """In-process publish/subscribe channel for search notifications.

    Handlers are called on the publishing thread, in subscription order,
    at most once per event even when subscribed to several matching types.
    A handler that raises is logged and skipped; delivery continues.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriptions: list[tuple[type, Handler]] = []

    def subscribe(self, event_type: type, handler: Handler) -> None:
        with self._lock:
            self._subscriptions.append((event_type, handler))

    def unsubscribe(self, event_type: type, handler: Handler) -> None:
        with self._lock:
            if (event_type, handler) in self._subscriptions:
                self._subscriptions.remove((event_type, handler))

    def publish(self, event: DiscoveryEvent) -> int:
        """Deliver event to every handler subscribed to its type. Returns delivery count."""
        with self._lock:
            handlers: list[Handler] = []
            for event_type, handler in self._subscriptions:
                if isinstance(event, event_type) and handler not in handlers:
                    handlers.append(handler)
        delivered = 0
        for handler in handlers:
            try:
                handler(event)
                delivered += 1
            except Exception as exc:
                Log.error(f"Event handler {handler!r} failed on {type(event).__name__}: {exc}")
        return delivered
