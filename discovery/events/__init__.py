from discovery.events.bus import EventBus
from discovery.events.models import (
    DiscoveryEvent,
    PageRetrievedEvent,
    SearchCancelledEvent,
    SearchCompleteEvent,
)

__all__ = [
    "DiscoveryEvent",
    "EventBus",
    "PageRetrievedEvent",
    "SearchCancelledEvent",
    "SearchCompleteEvent",
]
