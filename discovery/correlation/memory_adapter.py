from collections.abc import Mapping

from discovery.correlation.base import BaseCorrelator
from discovery.search.models import CorrelationResult


class InMemoryCorrelator(BaseCorrelator):
    """Correlator backed by a preloaded md5 -> result mapping."""

    def __init__(self, entries: Mapping[str, CorrelationResult] | None = None) -> None:
        self._entries = {k.lower(): v for k, v in (entries or {}).items()}

    def lookup(self, md5: str) -> CorrelationResult | None:
        return self._entries.get(md5.lower())
