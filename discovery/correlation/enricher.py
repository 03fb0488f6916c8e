from collections.abc import Iterable

from discovery.correlation.base import BaseCorrelator
from discovery.logging.logger import Log
from discovery.search.cancel import CancelToken
from discovery.search.models import CorrelationResult, ResultFile


class CorrelationEnricher:
    """Attaches correlation data to records for the lifetime of one operation.

    A failing correlator switches the enricher offline: the failure is logged
    once and every later record is treated as having no data.
    """

    def __init__(self, correlator: BaseCorrelator | None) -> None:
        self._correlator = correlator
        self._offline = correlator is None
        self._cache: dict[str, CorrelationResult | None] = {}

    @property
    def offline(self) -> bool:
        return self._offline

    def enrich(self, record: ResultFile) -> ResultFile:
        if record.correlation_checked:
            return record
        record.attach_correlation(self._lookup(record.md5))
        return record

    def enrich_all(
        self,
        records: Iterable[ResultFile],
        cancel: CancelToken | None = None,
    ) -> None:
        for record in records:
            if cancel is not None:
                cancel.raise_if_cancelled()
            self.enrich(record)

    def _lookup(self, md5: str | None) -> CorrelationResult | None:
        if self._offline or not md5:
            return None
        key = md5.lower()
        if key in self._cache:
            return self._cache[key]
        try:
            result = self._correlator.lookup(key)  # type: ignore[union-attr]
        except Exception as exc:
            Log.warning(f"Correlation lookup failed, continuing without correlation data: {exc}")
            self._offline = True
            return None
        self._cache[key] = result
        return result
