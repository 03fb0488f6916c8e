from collections.abc import Iterable, Iterator
from dataclasses import replace

from discovery.corpus.base import BaseCorpus
from discovery.search.models import ResultFile


class InMemoryCorpus(BaseCorpus):
    """Corpus over a list of already materialized records.

    Records without an owner are visible to every user. Each call yields
    fresh copies so concurrent operations never share record instances.
    """

    def __init__(self, records: Iterable[ResultFile] | None = None) -> None:
        self._records = list(records or [])

    def iter_files(self, user_name: str) -> Iterator[ResultFile]:
        for record in self._records:
            if record.owner is None or record.owner == user_name:
                yield replace(record)
