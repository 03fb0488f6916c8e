import threading
from collections.abc import Callable, Iterator
from datetime import datetime, timezone

import pytest

from discovery.corpus.base import BaseCorpus
from discovery.corpus.memory_adapter import InMemoryCorpus
from discovery.events.bus import EventBus
from discovery.search.models import CorrelationResult, FileType, ResultFile


def make_file(object_id: int, **overrides: object) -> ResultFile:
    """Build a ResultFile with sensible defaults for tests."""
    values: dict[str, object] = {
        "name": f"file{object_id}.jpg",
        "parent_path": "/img/DCIM/",
        "size": 1000 + object_id,
        "mime_type": "image/jpeg",
        "file_type": FileType.IMAGE,
        "md5": f"{object_id:032x}",
        "data_source_id": 1,
        "data_source_name": "laptop.E01",
        "modified_time": datetime(2024, 1, object_id % 28 + 1, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return ResultFile(object_id=object_id, **values)  # type: ignore[arg-type]


class GatedCorpus(BaseCorpus):
    """Yields its records only after `gate` is set; signals `started` on first read."""

    def __init__(self, records: list[ResultFile]) -> None:
        self._records = records
        self.started = threading.Event()
        self.gate = threading.Event()

    def iter_files(self, user_name: str) -> Iterator[ResultFile]:
        self.started.set()
        self.gate.wait(timeout=5)
        yield from self._records


class FailingCorpus(BaseCorpus):
    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    def iter_files(self, user_name: str) -> Iterator[ResultFile]:
        raise self._exc


class EventRecorder:
    """Collects published events and lets tests wait for the first one."""

    def __init__(self, bus: EventBus, *event_types: type) -> None:
        self.events: list[object] = []
        self._received = threading.Event()
        for event_type in event_types:
            bus.subscribe(event_type, self._on_event)

    def _on_event(self, event: object) -> None:
        self.events.append(event)
        self._received.set()

    def wait(self, timeout: float = 5) -> bool:
        return self._received.wait(timeout)


@pytest.fixture()
def file_factory() -> Callable[..., ResultFile]:
    return make_file


@pytest.fixture()
def sized_corpus() -> InMemoryCorpus:
    """Five records of 10..50 bytes, all in one data source."""
    return InMemoryCorpus(
        [make_file(i, size=size) for i, size in enumerate([30, 50, 10, 40, 20], start=1)]
    )


@pytest.fixture()
def correlation_entries() -> dict[str, CorrelationResult]:
    return {
        f"{1:032x}": CorrelationResult(frequency_count=1),
        f"{2:032x}": CorrelationResult(frequency_count=25),
        f"{3:032x}": CorrelationResult(frequency_count=4),
    }


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def gated_corpus_cls() -> type[GatedCorpus]:
    return GatedCorpus


@pytest.fixture()
def failing_corpus_cls() -> type[FailingCorpus]:
    return FailingCorpus


@pytest.fixture()
def recorder_factory(bus: EventBus) -> Callable[..., EventRecorder]:
    def _make(*event_types: type) -> EventRecorder:
        return EventRecorder(bus, *event_types)

    return _make
