from discovery.config.settings import Settings
from discovery.corpus.base import BaseCorpus
from discovery.corpus.memory_adapter import InMemoryCorpus
from discovery.database.repositories.file_repository import FileRepository


class CorpusFactory:
    """Creates the corpus adapter selected by settings."""

    ADAPTERS: dict[str, type[BaseCorpus]] = {
        "postgres": FileRepository,
        "memory": InMemoryCorpus,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseCorpus:
        backend = settings.corpus_backend.lower()
        adapter_cls = cls.ADAPTERS.get(backend)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown corpus backend '{backend}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
