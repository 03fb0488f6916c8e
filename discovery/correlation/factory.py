from discovery.config.settings import Settings
from discovery.correlation.base import BaseCorrelator
from discovery.correlation.memory_adapter import InMemoryCorrelator
from discovery.database.repositories.central_repository import CentralRepository


class CorrelatorFactory:
    """Creates the correlator matching the configured corpus backend."""

    ADAPTERS: dict[str, type[BaseCorrelator]] = {
        "postgres": CentralRepository,
        "memory": InMemoryCorrelator,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseCorrelator | None:
        """Return None when correlation is disabled."""
        if not settings.correlation_enabled:
            return None
        backend = settings.corpus_backend.lower()
        adapter_cls = cls.ADAPTERS.get(backend)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown correlation backend '{backend}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
