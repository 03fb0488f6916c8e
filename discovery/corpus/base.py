from abc import ABC, abstractmethod
from collections.abc import Iterator

from discovery.search.models import ResultFile


class BaseCorpus(ABC):
    """Contract for all read-only file metadata sources."""

    @abstractmethod
    def iter_files(self, user_name: str) -> Iterator[ResultFile]:
        """Stream the records visible to a user.

        Args:
            user_name: Identity of the examiner running the search; records
                owned by other examiners are not returned.

        Raises:
            CorpusUnavailableError: if the underlying store cannot be read.
        """
