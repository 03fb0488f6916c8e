from abc import ABC, abstractmethod

from discovery.search.models import CorrelationResult


class BaseCorrelator(ABC):
    """Contract for all cross-case correlation lookups."""

    @abstractmethod
    def lookup(self, md5: str) -> CorrelationResult | None:
        """Look up how often content was seen in other cases.

        Args:
            md5: Lowercase hex MD5 of the file content.

        Returns:
            CorrelationResult, or None when the repository has no data.

        Raises:
            CorrelationUnavailableError: if the repository cannot be reached.
        """
