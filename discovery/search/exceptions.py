class DiscoveryError(Exception):
    """Base exception for all discovery search errors."""


class CorpusUnavailableError(DiscoveryError):
    """Raised when the file metadata corpus cannot be read."""


class InvalidCriteriaError(DiscoveryError):
    """Raised when search criteria or a page request is malformed."""


class FilterEvaluationError(DiscoveryError):
    """Raised when a filter cannot evaluate a single record."""


class CorrelationUnavailableError(DiscoveryError):
    """Raised when the central repository cannot answer a lookup."""


class SearchCancelled(Exception):
    """Raised inside a search when its cancel token has been set."""
