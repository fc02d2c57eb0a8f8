class SearchError(ValueError):
    """Base class for caller errors raised by the search core."""


class InvalidQuery(SearchError):
    """Query is empty (or only punctuation/whitespace) where one is required."""


class InvalidPagination(SearchError):
    """Page number or page size is zero or negative."""


class InvalidFilter(SearchError):
    """Structured filters contradict each other or are out of range."""
