"""
Exceptions raised by the Venddy search pipeline.
"""


class VenddyError(Exception):
    """Base class for all errors raised by venddy_search."""


class FetchError(VenddyError):
    """A request to a Venddy endpoint failed in transport or returned non-2xx."""

    def __init__(self, message: str, *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class SearchFetchError(FetchError):
    """The vendor search request failed."""


class TaxonomyFetchError(FetchError):
    """A taxonomy table request failed."""


class MalformedResponseError(VenddyError):
    """A response body was not JSON or did not match the expected envelope."""


class NavigationError(VenddyError, ValueError):
    """A next/previous move was requested that the current page does not offer."""
