"""Domain-specific exceptions.

``str(exc)`` is always a message that can be shown to the user as is.
"""

from __future__ import annotations


class ServiceError(Exception):
    default_message = "Unknown error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class InvalidQuery(ServiceError):
    default_message = "Invalid search parameters."

    @classmethod
    def too_short(cls, min_length: int = 2) -> "InvalidQuery":
        return cls(f"Please enter at least {min_length} characters to search")


class PageLimitExceeded(ServiceError):
    def __init__(self, max_pages: int = 3) -> None:
        super().__init__(f"Search limited to {max_pages} pages. Try a more specific search.")
        self.max_pages = max_pages


class SearchCancelled(ServiceError):
    default_message = "Search was superseded by a newer request."


class UpstreamError(ServiceError):
    """Failure talking to OMDb. ``transient`` kinds are retried by the client."""

    transient = False
    default_message = "Connection error. Please check your internet and try again."

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFound(UpstreamError):
    @classmethod
    def for_query(cls, query: str) -> "NotFound":
        return cls(
            f'No results found for "{query}". '
            "Check the spelling or try different search terms."
        )

    @classmethod
    def for_detail(cls) -> "NotFound":
        return cls(
            "This movie or series is no longer available in the database. "
            "Try searching for a different version or check the title."
        )


class TooManyResults(UpstreamError):
    @classmethod
    def for_query(cls, query: str) -> "TooManyResults":
        return cls(
            f'Too many results for "{query}". '
            "Try to be more specific in your search (e.g., add year, director, etc.) "
            "or navigate through pages to explore all results."
        )


class RequestTimeout(UpstreamError):
    transient = True
    default_message = "Request timeout. Please check your internet connection."


class NetworkUnavailable(UpstreamError):
    transient = True
    default_message = "No internet connection. Please verify your connection and try again."


class AuthError(UpstreamError):
    default_message = "Authentication error with the API. Please check your configuration."


class ServerError(UpstreamError):
    transient = True
    default_message = "Server is experiencing issues. Please try again in a few moments."


class UnknownUpstreamError(UpstreamError):
    pass


__all__ = [
    "AuthError",
    "InvalidQuery",
    "NetworkUnavailable",
    "NotFound",
    "PageLimitExceeded",
    "RequestTimeout",
    "SearchCancelled",
    "ServerError",
    "ServiceError",
    "TooManyResults",
    "UnknownUpstreamError",
    "UpstreamError",
]
