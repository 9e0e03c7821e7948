"""
Exception types raised by fluxseries.

All of them derive from FluxSeriesError so callers can catch everything the
library raises with a single except clause.
"""
from typing import Optional


class FluxSeriesError(Exception):
    """Base class for all fluxseries errors."""
    pass


class InvalidInput(FluxSeriesError, ValueError):
    """Raised when records or series names passed for writing are structurally invalid."""
    pass


class MalformedResult(FluxSeriesError, ValueError):
    """Raised when a query response does not have the expected series/columns/values shape."""
    pass


class TransportError(FluxSeriesError):
    """
    Raised when an HTTP request to the server fails.

    Covers network failures, non-2xx responses, and non-JSON bodies on
    endpoints that must return JSON.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        path: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        super().__init__(message)
