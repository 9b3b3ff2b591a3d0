"""
Error taxonomy for the search proxy and the search client.

The proxy maps each of these to an HTTP status class:
  - InvalidQuery    -> 400
  - UpstreamError   -> 502
  - CacheStoreError -> 500
  - NetworkError    -> 500
"""

from typing import Optional


class ShowSearchError(Exception):
    """Base class for every error raised by the search stack."""
    status_code = 500
    public_message = 'Proxy failure'


class InvalidQuery(ShowSearchError):
    """Blank or missing query, rejected before any network call."""
    status_code = 400
    public_message = 'Missing query param: q'

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)


class UpstreamError(ShowSearchError):
    """Search API answered with a non-success status."""
    status_code = 502

    def __init__(self, status: int, reason: str = ''):
        self.status = status
        self.reason = reason or ''
        super().__init__(f"Upstream error {status}: {self.reason}")

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return str(self)


class CacheStoreError(ShowSearchError):
    """Shared cache store unreachable or erroring."""


class NetworkError(ShowSearchError):
    """The HTTP request itself failed (DNS, connection reset, bad body...)."""
