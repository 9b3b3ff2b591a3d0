"""
Proxy Client - fetches show search results from the ShowSearch proxy.
"""

import os
import requests
from typing import List, Optional

from ..errors import InvalidQuery, NetworkError, UpstreamError
from .models import SearchMatch, parse_search_results

DEFAULT_API_ROOT_URL = "http://localhost:5000"


class ProxyClient:
    """Client for ``GET /search/shows`` on the proxy."""

    def __init__(self, api_root_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.api_root_url = (api_root_url or os.environ.get('API_ROOT_URL') or DEFAULT_API_ROOT_URL).rstrip('/')
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/json'
        })

    def search_shows(self, query: str) -> List[SearchMatch]:
        """
        Search shows through the proxy.

        Args:
            query: Query exactly as the user typed it (trimmed)

        Returns:
            Parsed search matches, in the order the API ranked them

        Raises:
            InvalidQuery: blank query, rejected without a network call
            UpstreamError: proxy answered non-2xx (status surfaced)
            NetworkError: request failed or the body was not a JSON array
        """
        if not query.strip():
            raise InvalidQuery()

        try:
            resp = self.session.get(f"{self.api_root_url}/search/shows", params={'q': query})
        except requests.RequestException as e:
            raise NetworkError(f"Error fetching TV shows: {e}") from e

        if not resp.ok:
            raise UpstreamError(resp.status_code, resp.reason or '')

        try:
            payload = resp.json()
            if not isinstance(payload, list):
                raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
            return parse_search_results(payload)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise NetworkError(f"Malformed search response: {e}") from e
