"""
TVMaze API Client - upstream show search
Official documentation: https://www.tvmaze.com/api
"""

import requests
from typing import Optional

from .errors import NetworkError, UpstreamError

DEFAULT_BASE_URL = "https://api.tvmaze.com"


class TVMazeAPI:
    """Client for the TVMaze show search endpoint."""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip('/')
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'ShowSearch/1.0'
        })
        # None means wait for the upstream as long as it takes
        self.timeout = timeout

    def search_shows_raw(self, query: str) -> str:
        """
        Search shows by title and return the response body untouched.

        Args:
            query: Title fragment, sent as typed (already trimmed)

        Returns:
            Raw JSON text: an array of ``{score, show}`` objects

        Raises:
            UpstreamError: the API answered with a non-2xx status
            NetworkError: the request could not be completed
        """
        try:
            resp = self.session.get(
                f"{self.base_url}/search/shows",
                params={'q': query},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise NetworkError(f"TVMaze request failed: {e}") from e

        if not resp.ok:
            raise UpstreamError(resp.status_code, resp.reason or '')

        return resp.text
