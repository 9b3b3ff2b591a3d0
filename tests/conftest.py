import threading

import pytest

from showsearch_app.errors import UpstreamError
from showsearch_app.search.models import SearchMatch, Show


def _make_match(show_id, genres=(), name=None, score=1.0):
    return SearchMatch(score=score, show=Show(id=show_id, name=name or f"Show {show_id}", genres=tuple(genres)))


@pytest.fixture
def make_match():
    return _make_match


class FakeUpstream:
    """Stand-in for TVMazeAPI that records every query it is asked for."""

    def __init__(self, body='[]', error=None, release=None):
        self.body = body
        self.error = error
        self.release = release
        self.calls = []
        self._lock = threading.Lock()

    def search_shows_raw(self, query):
        with self._lock:
            self.calls.append(query)
        if self.release is not None:
            assert self.release.wait(5), "upstream was never released"
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def fake_upstream():
    return FakeUpstream(body='[{"score": 0.9, "show": {"id": 1, "name": "Batman", "genres": []}}]')


@pytest.fixture
def failing_upstream():
    return FakeUpstream(error=UpstreamError(503, 'Service Unavailable'))


@pytest.fixture
def upstream_factory():
    return FakeUpstream
