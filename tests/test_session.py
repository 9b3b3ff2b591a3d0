import pytest
import requests

from showsearch_app.errors import NetworkError, UpstreamError
from showsearch_app.search.client import ProxyClient
from showsearch_app.search.matcher import ResolutionType
from showsearch_app.search.models import Genre, UNCATEGORIZED
from showsearch_app.search.session import SearchSession, search_delay_from_env


class FakeClient:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def search_shows(self, query):
        self.calls.append(query)
        result = self.responses.get(query, [])
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def session_factory():
    sessions = []

    def factory(responses):
        session = SearchSession(FakeClient(responses), delay=0)
        sessions.append(session)
        return session

    yield factory
    for session in sessions:
        session.close()


def test_exact_fetch_lands_in_cache(session_factory, make_match):
    session = session_factory({"bat": [make_match(1)]})

    session.set_query("  bat ")
    session.wait_idle(timeout=5)
    view = session.view()

    assert session.client.calls == ["bat"]
    assert view.query == "bat"
    assert view.resolution.type is ResolutionType.EXACT_MATCH
    assert view.loading is False


def test_pending_query_shows_longer_results_while_loading(session_factory, make_match):
    session = session_factory({
        "batman": [make_match(1), make_match(2, ["Action"])],
        "bat": UpstreamError(503, "Service Unavailable"),
    })

    session.set_query("batman")
    session.wait_idle(timeout=5)
    session.set_query("bat")
    session.wait_idle(timeout=5)
    view = session.view()

    assert "bat" not in session.cache
    assert view.resolution.type is ResolutionType.PREFIX_EXTENSION
    assert view.loading is True
    assert list(view.genres) == [UNCATEGORIZED, Genre("Action")]


def test_shorter_results_are_not_interactive(session_factory, make_match):
    session = session_factory({
        "ba": [make_match(1)],
        "bat": NetworkError("connection reset"),
    })

    session.set_query("ba")
    session.wait_idle(timeout=5)
    session.set_query("bat")
    session.wait_idle(timeout=5)
    view = session.view()

    assert view.resolution.type is ResolutionType.PREFIX_REDUCTION
    assert view.genres_interactive is False


def test_selection_survives_approximate_states(session_factory, make_match):
    session = session_factory({
        "bat": [make_match(1, ["Drama"]), make_match(2)],
        "batm": [make_match(2)],
    })

    session.set_query("bat")
    session.wait_idle(timeout=5)
    session.select_genre(Genre("Drama"))
    session.select_show(1)
    assert session.view().displayed_show.id == 1
    assert [m.show_id for m in session.view().shows] == [1]

    session.set_query("batm")
    session.wait_idle(timeout=5)
    assert session.view().displayed_show is None

    session.set_query("bat")
    view = session.view()
    assert view.displayed_show.id == 1
    assert session.selection.show_id == 1


def test_blank_query_never_hits_the_network(monkeypatch):
    http = requests.Session()

    def fail(*args, **kwargs):
        raise AssertionError("network call for blank query")

    monkeypatch.setattr(http, "get", fail)
    session = SearchSession(ProxyClient("http://proxy.test", session=http), delay=0)
    try:
        session.set_query("   ")
        session.wait_idle(timeout=5)
        view = session.view()
    finally:
        session.close()

    assert view.resolution.type is ResolutionType.NO_MATCH
    assert view.loading is False
    assert len(session.cache) == 0


def test_search_delay_env(monkeypatch):
    monkeypatch.setenv("SEARCH_DELAY", "250")
    assert search_delay_from_env() == 0.25

    monkeypatch.setenv("SEARCH_DELAY", "soon")
    assert search_delay_from_env() == 0.0

    monkeypatch.delenv("SEARCH_DELAY")
    assert search_delay_from_env() == 0.0


def test_malformed_response_is_logged_and_not_cached(monkeypatch, caplog):
    http = requests.Session()
    body = requests.Response()
    body.status_code = 200
    body._content = b'[{"score": 1, "show": null}]'
    monkeypatch.setattr(http, "get", lambda *args, **kwargs: body)
    session = SearchSession(ProxyClient("http://proxy.test", session=http), delay=0)

    with caplog.at_level("WARNING", logger="showsearch_app.search.session"):
        try:
            session.set_query("bat")
            session.wait_idle(timeout=5)
        finally:
            session.close()

    assert "bat" not in session.cache
    assert any("Search fetch failed for 'bat'" in r.getMessage() for r in caplog.records)


def test_unexpected_client_error_is_logged(session_factory, caplog):
    session = session_factory({"bat": RuntimeError("boom")})

    with caplog.at_level("ERROR", logger="showsearch_app.search.session"):
        session.set_query("bat")
        session.wait_idle(timeout=5)

    assert "bat" not in session.cache
    assert any("Unexpected error fetching 'bat'" in r.getMessage() for r in caplog.records)
