import pytest
import requests

from showsearch_app.errors import NetworkError, UpstreamError
from showsearch_app.tvmaze_api import DEFAULT_BASE_URL, TVMazeAPI


def _response(status, body, reason="OK"):
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp._content = body.encode("utf-8")
    return resp


@pytest.fixture
def http(monkeypatch):
    session = requests.Session()
    session.calls = []
    session.next_response = _response(200, "[]")

    def fake_get(url, params=None, timeout=None):
        session.calls.append((url, params, timeout))
        if isinstance(session.next_response, Exception):
            raise session.next_response
        return session.next_response

    monkeypatch.setattr(session, "get", fake_get)
    return session


def test_returns_body_untouched(http):
    body = '[ {"score": 1, "show": {"id": 1}} ]'
    http.next_response = _response(200, body)

    raw = TVMazeAPI(session=http).search_shows_raw("Batman")

    assert raw == body
    assert http.calls == [(f"{DEFAULT_BASE_URL}/search/shows", {"q": "Batman"}, None)]


def test_base_url_is_configurable(http):
    TVMazeAPI("http://mirror.test/", session=http).search_shows_raw("bat")

    assert http.calls[0][0] == "http://mirror.test/search/shows"


def test_non_2xx_raises_upstream_error(http):
    http.next_response = _response(503, "down", reason="Service Unavailable")

    with pytest.raises(UpstreamError) as excinfo:
        TVMazeAPI(session=http).search_shows_raw("bat")

    assert excinfo.value.status == 503
    assert str(excinfo.value) == "Upstream error 503: Service Unavailable"


def test_transport_failure_raises_network_error(http):
    http.next_response = requests.Timeout("read timed out")

    with pytest.raises(NetworkError):
        TVMazeAPI(session=http).search_shows_raw("bat")
