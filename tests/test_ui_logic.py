import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest

from docsearch.ui import state
from docsearch.ui.api_client import APIError, DocSearchClient
from docsearch.ui.pagination import StoreStatus
from docsearch.ui.validation import run_all_checks, validate_backend_connection


@pytest.fixture
def session(monkeypatch):
    fake_st = SimpleNamespace(session_state={})
    monkeypatch.setattr(state, "st", fake_st)
    state.init_session()
    return fake_st.session_state


def _client(handler) -> DocSearchClient:
    return DocSearchClient(base_url="http://testserver", transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

def test_init_session_defaults(session):
    assert state.get_view() == state.HOME_VIEW
    assert state.get_search_state().status is StoreStatus.IDLE
    assert not state.has_search_error()


def test_latest_search_wins(session, make_result):
    older = state.begin_search()
    newer = state.begin_search()

    assert state.complete_search(newer, "newer", [make_result(1)])
    assert not state.complete_search(older, "older", [make_result(i) for i in range(80)])

    current = state.get_search_state()
    assert current.active_query == "newer"
    assert len(current.results) == 1


def test_navigation_callbacks(session, make_result):
    token = state.begin_search()
    state.complete_search(token, "q", [make_result(i) for i in range(120)])

    state.go_next()
    state.go_next()
    state.go_next()
    assert state.get_search_state().pagination.current_page == 3
    state.go_previous()
    assert state.get_search_state().pagination.current_page == 2
    state.go_to_page(99)
    assert state.get_search_state().pagination.current_page == 3


def test_error_flag(session):
    state.set_search_error(True)
    assert state.has_search_error()
    state.set_search_error(False)
    assert not state.has_search_error()


def test_failed_search_clears_results(session, make_result):
    token = state.begin_search()
    state.complete_search(token, "q", [make_result(i) for i in range(120)])
    state.set_view(state.RESULTS_VIEW)

    assert state.fail_search(state.begin_search())

    current = state.get_search_state()
    assert current.status is StoreStatus.IDLE
    assert current.results == ()
    assert state.has_search_error()
    assert state.get_view() == state.HOME_VIEW


def test_failure_of_superseded_search_is_ignored(session, make_result):
    older = state.begin_search()
    newer = state.begin_search()
    state.complete_search(newer, "newer", [make_result(1)])

    assert not state.fail_search(older)
    assert not state.has_search_error()
    assert len(state.get_search_state().results) == 1


def test_navigation_clears_error_banner(session, make_result):
    token = state.begin_search()
    state.complete_search(token, "q", [make_result(i) for i in range(120)])

    for move in (state.go_next, state.go_previous, lambda: state.go_to_page(3)):
        state.set_search_error(True)
        move()
        assert not state.has_search_error()


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------

def test_client_search_posts_full_limit():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "results": [{"id": "c1", "title": "Lease", "rerankerScore": 2.5}],
            "count": 1,
            "totalResults": 1,
        })

    resp = _client(handler).search("contract")

    assert seen == {"path": "/api/search", "body": {"query": "contract", "top": 300}}
    assert resp.count == 1
    assert resp.results[0].reranker_score == 2.5
    assert resp.answers == []


def test_client_raises_api_error_with_backend_message():
    def handler(request):
        return httpx.Response(500, json={"error": "Access forbidden.", "details": "403"})

    with pytest.raises(APIError) as exc:
        _client(handler).search("contract")
    assert exc.value.status_code == 500
    assert exc.value.detail == "Access forbidden."


def test_client_handles_non_json_errors():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    with pytest.raises(APIError) as exc:
        _client(handler).search_info()
    assert exc.value.detail == "Bad Gateway"


def test_client_wraps_non_json_success_in_api_error():
    def handler(request):
        return httpx.Response(200, text="<html>proxy page</html>")

    with pytest.raises(APIError) as exc:
        _client(handler).search("contract")
    assert exc.value.status_code == 200
    assert "non-JSON" in exc.value.detail


def test_get_client_uses_configured_base_url_and_caches(monkeypatch):
    from docsearch.config import settings
    from docsearch.ui import api_client

    monkeypatch.setattr(api_client, "st", SimpleNamespace(session_state={}))
    monkeypatch.setattr(settings, "API_BASE_URL", "http://search-api:9000")

    first = api_client.get_client()
    assert (first._client.base_url.host, first._client.base_url.port) == ("search-api", 9000)
    assert api_client.get_client() is first


def test_client_search_info():
    def handler(request):
        return httpx.Response(200, json={"indexName": "idx", "documentCount": 3, "note": "n"})

    info = _client(handler).search_info()
    assert info.index_name == "idx"
    assert info.document_count == 3


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def test_validation_reports_unconfigured_search():
    client = MagicMock()
    client.health.return_value = {"status": "ok", "searchConfigured": False}
    errors = validate_backend_connection(client)
    assert len(errors) == 1
    assert "not configured" in errors[0]


def test_validation_passes_when_configured():
    client = MagicMock()
    client.health.return_value = {"status": "ok", "searchConfigured": True}
    assert run_all_checks(client) == []


def test_validation_reports_unreachable_backend():
    client = MagicMock()
    client.health.side_effect = httpx.ConnectError("refused")
    errors = validate_backend_connection(client)
    assert errors and errors[0].startswith("Backend connection failed")
