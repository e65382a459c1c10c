"""Shared test fixtures.

  fake_backend: in-memory ``SearchBackend`` recording the requests it sees.
  client: FastAPI TestClient with the backend dependency pointed at it.
  make_result: builds ``CanonicalResult`` objects for UI tests.
"""
from __future__ import annotations

import pytest

from docsearch.api.schemas.search import CanonicalResult
from docsearch.search.backend import BackendSearchResult, RawResult


class FakeBackend:
    """Returns canned hits or raises a canned error."""

    index_name = "test-index"

    def __init__(self, results=None, answers=None, error=None, count=42) -> None:
        self.results = list(results or [])
        self.answers = list(answers or [])
        self.error = error
        self.count = count
        self.requests = []

    def search(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return BackendSearchResult(results=self.results, answers=self.answers)

    def document_count(self) -> int:
        if self.error is not None:
            raise self.error
        return self.count


def raw(doc_id: str = "c1", **document) -> RawResult:
    """Shorthand for a RawResult; ``score``/``reranker_score``/etc. go to metadata."""
    meta_keys = ("score", "reranker_score", "highlights", "captions", "semantic_answer")
    meta = {k: document.pop(k) for k in meta_keys if k in document}
    document.setdefault("chunk_id", doc_id)
    return RawResult(document=document, **meta)


@pytest.fixture
def unconfigured_settings(monkeypatch):
    """Blank out search settings so no real client is ever built."""
    from docsearch.config import settings

    monkeypatch.setattr(settings, "AZURE_SEARCH_ENDPOINT", None)
    monkeypatch.setattr(settings, "AZURE_SEARCH_API_KEY", None)
    monkeypatch.setattr(settings, "AZURE_SEARCH_INDEX_NAME", None)
    monkeypatch.setattr(settings, "AZURE_SEARCH_SEMANTIC_CONFIG", None)
    return settings


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def client(unconfigured_settings, fake_backend):
    """FastAPI TestClient whose search dependency resolves to ``fake_backend``."""
    from fastapi.testclient import TestClient
    from docsearch.api.app import create_app
    from docsearch.api.deps import get_search_backend

    app = create_app()
    app.dependency_overrides[get_search_backend] = lambda: fake_backend
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_result():
    def _make(index: int = 1, **fields) -> CanonicalResult:
        fields.setdefault("id", f"chunk-{index}")
        fields.setdefault("title", f"Result {index}")
        fields.setdefault("content", f"content of result {index}")
        fields.setdefault("score", 1.0)
        return CanonicalResult(**fields)
    return _make
