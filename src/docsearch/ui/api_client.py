"""Typed HTTP client for the Streamlit UI.

Only imports from ``docsearch.api.schemas``, never the backend adapter.
Instantiate via ``get_client()`` which caches per Streamlit session.
"""
from __future__ import annotations

import httpx
import streamlit as st

from docsearch.api.schemas.search import IndexInfo, SearchQuery, SearchResponse
from docsearch.config import settings

# The UI always asks for the full capped set and pages locally.
UI_RESULT_LIMIT = 300


class APIError(Exception):
    """Raised when the backend returns a 4xx/5xx response."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")


class DocSearchClient:
    """One method per backend endpoint.  All return pure Pydantic DTOs."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.API_TIMEOUT_SECONDS,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            body = resp.json()
            detail = body.get("error") or body.get("detail") or resp.text
        except (ValueError, AttributeError):
            detail = resp.text
        raise APIError(resp.status_code, str(detail))

    def _json(self, resp: httpx.Response):
        self._raise_for_status(resp)
        try:
            return resp.json()
        except ValueError:
            raise APIError(resp.status_code, "Search service returned a non-JSON response")

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, query: str, top: int = UI_RESULT_LIMIT) -> SearchResponse:
        payload = SearchQuery(query=query, top=top)
        resp = self._client.post("/api/search", json=payload.model_dump())
        return SearchResponse.model_validate(self._json(resp))

    def search_info(self) -> IndexInfo:
        resp = self._client.get("/api/search/info")
        return IndexInfo.model_validate(self._json(resp))

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def health(self) -> dict:
        return self._json(self._client.get("/health"))

    def close(self) -> None:
        self._client.close()


# ------------------------------------------------------------------
# Streamlit helper: one client per session
# ------------------------------------------------------------------

def get_client() -> DocSearchClient:
    """Return a cached ``DocSearchClient`` for the current Streamlit session."""
    if "docsearch_api_client" not in st.session_state:
        st.session_state["docsearch_api_client"] = DocSearchClient(base_url=settings.API_BASE_URL)
    return st.session_state["docsearch_api_client"]
