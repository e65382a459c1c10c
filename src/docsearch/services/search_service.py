"""Search use-case service. Owns raw→DTO mapping; routers never see backend records."""
from __future__ import annotations

from docsearch.api.schemas.search import (
    IndexInfo,
    SearchQuery,
    SearchResponse,
)
from docsearch.domain.exceptions import ConfigurationError, SearchBackendError
from docsearch.logging import logger
from docsearch.search.backend import SearchBackend, to_backend_error
from docsearch.search.normalize import normalize_answer, normalize_results
from docsearch.search.query import build_search_request


class SearchService:
    def __init__(
        self,
        backend: SearchBackend | None,
        semantic_configuration_name: str | None = None,
    ) -> None:
        self._backend = backend
        self._semantic_configuration_name = semantic_configuration_name

    def _require_backend(self) -> SearchBackend:
        if self._backend is None:
            raise ConfigurationError(
                "Azure AI Search is not configured. Please check your environment variables."
            )
        return self._backend

    def search(self, payload: SearchQuery) -> SearchResponse:
        request = build_search_request(
            payload.query, payload.top, self._semantic_configuration_name,
        )
        backend = self._require_backend()

        logger.info(
            "Searching for %r (top=%d, semantic=%s)",
            request.query_text, request.result_limit, request.is_semantic,
        )
        try:
            raw = backend.search(request)
        except SearchBackendError:
            raise
        except Exception as exc:
            raise to_backend_error(exc) from exc

        results = normalize_results(raw.results)
        answers = [a for a in map(normalize_answer, raw.answers) if a is not None]
        return SearchResponse(
            results=results,
            count=len(results),
            total_results=len(results),
            answers=answers,
        )

    def index_info(self) -> IndexInfo:
        backend = self._require_backend()
        try:
            count = backend.document_count()
        except SearchBackendError:
            raise
        except Exception as exc:
            raise to_backend_error(exc) from exc
        return IndexInfo(index_name=backend.index_name, document_count=count)
