"""Query translation, backend adapter and result normalization."""

from docsearch.search.backend import (
    AzureSearchBackend,
    BackendSearchResult,
    RawResult,
    SearchBackend,
    build_search_backend,
    classify_failure,
)
from docsearch.search.normalize import normalize_result, normalize_results
from docsearch.search.query import SearchRequest, SemanticOptions, build_search_request

__all__ = [
    "AzureSearchBackend",
    "BackendSearchResult",
    "RawResult",
    "SearchBackend",
    "SearchRequest",
    "SemanticOptions",
    "build_search_backend",
    "build_search_request",
    "classify_failure",
    "normalize_result",
    "normalize_results",
]
