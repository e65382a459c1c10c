"""Search backend contract and the Azure AI Search adapter.

The rest of the app sees only ``SearchBackend``: give it a ``SearchRequest``,
get back ``RawResult`` records. Failures leave this module as
``SearchBackendError`` subclasses carrying an ``ErrorKind``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import ServiceRequestTimeoutError, ServiceResponseTimeoutError
from azure.search.documents import SearchClient

from docsearch.domain.exceptions import (
    ErrorKind,
    SearchBackendError,
    backend_error,
)
from docsearch.logging import logger
from docsearch.search.query import SearchRequest

_META_PREFIX = "@search."


@dataclass(frozen=True, slots=True)
class RawResult:
    """One backend hit: the stored document plus search metadata."""

    document: Mapping[str, Any]
    score: float | None = None
    reranker_score: float | None = None
    highlights: Mapping[str, Sequence[str]] | None = None
    captions: Sequence[Mapping[str, Any]] | None = None
    semantic_answer: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class BackendSearchResult:
    results: list[RawResult]
    answers: list[Mapping[str, Any]] = field(default_factory=list)


@runtime_checkable
class SearchBackend(Protocol):
    """What the core needs from a document-search service."""

    @property
    def index_name(self) -> str:
        ...

    def search(self, request: SearchRequest) -> BackendSearchResult:
        """Run ``request`` and return hits in ranked order."""
        ...

    def document_count(self) -> int:
        """Number of documents in the index."""
        ...


# ---------------------------------------------------------------------------
# Failure classification
# ---------------------------------------------------------------------------

_STATUS_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.AUTH,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    408: ErrorKind.TIMEOUT,
    504: ErrorKind.TIMEOUT,
}

# Checked in order; first hit wins.
_MESSAGE_MARKERS: tuple[tuple[tuple[str, ...], ErrorKind], ...] = (
    (("403", "Forbidden"), ErrorKind.FORBIDDEN),
    (("404", "Not Found"), ErrorKind.NOT_FOUND),
    (("401", "Unauthorized"), ErrorKind.AUTH),
    (("timeout", "ETIMEDOUT"), ErrorKind.TIMEOUT),
)


_TIMEOUT_TYPES = (TimeoutError, ServiceRequestTimeoutError, ServiceResponseTimeoutError)


def classify_failure(exc: BaseException) -> ErrorKind:
    """Map an arbitrary backend failure to an ``ErrorKind``.

    Uses the HTTP status code or exception type when the SDK provides one and
    falls back to scanning the message.
    """
    if isinstance(exc, SearchBackendError):
        return exc.kind

    status = getattr(exc, "status_code", None)
    if isinstance(status, int) and status in _STATUS_KINDS:
        return _STATUS_KINDS[status]
    if isinstance(exc, _TIMEOUT_TYPES):
        return ErrorKind.TIMEOUT

    message = str(exc)
    for markers, kind in _MESSAGE_MARKERS:
        if any(marker in message for marker in markers):
            return kind
    return ErrorKind.UNCLASSIFIED


def to_backend_error(exc: BaseException) -> SearchBackendError:
    if isinstance(exc, SearchBackendError):
        return exc
    return backend_error(classify_failure(exc), str(exc))


# ---------------------------------------------------------------------------
# Azure AI Search adapter
# ---------------------------------------------------------------------------

def _as_mapping(obj: Any) -> dict[str, Any] | None:
    """Captions and answers arrive as SDK models; keep their plain fields."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return dict(obj)
    return {
        name: getattr(obj, name, None)
        for name in ("key", "text", "highlights", "score")
        if getattr(obj, name, None) is not None
    }


def _raw_result(doc: Mapping[str, Any], answers_by_key: Mapping[str, Mapping[str, Any]]) -> RawResult:
    document = {k: v for k, v in doc.items() if not k.startswith(_META_PREFIX)}
    captions = doc.get("@search.captions")
    key = document.get("chunk_id")
    return RawResult(
        document=document,
        score=doc.get("@search.score"),
        reranker_score=doc.get("@search.reranker_score"),
        highlights=doc.get("@search.highlights"),
        captions=[_as_mapping(c) for c in captions] if captions else None,
        semantic_answer=answers_by_key.get(str(key)) if key is not None else None,
    )


class AzureSearchBackend:
    """Adapter over ``azure.search.documents.SearchClient``."""

    def __init__(self, client: Any, index_name: str) -> None:
        self._client = client
        self._index_name = index_name

    @classmethod
    def from_settings(cls, endpoint: str, api_key: str, index_name: str) -> "AzureSearchBackend":
        client = SearchClient(endpoint, index_name, AzureKeyCredential(api_key))
        return cls(client, index_name)

    @property
    def index_name(self) -> str:
        return self._index_name

    def search(self, request: SearchRequest) -> BackendSearchResult:
        try:
            paged = self._client.search(**request.to_search_kwargs())
            docs = list(paged)
            answers = []
            if request.is_semantic:
                answers = [_as_mapping(a) for a in (paged.get_answers() or [])]
        except Exception as exc:
            raise to_backend_error(exc) from exc

        answers_by_key = {str(a["key"]): a for a in answers if a.get("key") is not None}
        return BackendSearchResult(
            results=[_raw_result(doc, answers_by_key) for doc in docs],
            answers=answers,
        )

    def document_count(self) -> int:
        try:
            return int(self._client.get_document_count())
        except Exception as exc:
            raise to_backend_error(exc) from exc


def build_search_backend(settings: Any) -> AzureSearchBackend | None:
    """Construct the process-wide backend, or ``None`` when search is unconfigured.

    Never raises: a bad configuration leaves search disabled.
    """
    missing = settings.missing_search_settings()
    if missing:
        logger.warning(
            "Azure AI Search configuration is incomplete; search is disabled. Missing: %s",
            ", ".join(missing),
        )
        return None
    try:
        backend = AzureSearchBackend.from_settings(
            settings.AZURE_SEARCH_ENDPOINT,
            settings.AZURE_SEARCH_API_KEY.get_secret_value(),
            settings.AZURE_SEARCH_INDEX_NAME,
        )
    except Exception as exc:
        logger.error("Failed to initialize Azure AI Search client: %s", exc)
        return None
    logger.info("Azure AI Search client initialized for index %s", settings.AZURE_SEARCH_INDEX_NAME)
    return backend
