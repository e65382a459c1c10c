"""FastAPI dependencies."""
from __future__ import annotations

from fastapi import Depends, Request

from docsearch.config import settings
from docsearch.search.backend import SearchBackend
from docsearch.services.search_service import SearchService


def get_search_backend(request: Request) -> SearchBackend | None:
    """The process-wide backend built at startup; ``None`` when unconfigured."""
    return getattr(request.app.state, "search_backend", None)


def get_search_service(
    backend: SearchBackend | None = Depends(get_search_backend),
) -> SearchService:
    return SearchService(backend, settings.semantic_configuration_name)
