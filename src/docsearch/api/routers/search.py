"""Search endpoints."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from docsearch.api.deps import get_search_service
from docsearch.api.schemas.search import IndexInfo, SearchQuery, SearchResponse
from docsearch.domain.exceptions import ConfigurationError, SearchBackendError
from docsearch.logging import logger
from docsearch.services.search_service import SearchService

router = APIRouter(prefix="/api/search", tags=["search"])


@router.post("", response_model=SearchResponse)
def search(
    payload: SearchQuery | None = None,
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    # No body at all is treated like an empty one.
    return service.search(payload or SearchQuery())


@router.get("/info", response_model=IndexInfo)
def index_info(service: SearchService = Depends(get_search_service)):
    """Index statistics passthrough; failures report a fixed message, not a category."""
    try:
        return service.index_info()
    except ConfigurationError:
        return JSONResponse(status_code=500, content={"error": "Azure AI Search is not configured."})
    except SearchBackendError as exc:
        logger.exception("Index info error")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to get index information", "details": exc.message},
        )
