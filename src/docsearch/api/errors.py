"""Error → HTTP response mapping. Messages are presentation only, keyed by kind."""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from docsearch.config import settings
from docsearch.domain.exceptions import (
    ConfigurationError,
    ErrorKind,
    InvalidQueryError,
    SearchBackendError,
)
from docsearch.logging import logger

ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.CONFIGURATION: (
        "Azure AI Search is not configured. Please check your environment variables."
    ),
    ErrorKind.AUTH: "Unauthorized. Please check your AZURE_SEARCH_API_KEY.",
    ErrorKind.FORBIDDEN: (
        "Access forbidden. Your IP address may not be allowed. "
        "Check Azure AI Search network rules."
    ),
    ErrorKind.NOT_FOUND: "Index not found. Please verify your AZURE_SEARCH_INDEX_NAME.",
    ErrorKind.TIMEOUT: "Connection timeout. Check network connectivity to Azure AI Search.",
    ErrorKind.UNCLASSIFIED: "Search failed. Please check your Azure AI Search configuration.",
}


def configuration_summary() -> dict:
    """Which connection settings are present, without leaking the key."""
    return {
        "endpoint": settings.AZURE_SEARCH_ENDPOINT or "Not set",
        "hasApiKey": "AZURE_SEARCH_API_KEY" not in settings.missing_search_settings(),
        "indexName": settings.AZURE_SEARCH_INDEX_NAME or "Not set",
    }


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidQueryError)
    def _invalid_query(request: Request, exc: InvalidQueryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(ConfigurationError)
    def _configuration(request: Request, exc: ConfigurationError) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={
                "error": ERROR_MESSAGES[ErrorKind.CONFIGURATION],
                "details": exc.message,
                "configuration": configuration_summary(),
            },
        )

    @app.exception_handler(SearchBackendError)
    def _backend(request: Request, exc: SearchBackendError) -> JSONResponse:
        logger.error("Search error (%s): %s", exc.kind.value, exc.message, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": ERROR_MESSAGES[exc.kind], "details": exc.message},
        )
