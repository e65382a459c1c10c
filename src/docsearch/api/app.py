"""FastAPI application factory."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from docsearch import __version__
from docsearch.logging import set_request_id, setup_logging


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from docsearch.config import settings
        from docsearch.search.backend import build_search_backend

        setup_logging()
        # One read-only client for the whole process; None disables search.
        app.state.search_backend = build_search_backend(settings)
        yield

    app = FastAPI(
        title="Document Search API",
        version=__version__,
        lifespan=lifespan,
    )

    # Import routers inside create_app() to avoid circular imports at module load time
    from docsearch.api.errors import register_exception_handlers
    from docsearch.api.routers.search import router as search_router

    app.include_router(search_router)
    register_exception_handlers(app)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = set_request_id(request.headers.get("X-Request-ID"))
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/health", tags=["ops"])
    def health(request: Request) -> dict:
        return {
            "status": "ok",
            "searchConfigured": getattr(request.app.state, "search_backend", None) is not None,
        }

    return app
