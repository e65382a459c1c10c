import typer

from docsearch.config import settings
from docsearch.logging import logger, setup_logging

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main():
    """
    Document search CLI.
    """
    setup_logging()


@app.command(name="doctor")
def doctor():
    """
    Check search configuration health.
    """
    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🩺 Document Search Doctor\n")

    # ── Check 1: Required connection settings ────────────────────────────────
    print("[Configuration]")
    missing = settings.missing_search_settings()
    for name in ("AZURE_SEARCH_ENDPOINT", "AZURE_SEARCH_API_KEY", "AZURE_SEARCH_INDEX_NAME"):
        if name in missing:
            print(f"  {name:<30}❌ Missing")
            failures.append(f"{name} is not set, add it to .env")
        else:
            print(f"  {name:<30}✅ Set")
            passed += 1

    # ── Check 2: Semantic ranking (optional) ─────────────────────────────────
    semantic = settings.semantic_configuration_name
    if semantic:
        print(f"  {'AZURE_SEARCH_SEMANTIC_CONFIG':<30}✅ {semantic}")
    else:
        print(f"  {'AZURE_SEARCH_SEMANTIC_CONFIG':<30}⚠️  Not set (keyword search only)")

    # ── Check 3: Backend reachable ───────────────────────────────────────────
    print("\n[Backend]")
    if missing:
        print("  Index reachable:              ⚠️  Skipped (configuration incomplete)")
    else:
        from docsearch.api.errors import ERROR_MESSAGES
        from docsearch.domain.exceptions import SearchBackendError
        from docsearch.search.backend import build_search_backend

        backend = build_search_backend(settings)
        try:
            if backend is None:
                raise RuntimeError("client could not be constructed")
            count = backend.document_count()
            print(f"  Index reachable:              ✅ {backend.index_name} ({count} documents)")
            passed += 1
        except SearchBackendError as e:
            print(f"  Index reachable:              ❌ {ERROR_MESSAGES[e.kind]}")
            failures.append(e.message)
        except RuntimeError as e:
            print(f"  Index reachable:              ❌ {e}")
            failures.append(str(e))

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    else:
        print(f"Result: {passed}/{total} checks passed, all good ✅")
        print()


def _service():
    from docsearch.search.backend import build_search_backend
    from docsearch.services.search_service import SearchService

    return SearchService(build_search_backend(settings), settings.semantic_configuration_name)


@app.command(name="search")
def search(
    query: str,
    top: int = typer.Option(10, help="Maximum number of results (1-300)"),
):
    """Run a query against the configured index and print ranked results."""
    from docsearch.api.errors import ERROR_MESSAGES
    from docsearch.api.schemas.search import SearchQuery
    from docsearch.domain.exceptions import InvalidQueryError, SearchBackendError
    from docsearch.ui.render import document_name, format_score

    try:
        response = _service().search(SearchQuery(query=query, top=top))
    except InvalidQueryError as e:
        print(f"❌ {e.message}")
        raise typer.Exit(code=2)
    except SearchBackendError as e:
        logger.error(f"Search failed: {e.message}")
        print(f"❌ {ERROR_MESSAGES[e.kind]}")
        raise typer.Exit(code=1)

    if not response.results:
        print("No results found.")
        return

    print(f"Found {response.count} results:")
    for i, res in enumerate(response.results, 1):
        ai = f" · AI {res.reranker_score:.2f}" if res.reranker_score is not None else ""
        print(f"{i}. {document_name(res.url)} · score {format_score(res.score)}{ai}")
        snippet = res.captions[0].text if res.captions else res.content
        print(f"   {snippet[:160]}")


@app.command(name="info")
def info():
    """Print index name and document count."""
    from docsearch.domain.exceptions import SearchBackendError

    try:
        index = _service().index_info()
    except SearchBackendError as e:
        print(f"❌ Failed to get index information: {e.message}")
        raise typer.Exit(code=1)
    print(f"Index: {index.index_name}")
    print(f"Documents: {index.document_count}")


@app.command(name="serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
):
    """Run the search API."""
    import uvicorn

    uvicorn.run("docsearch.api.app:create_app", factory=True, host=host, port=port)


if __name__ == "__main__":
    app()
