"""Pre-flight validation for the Streamlit UI.

No backend imports; uses the API client for every check.
"""
from typing import List


def validate_backend_connection(client=None) -> List[str]:
    """Validate that the FastAPI backend is reachable and search is configured."""
    errors = []
    try:
        if client is None:
            from docsearch.ui.api_client import DocSearchClient
            client = DocSearchClient()
        health = client.health()
    except Exception as e:
        errors.append(f"Backend connection failed: {e}")
        return errors

    if not health.get("searchConfigured", False):
        errors.append(
            "Search backend is not configured. Set AZURE_SEARCH_ENDPOINT, "
            "AZURE_SEARCH_API_KEY and AZURE_SEARCH_INDEX_NAME."
        )
    return errors


def run_all_checks(client=None) -> List[str]:
    """Run all validation checks."""
    errors = []
    errors.extend(validate_backend_connection(client))
    return errors
