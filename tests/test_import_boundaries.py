"""
Import boundary guard for src/docsearch/ui/.

Rule: UI files talk to the backend only through the HTTP client. They must
never import the Azure SDK, the search adapter, or the service layer.
Service files must not import fastapi.
"""

import ast
from collections.abc import Callable
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

REPO_ROOT = Path(__file__).parent.parent
UI_ROOT = REPO_ROOT / "src" / "docsearch" / "ui"

BANNED_MODULES = {
    "azure",
    "fastapi",
}
BANNED_PREFIXES = (
    "azure.",
    "docsearch.search.backend",
    "docsearch.services",
    "docsearch.api.app",
    "docsearch.api.deps",
    "docsearch.api.routers",
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_banned_import(module_name: str) -> bool:
    """Return True if the module name is in the banned set or starts with a banned prefix."""
    if module_name in BANNED_MODULES:
        return True
    return any(module_name.startswith(prefix) for prefix in BANNED_PREFIXES)


def _file_imports_any(path: Path, is_banned: Callable[[str], bool]) -> bool:
    """Parse *path* with AST and return True if any import matches *is_banned*."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            if any(is_banned(alias.name) for alias in node.names):
                return True
        elif isinstance(node, ast.ImportFrom):
            if is_banned(node.module or ""):
                return True
    return False


def _repo_relative(path: Path) -> str:
    return path.relative_to(REPO_ROOT).as_posix()


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


def test_ui_import_boundaries() -> None:
    violations = [
        _repo_relative(py_file)
        for py_file in sorted(UI_ROOT.rglob("*.py"))
        if _file_imports_any(py_file, _is_banned_import)
    ]
    assert not violations, (
        "UI files must go through docsearch.ui.api_client, not the backend:\n"
        + "\n".join(f"  {v}" for v in violations)
    )


def test_service_import_boundaries() -> None:
    """Service files must not import from fastapi."""
    services_root = REPO_ROOT / "src" / "docsearch" / "services"
    _is_fastapi = lambda m: m.startswith("fastapi")  # noqa: E731
    violations = [
        _repo_relative(py_file)
        for py_file in sorted(services_root.rglob("*.py"))
        if _file_imports_any(py_file, _is_fastapi)
    ]
    assert not violations, (
        "Service files must not import fastapi:\n"
        + "\n".join(f"  {v}" for v in violations)
    )
