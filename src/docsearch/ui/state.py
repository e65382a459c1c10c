"""Session-state helpers for the Streamlit UI.

Holds exactly one ``SearchState`` per browser session and applies the pure
transitions from ``docsearch.ui.pagination`` to it. No HTTP, no rendering.
"""
from typing import Sequence

import streamlit as st

from docsearch.api.schemas.search import CanonicalResult
from docsearch.ui import pagination
from docsearch.ui.pagination import SearchState

_STATE_KEY = "search_state"
_VIEW_KEY = "view"

HOME_VIEW = "home"
RESULTS_VIEW = "results"


def init_session() -> None:
    """Initialize session state variables."""
    if _STATE_KEY not in st.session_state:
        st.session_state[_STATE_KEY] = SearchState()
    if _VIEW_KEY not in st.session_state:
        st.session_state[_VIEW_KEY] = HOME_VIEW
    if "search_error" not in st.session_state:
        st.session_state["search_error"] = False


def get_search_state() -> SearchState:
    return st.session_state.get(_STATE_KEY, SearchState())


def set_search_state(state: SearchState) -> None:
    st.session_state[_STATE_KEY] = state


def get_view() -> str:
    return st.session_state.get(_VIEW_KEY, HOME_VIEW)


def set_view(view: str) -> None:
    st.session_state[_VIEW_KEY] = view


def set_search_error(failed: bool) -> None:
    st.session_state["search_error"] = failed


def has_search_error() -> bool:
    return bool(st.session_state.get("search_error", False))


# ---------------------------------------------------------------------------
# Search lifecycle
# ---------------------------------------------------------------------------

def begin_search() -> int:
    """Register a new search and return its sequence token."""
    state, token = pagination.begin_search(get_search_state())
    set_search_state(state)
    return token


def complete_search(token: int, query: str, results: Sequence[CanonicalResult]) -> bool:
    """Store results if ``token`` is still the latest search. Returns whether they landed."""
    current = get_search_state()
    updated = pagination.complete_search(current, token, query, results)
    set_search_state(updated)
    return updated is not current


def fail_search(token: int) -> bool:
    """Clear results and flag the error if ``token`` is still the latest search."""
    current = get_search_state()
    if not pagination.is_current(current, token):
        return False
    set_search_state(pagination.reset(current))
    set_search_error(True)
    set_view(HOME_VIEW)
    return True


# ---------------------------------------------------------------------------
# Navigation callbacks (used as ``on_click`` handlers)
# ---------------------------------------------------------------------------

def go_to_page(page: int) -> None:
    set_search_error(False)
    set_search_state(pagination.goto_page(get_search_state(), page))


def go_next() -> None:
    set_search_error(False)
    set_search_state(pagination.next_page(get_search_state()))


def go_previous() -> None:
    set_search_error(False)
    set_search_state(pagination.previous_page(get_search_state()))
