"""Result store and paginator as pure transitions over an immutable state.

No Streamlit here: every function takes a ``SearchState`` and returns a new
one (or derived data). ``docsearch.ui.state`` binds the current state into
the Streamlit session.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence

from docsearch.api.schemas.search import CanonicalResult

PAGE_SIZE = 50
MAX_RESULTS = 300


class StoreStatus(str, Enum):
    IDLE = "idle"              # no search completed yet
    NO_RESULTS = "no_results"
    POPULATED = "populated"


@dataclass(frozen=True, slots=True)
class PaginationState:
    current_page: int = 1
    page_size: int = PAGE_SIZE
    total_results: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_results / self.page_size)


@dataclass(frozen=True, slots=True)
class PageWindow:
    """Derived page metadata; rebuilt from the state on every call."""

    showing_from: int
    showing_to: int
    total: int
    current_page: int
    total_pages: int


@dataclass(frozen=True, slots=True)
class SearchState:
    active_query: str = ""
    results: tuple[CanonicalResult, ...] = ()
    pagination: PaginationState = PaginationState()
    status: StoreStatus = StoreStatus.IDLE
    # Incremented per submitted search; gates which response may land.
    request_seq: int = 0


def load(state: SearchState, query: str, results: Sequence[CanonicalResult]) -> SearchState:
    """Replace the result set for ``query`` and go to page 1."""
    capped = tuple(results[:MAX_RESULTS])
    return SearchState(
        active_query=query,
        results=capped,
        pagination=PaginationState(current_page=1, total_results=len(capped)),
        status=StoreStatus.POPULATED if capped else StoreStatus.NO_RESULTS,
        request_seq=state.request_seq,
    )


def goto_page(state: SearchState, page: int) -> SearchState:
    """Move to ``page``, clamped to the valid range; no-op without results."""
    if state.status is not StoreStatus.POPULATED:
        return state
    total_pages = state.pagination.total_pages
    target = max(1, min(page, total_pages))
    if target == state.pagination.current_page:
        return state
    return replace(state, pagination=replace(state.pagination, current_page=target))


def next_page(state: SearchState) -> SearchState:
    if state.pagination.current_page >= state.pagination.total_pages:
        return state
    return goto_page(state, state.pagination.current_page + 1)


def previous_page(state: SearchState) -> SearchState:
    if state.pagination.current_page <= 1:
        return state
    return goto_page(state, state.pagination.current_page - 1)


def reset(state: SearchState) -> SearchState:
    """Drop the current results and go back to idle, keeping the request sequence."""
    return SearchState(request_seq=state.request_seq)


def page_items(state: SearchState) -> tuple[CanonicalResult, ...]:
    p = state.pagination
    start = (p.current_page - 1) * p.page_size
    return state.results[start:start + p.page_size]


def page_window(state: SearchState) -> PageWindow:
    p = state.pagination
    total = len(state.results)
    return PageWindow(
        showing_from=(p.current_page - 1) * p.page_size + 1 if total else 0,
        showing_to=min(p.current_page * p.page_size, total),
        total=total,
        current_page=p.current_page,
        total_pages=p.total_pages,
    )


# ---------------------------------------------------------------------------
# Out-of-order response gating
# ---------------------------------------------------------------------------

def begin_search(state: SearchState) -> tuple[SearchState, int]:
    """Register a new in-flight search and return its token."""
    token = state.request_seq + 1
    return replace(state, request_seq=token), token


def is_current(state: SearchState, token: int) -> bool:
    return token == state.request_seq


def complete_search(
    state: SearchState, token: int, query: str, results: Sequence[CanonicalResult],
) -> SearchState:
    """Load ``results`` only if ``token`` belongs to the latest search.

    A slower, older response arriving after a newer search was submitted is
    dropped and the state is returned unchanged.
    """
    if not is_current(state, token):
        return state
    return load(state, query, results)
