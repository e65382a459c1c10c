"""Streamlit search page: home search box, then paged, annotated results.

Run with ``streamlit run src/docsearch/ui/app.py`` while the API is up.
"""
import httpx
import streamlit as st
from pydantic import ValidationError

from docsearch.logging import logger
from docsearch.ui import state
from docsearch.ui.api_client import APIError, get_client
from docsearch.ui.render import (
    page_summary,
    render_navigation,
    render_page,
    results_heading,
)
from docsearch.ui.validation import run_all_checks

STYLES = """
<style>
.result-item { padding: 1rem 0; border-bottom: 1px solid #eee; }
.result-title { display: flex; gap: .5rem; align-items: center; font-size: 1.1rem; }
.document-link { text-decoration: none; font-weight: 600; }
.semantic-badge, .reranker-score { background: #ede7f6; color: #5e35b1;
  border-radius: 4px; padding: 0 .4rem; font-size: .8rem; }
.result-content { margin: .4rem 0; color: #333; }
.result-content .highlight { background: #fff59d; }
.result-content .search-term { color: #1a237e; }
.semantic-indicator { font-size: .8rem; color: #7e57c2; }
.key-phrase, .entity-badge { background: #f1f3f4; border-radius: 4px;
  padding: 0 .4rem; margin-right: .25rem; font-size: .85rem; }
.entities { margin-top: .5rem; }
.result-meta { display: flex; gap: 1rem; font-size: .8rem; color: #666; }
.no-results { text-align: center; color: #666; }
</style>
"""

GENERIC_ERROR = "Search failed. Please try again or check that the search service is running."


def run_search(query: str) -> None:
    """Submit ``query`` and store the response if it is still the latest search."""
    query = query.strip()
    if not query:
        return

    token = state.begin_search()
    state.set_search_error(False)
    try:
        with st.spinner("Searching..."):
            response = get_client().search(query)
    except (APIError, httpx.HTTPError, ValidationError) as exc:
        logger.error("Search request failed: %s", exc)
        state.fail_search(token)
        return

    if state.complete_search(token, query, response.results):
        state.set_view(state.RESULTS_VIEW)
    else:
        logger.info("Dropped stale response for %r", query)


def search_form(key: str, value: str = "") -> None:
    with st.form(key, clear_on_submit=False):
        c1, c2 = st.columns([5, 1])
        query = c1.text_input(
            "Search", value=value, label_visibility="collapsed",
            placeholder="Search your documents...",
        )
        submitted = c2.form_submit_button("Search", use_container_width=True)
    if submitted:
        run_search(query)
        st.rerun()


def navigation() -> None:
    nav = render_navigation(state.get_search_state())
    if not nav.visible:
        return
    cols = st.columns(len(nav.buttons))
    for col, button in zip(cols, nav.buttons):
        if button.is_nav:
            callback = state.go_previous if button is nav.previous else state.go_next
            col.button(
                button.label, key=f"nav-{button.label}", disabled=button.disabled,
                on_click=callback,
            )
        else:
            col.button(
                button.label, key=f"page-{button.page}", help=f"Page {button.page}",
                type="primary" if button.active else "secondary",
                on_click=state.go_to_page, args=(button.page,),
            )


def home_view() -> None:
    st.title("🔎 Document Search")
    for problem in run_all_checks(get_client()):
        st.warning(problem)
    search_form("home_search_form")


def results_view() -> None:
    current = state.get_search_state()
    search_form("results_search_form", value=current.active_query)

    st.subheader(results_heading(current))
    st.caption(page_summary(current))
    for card in render_page(current):
        st.markdown(card, unsafe_allow_html=True)
    navigation()


st.set_page_config(page_title="Document Search", page_icon="🔎", layout="wide")
state.init_session()
st.markdown(STYLES, unsafe_allow_html=True)

if state.has_search_error():
    st.error(GENERIC_ERROR)

if state.get_view() == state.RESULTS_VIEW:
    results_view()
else:
    home_view()
