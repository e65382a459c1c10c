"""Pure rendering of canonical results, headings and page navigation.

Functions here map data to a ``ResultView`` / ``NavigationView`` and then to
HTML strings. Nothing touches Streamlit; the page module only displays what
these return.
"""
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import unquote

from docsearch.api.schemas.search import CanonicalResult
from docsearch.ui.highlight import escape, highlight_caption, highlight_content
from docsearch.ui.pagination import SearchState, StoreStatus, page_items, page_window

MAX_PERSONS = 3
MAX_LOCATIONS = 3
MAX_ORGANIZATIONS = 2
MAX_KEY_PHRASES = 5

UNKNOWN_DOCUMENT = "Unknown Document"
FALLBACK_DOCUMENT = "Document"

NO_RESULTS_MARKUP = """
<div class="result-item">
    <div class="result-content no-results">
        <p>No documents match your search criteria.</p>
        <p>Try using different keywords or check your spelling.</p>
    </div>
</div>
""".strip()


@dataclass(frozen=True, slots=True)
class EntityBadge:
    kind: str      # persons | locations | organizations
    icon: str
    names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ResultView:
    """Everything the result card shows, already escaped/highlighted where it is markup."""

    document_name: str
    url: str
    content_markup: str
    from_caption: bool
    relevance: str
    ai_score: str | None
    key_phrases: tuple[str, ...] = ()
    entities: tuple[EntityBadge, ...] = ()

    @property
    def semantic(self) -> bool:
        return self.ai_score is not None


@dataclass(frozen=True, slots=True)
class NavButton:
    label: str
    page: int
    disabled: bool = False
    active: bool = False
    is_nav: bool = False


@dataclass(frozen=True, slots=True)
class NavigationView:
    visible: bool
    buttons: tuple[NavButton, ...] = ()

    @property
    def previous(self) -> NavButton | None:
        return self.buttons[0] if self.buttons else None

    @property
    def next(self) -> NavButton | None:
        return self.buttons[-1] if self.buttons else None

    @property
    def pages(self) -> tuple[NavButton, ...]:
        return self.buttons[1:-1]


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def document_name(url: str | None) -> str:
    """Display name from the last path segment of ``url``.

    Percent-decoding is strict; on failure the raw segment is used. An
    encoded separator (``%2F``) inside the segment still counts as a path
    separator, so only the part after it is kept.
    """
    if not url or url == "#":
        return UNKNOWN_DOCUMENT
    segment = url.split("/")[-1]
    try:
        decoded = unquote(segment, errors="strict")
        return decoded.split("/")[-1] or FALLBACK_DOCUMENT
    except UnicodeDecodeError:
        return segment or FALLBACK_DOCUMENT


def format_score(score: float | None) -> str:
    return f"{score:.2f}" if score else "N/A"


def entity_badges(result: CanonicalResult) -> tuple[EntityBadge, ...]:
    badges = []
    if result.persons:
        badges.append(EntityBadge("persons", "👤", tuple(result.persons[:MAX_PERSONS])))
    if result.locations:
        badges.append(EntityBadge("locations", "📍", tuple(result.locations[:MAX_LOCATIONS])))
    if result.organizations:
        badges.append(
            EntityBadge("organizations", "🏢", tuple(result.organizations[:MAX_ORGANIZATIONS]))
        )
    return tuple(badges)


def build_result_view(result: CanonicalResult, active_query: str | None) -> ResultView:
    caption = result.captions[0].text if result.captions else None
    if caption:
        content_markup = highlight_caption(caption, active_query)
    else:
        content_markup = highlight_content(result.content, active_query, result.highlights)

    return ResultView(
        document_name=document_name(result.url),
        url=result.url or "#",
        content_markup=content_markup,
        from_caption=bool(caption),
        relevance=format_score(result.score),
        ai_score=f"{result.reranker_score:.2f}" if result.reranker_score is not None else None,
        key_phrases=tuple(result.key_phrases[:MAX_KEY_PHRASES]),
        entities=entity_badges(result),
    )


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------

def _badge_markup(badge: EntityBadge) -> str:
    names = ", ".join(escape(n) for n in badge.names)
    return f'<span class="entity-badge {badge.kind}">{badge.icon} {names}</span>'


def view_to_markup(view: ResultView) -> str:
    parts = [
        '<div class="result-item">',
        '<div class="result-title">',
        f'<a href="{escape(view.url)}" target="_blank" class="document-link">'
        f"📄 {escape(view.document_name)}</a>",
    ]
    if view.semantic:
        parts.append('<span class="semantic-badge">Semantic AI</span>')
    parts.append("</div>")

    parts.append(f'<div class="result-content">{view.content_markup}')
    if view.from_caption:
        parts.append('<div class="semantic-indicator">🧠 AI-enhanced snippet</div>')
    parts.append("</div>")

    if view.key_phrases:
        phrases = " ".join(
            f'<span class="key-phrase">{escape(p)}</span>' for p in view.key_phrases
        )
        parts.append(f'<div class="key-phrases"><strong>Key Phrases:</strong> {phrases}</div>')

    if view.entities:
        badges = " ".join(_badge_markup(b) for b in view.entities)
        parts.append(f'<div class="entities">{badges}</div>')

    parts.append('<div class="result-meta">')
    parts.append(f'<span class="result-score">Relevance: {view.relevance}</span>')
    if view.ai_score is not None:
        parts.append(f'<span class="reranker-score">AI Score: {view.ai_score}</span>')
    parts.append("</div>")
    parts.append("</div>")
    return "\n".join(parts)


def render_result(result: CanonicalResult, active_query: str | None) -> str:
    """HTML card for one result. Never raises on missing optional fields."""
    return view_to_markup(build_result_view(result, active_query))


def render_page(state: SearchState) -> list[str]:
    """Cards for the current page, or the fixed no-match message."""
    if state.status is StoreStatus.NO_RESULTS:
        return [NO_RESULTS_MARKUP]
    return [render_result(r, state.active_query) for r in page_items(state)]


# ---------------------------------------------------------------------------
# Headings and navigation
# ---------------------------------------------------------------------------

def results_heading(state: SearchState) -> str:
    if state.status is StoreStatus.NO_RESULTS:
        return f'No results found for "{state.active_query}"'
    return f'Search Results for "{state.active_query}"'


def results_count_text(state: SearchState) -> str:
    total = len(state.results)
    if total == 0:
        return "0 results"
    return f"{total} result{'s' if total != 1 else ''} found"


def page_summary(state: SearchState) -> str:
    if state.status is not StoreStatus.POPULATED:
        return results_count_text(state)
    w = page_window(state)
    return (
        f"Showing {w.showing_from}-{w.showing_to} of {w.total} results"
        f" · Page {w.current_page} of {w.total_pages}"
    )


def render_navigation(state: SearchState) -> NavigationView:
    """Previous, one button per page, Next. Hidden for a single page."""
    total_pages = state.pagination.total_pages
    if state.status is not StoreStatus.POPULATED or total_pages <= 1:
        return NavigationView(visible=False)

    current = state.pagination.current_page
    buttons = [NavButton("← Previous", max(current - 1, 1), disabled=current == 1, is_nav=True)]
    buttons.extend(
        NavButton(str(page), page, active=page == current) for page in range(1, total_pages + 1)
    )
    buttons.append(
        NavButton("Next Page →", min(current + 1, total_pages),
                  disabled=current == total_pages, is_nav=True)
    )
    return NavigationView(visible=True, buttons=tuple(buttons))
