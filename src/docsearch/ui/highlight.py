"""Highlighting as a span scan instead of repeated string replacement.

Each pass finds character intervals in the display text. The intervals of
all passes are then cut into a flat sequence of ``Span`` objects, each
carrying the set of highlight kinds covering it. Markup is produced last,
escaping every span's text and wrapping it in the tags for its kinds, so
markers never split an entity, never nest across each other, and never let
backend text through unescaped.
"""
from __future__ import annotations

import html
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Sequence

TRUNCATE_AT = 300
ELLIPSIS = "..."
MIN_TERM_LENGTH = 3

# Azure wraps hit terms in <em> inside highlight fragments.
_BACKEND_MARKERS = re.compile(r"</?em>", re.IGNORECASE)
_PARTIAL_ENTITY = re.compile(r"&[#a-zA-Z0-9]*$")


class HighlightKind(str, Enum):
    FIELD = "highlight"
    SEARCH_TERM = "search-term"


# Outermost first when a span carries several kinds.
_WRAP_ORDER = (HighlightKind.FIELD, HighlightKind.SEARCH_TERM)
_TAGS = {
    HighlightKind.FIELD: ('<span class="highlight">', "</span>"),
    HighlightKind.SEARCH_TERM: ('<strong class="search-term">', "</strong>"),
}


@dataclass(frozen=True, slots=True)
class Span:
    text: str
    kinds: frozenset[HighlightKind] = frozenset()

    @property
    def is_highlighted(self) -> bool:
        return bool(self.kinds)


Interval = tuple[int, int]


def escape(text: str | None) -> str:
    return html.escape(text or "")


def truncate_escaped(escaped: str, limit: int = TRUNCATE_AT) -> tuple[str, bool]:
    """Cut escaped text to ``limit`` characters.

    Returns the kept text and whether it was cut. A cut landing inside an
    entity such as ``&amp;`` drops the partial entity.
    """
    if len(escaped) <= limit:
        return escaped, False
    kept = escaped[:limit]
    partial = _PARTIAL_ENTITY.search(kept)
    if partial:
        kept = kept[:partial.start()]
    return kept, True


# ---------------------------------------------------------------------------
# Interval finders
# ---------------------------------------------------------------------------

def query_terms(query: str | None) -> list[str]:
    """Lower-cased, de-duplicated whitespace terms longer than two characters."""
    seen: list[str] = []
    for term in (query or "").lower().split():
        if len(term) >= MIN_TERM_LENGTH and term not in seen:
            seen.append(term)
    return seen


def field_highlight_phrases(highlights: Mapping[str, Sequence[str]] | None) -> list[str]:
    """Every highlight value for every field, backend markers removed."""
    phrases: list[str] = []
    if not highlights:
        return phrases
    for values in highlights.values():
        if not isinstance(values, (list, tuple)):
            continue
        for value in values:
            phrase = _BACKEND_MARKERS.sub("", str(value)) if value is not None else ""
            if phrase and phrase not in phrases:
                phrases.append(phrase)
    return phrases


def find_literal(text: str, phrases: Iterable[str]) -> list[Interval]:
    """Case-insensitive, global, literal occurrences of each phrase."""
    intervals: list[Interval] = []
    for phrase in phrases:
        pattern = re.compile(re.escape(phrase), re.IGNORECASE)
        intervals.extend(m.span() for m in pattern.finditer(text))
    return intervals


def find_terms(text: str, terms: Iterable[str]) -> list[Interval]:
    """Whole-word, case-insensitive occurrences of each term."""
    intervals: list[Interval] = []
    for term in terms:
        pattern = re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)
        intervals.extend(m.span() for m in pattern.finditer(text) if m.end() > m.start())
    return intervals


# ---------------------------------------------------------------------------
# Span composition
# ---------------------------------------------------------------------------

def compose_spans(text: str, marks: Mapping[HighlightKind, Sequence[Interval]]) -> list[Span]:
    """Cut ``text`` at every interval boundary and label each piece with its kinds.

    Adjacent pieces with the same kinds are merged.
    """
    if not text:
        return []
    cuts = {0, len(text)}
    for intervals in marks.values():
        for start, end in intervals:
            cuts.add(max(0, min(start, len(text))))
            cuts.add(max(0, min(end, len(text))))
    bounds = sorted(cuts)

    spans: list[Span] = []
    for start, end in zip(bounds, bounds[1:]):
        if start == end:
            continue
        kinds = frozenset(
            kind for kind, intervals in marks.items()
            if any(s <= start and end <= e for s, e in intervals)
        )
        if spans and spans[-1].kinds == kinds:
            spans[-1] = Span(spans[-1].text + text[start:end], kinds)
        else:
            spans.append(Span(text[start:end], kinds))
    return spans


def spans_to_markup(spans: Iterable[Span]) -> str:
    parts: list[str] = []
    for span in spans:
        piece = html.escape(span.text)
        for kind in reversed(_WRAP_ORDER):
            if kind in span.kinds:
                open_tag, close_tag = _TAGS[kind]
                piece = f"{open_tag}{piece}{close_tag}"
        parts.append(piece)
    return "".join(parts)


def highlight_spans(
    text: str,
    query: str | None = None,
    highlights: Mapping[str, Sequence[str]] | None = None,
) -> list[Span]:
    """Spans for ``text`` with field highlights (if given) and query terms."""
    marks: dict[HighlightKind, list[Interval]] = {}
    phrases = field_highlight_phrases(highlights)
    if phrases:
        marks[HighlightKind.FIELD] = find_literal(text, phrases)
    terms = query_terms(query)
    if terms:
        marks[HighlightKind.SEARCH_TERM] = find_terms(text, terms)
    return compose_spans(text, marks)


def highlight_content(
    content: str | None,
    query: str | None,
    highlights: Mapping[str, Sequence[str]] | None,
) -> str:
    """Escape, truncate, then apply both highlight passes to result content."""
    escaped, cut = truncate_escaped(escape(content))
    display = html.unescape(escaped)
    markup = spans_to_markup(highlight_spans(display, query, highlights))
    return markup + ELLIPSIS if cut else markup


def highlight_caption(caption: str | None, query: str | None) -> str:
    """Captions are backend summaries: query terms only, no field pass, no cut."""
    display = caption or ""
    return spans_to_markup(highlight_spans(display, query))
