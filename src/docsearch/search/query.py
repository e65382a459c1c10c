"""Translate a raw query into a backend search request."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from docsearch.domain.exceptions import InvalidQueryError

DEFAULT_RESULT_LIMIT = 100
MAX_RESULT_LIMIT = 300

HIGHLIGHT_FIELDS: tuple[str, ...] = ("chunk", "title", "text")
SELECTED_FIELDS: tuple[str, ...] = (
    "chunk_id",
    "title",
    "chunk",
    "text",
    "layoutText",
    "metadata_storage_path",
    "keyPhrases",
    "persons",
    "locations",
    "organizations",
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True, slots=True)
class SemanticOptions:
    """Semantic ranking block; present only when a configuration is named."""

    configuration_name: str
    title_field: str = "title"
    content_fields: tuple[str, ...] = ("chunk",)
    keyword_fields: tuple[str, ...] = ("keyPhrases",)
    query_rewrite: bool = True
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class SearchRequest:
    query_text: str
    result_limit: int
    selected_fields: tuple[str, ...] = SELECTED_FIELDS
    highlight_fields: tuple[str, ...] = HIGHLIGHT_FIELDS
    semantic: SemanticOptions | None = None

    @property
    def is_semantic(self) -> bool:
        return self.semantic is not None

    def to_search_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``SearchClient.search``.

        Field mapping for the semantic ranker lives in the index's semantic
        configuration, so only its name travels with the query.
        """
        kwargs: dict[str, Any] = {
            "search_text": self.query_text,
            "top": self.result_limit,
            "select": list(self.selected_fields),
            "highlight_fields": ",".join(self.highlight_fields),
        }
        if self.semantic is not None:
            kwargs["query_type"] = "semantic"
            kwargs["semantic_configuration_name"] = self.semantic.configuration_name
            kwargs["query_caption"] = "extractive"
            kwargs["query_answer"] = "extractive"
        return kwargs


def parse_limit(limit_hint: Any) -> int | None:
    """Parse a loosely typed limit the way a form field would send it.

    Integers pass through, floats are truncated, strings use their leading
    integer. Anything else yields ``None``.
    """
    if isinstance(limit_hint, bool) or limit_hint is None:
        return None
    if isinstance(limit_hint, int):
        return limit_hint
    if isinstance(limit_hint, float):
        if limit_hint != limit_hint or limit_hint in (float("inf"), float("-inf")):
            return None
        return int(limit_hint)
    if isinstance(limit_hint, str):
        match = _LEADING_INT.match(limit_hint)
        return int(match.group(1)) if match else None
    return None


def clamp_limit(limit_hint: Any) -> int:
    """Resolve a limit hint to ``[1, MAX_RESULT_LIMIT]``; 0 or garbage means the default."""
    parsed = parse_limit(limit_hint) or DEFAULT_RESULT_LIMIT
    return max(1, min(parsed, MAX_RESULT_LIMIT))


def build_search_request(
    query_text: str | None,
    limit_hint: Any = None,
    semantic_configuration_name: str | None = None,
) -> SearchRequest:
    """Build the backend request for ``query_text``.

    Raises ``InvalidQueryError`` when the query is empty or whitespace.
    A semantic configuration name switches the request to semantic ranking;
    without one it is a plain keyword search.
    """
    if query_text is None or not query_text.strip():
        raise InvalidQueryError("Search query is required")

    semantic = None
    if semantic_configuration_name and semantic_configuration_name.strip():
        semantic = SemanticOptions(configuration_name=semantic_configuration_name.strip())

    return SearchRequest(
        query_text=query_text.strip(),
        result_limit=clamp_limit(limit_hint),
        semantic=semantic,
    )
