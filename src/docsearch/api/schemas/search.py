"""Search DTOs: pure Pydantic, camelCase on the wire."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchQuery(BaseModel):
    # Both optional so a missing query reaches the service and becomes a 400.
    query: str | None = None
    # Left untyped; the query translator parses loose limit hints itself.
    top: Any = None


class Caption(_CamelModel):
    text: str = ""
    highlights: str | None = None


class SemanticAnswer(_CamelModel):
    key: str | None = None
    text: str = ""
    highlights: str | None = None
    score: float | None = None


class CanonicalResult(_CamelModel):
    id: str | None = None
    title: str = "Untitled"
    content: str = ""
    text_lines: list[str] = Field(default_factory=list)
    layout_lines: list[str] = Field(default_factory=list)
    url: str = "#"
    key_phrases: list[str] = Field(default_factory=list)
    persons: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    organizations: list[str] = Field(default_factory=list)
    score: float = 0.0
    reranker_score: float | None = None
    highlights: dict[str, list[str]] | None = None
    captions: list[Caption] | None = None
    semantic_answer: SemanticAnswer | None = None


class SearchResponse(_CamelModel):
    results: list[CanonicalResult]
    count: int
    total_results: int
    answers: list[SemanticAnswer] = Field(default_factory=list)


class IndexInfo(_CamelModel):
    index_name: str
    document_count: int
    note: str = "Try searching to see what fields are available in your documents"


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    configuration: dict[str, Any] | None = None
