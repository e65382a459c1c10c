"""Map raw backend hits onto the canonical result shape.

Backend documents are loosely typed: array fields sometimes arrive as a
single scalar, and any field may be null or missing. Everything here is a
pure function and never raises on missing optional fields.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from docsearch.api.schemas.search import CanonicalResult, Caption, SemanticAnswer
from docsearch.search.backend import RawResult
from docsearch.search.query import MAX_RESULT_LIMIT


def as_list(value: Any) -> list[Any]:
    """Lift a scalar to a one-element list; null or missing becomes ``[]``."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [v for v in value if v is not None]
    return [value]


def _strings(value: Any) -> list[str]:
    return [str(v) for v in as_list(value)]


def coalesce_content(document: Mapping[str, Any]) -> str:
    """First non-empty of: chunk, space-joined text array, scalar text."""
    chunk = document.get("chunk")
    if chunk:
        return str(chunk)
    text = document.get("text")
    if isinstance(text, (list, tuple)):
        joined = " ".join(str(t) for t in text if t is not None)
        if joined:
            return joined
    elif text:
        return str(text)
    return ""


def _optional_str(value: Any) -> str | None:
    return str(value) if value is not None else None


def _optional_float(value: Any) -> float | None:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def normalize_caption(caption: Any) -> Caption | None:
    """Caption record to DTO; null text becomes "", non-mappings are dropped."""
    if not isinstance(caption, Mapping):
        return None
    return Caption(
        text=str(caption.get("text") or ""),
        highlights=_optional_str(caption.get("highlights")),
    )


def normalize_answer(answer: Any) -> SemanticAnswer | None:
    if not isinstance(answer, Mapping):
        return None
    return SemanticAnswer(
        key=_optional_str(answer.get("key")),
        text=str(answer.get("text") or ""),
        highlights=_optional_str(answer.get("highlights")),
        score=_optional_float(answer.get("score")),
    )


def normalize_result(raw: RawResult) -> CanonicalResult:
    doc = raw.document or {}
    doc_id = doc.get("chunk_id")
    captions = [c for c in map(normalize_caption, raw.captions or ()) if c is not None]
    return CanonicalResult(
        id=str(doc_id) if doc_id is not None else None,
        title=str(doc.get("title") or "Untitled"),
        content=coalesce_content(doc),
        text_lines=_strings(doc.get("text")),
        layout_lines=_strings(doc.get("layoutText")),
        url=str(doc.get("metadata_storage_path") or "#"),
        key_phrases=_strings(doc.get("keyPhrases")),
        persons=_strings(doc.get("persons")),
        locations=_strings(doc.get("locations")),
        organizations=_strings(doc.get("organizations")),
        score=raw.score or 0.0,
        reranker_score=raw.reranker_score,
        highlights=(
            {field: _strings(spans) for field, spans in raw.highlights.items()}
            if raw.highlights else None
        ),
        captions=captions or None,
        semantic_answer=normalize_answer(raw.semantic_answer),
    )


def normalize_results(raws: Iterable[RawResult]) -> list[CanonicalResult]:
    """Normalize in rank order, keeping at most ``MAX_RESULT_LIMIT`` hits."""
    results: list[CanonicalResult] = []
    for raw in raws:
        if len(results) >= MAX_RESULT_LIMIT:
            break
        results.append(normalize_result(raw))
    return results
