"""ResultNormalizer: defaults, coalescing and scalar→list lifting."""
from conftest import raw

from docsearch.search.backend import RawResult
from docsearch.search.normalize import (
    as_list,
    coalesce_content,
    normalize_answer,
    normalize_result,
    normalize_results,
)


def test_empty_record_maps_to_defaults():
    result = normalize_result(RawResult(document={}))
    assert result.id is None
    assert result.title == "Untitled"
    assert result.content == ""
    assert result.url == "#"
    assert result.text_lines == []
    assert result.layout_lines == []
    assert result.key_phrases == result.persons == result.locations == result.organizations == []
    assert result.score == 0.0
    assert result.reranker_score is None
    assert result.highlights is None
    assert result.captions is None
    assert result.semantic_answer is None


def test_content_from_array_text_is_space_joined():
    result = normalize_result(raw(text=["first line", "second line"]))
    assert result.content == "first line second line"
    assert result.text_lines == ["first line", "second line"]


def test_chunk_wins_over_array_text():
    result = normalize_result(raw(chunk="the chunk", text=["ignored", "text"]))
    assert result.content == "the chunk"


def test_scalar_text_is_used_and_lifted():
    result = normalize_result(raw(text="only line", layoutText="layout"))
    assert result.content == "only line"
    assert result.text_lines == ["only line"]
    assert result.layout_lines == ["layout"]


def test_empty_chunk_falls_through():
    assert coalesce_content({"chunk": "", "text": []}) == ""
    assert coalesce_content({"chunk": None, "text": "fallback"}) == "fallback"


def test_null_array_fields_become_empty_and_scalars_are_lifted():
    result = normalize_result(raw(
        keyPhrases=None, persons="Ada Lovelace", locations=["Paris", None], organizations=[],
    ))
    assert result.key_phrases == []
    assert result.persons == ["Ada Lovelace"]
    assert result.locations == ["Paris"]
    assert result.organizations == []


def test_as_list():
    assert as_list(None) == []
    assert as_list("x") == ["x"]
    assert as_list(("a", "b")) == ["a", "b"]


def test_reranker_score_passes_through_only_when_present():
    assert normalize_result(raw(score=1.5)).reranker_score is None
    assert normalize_result(raw(score=1.5, reranker_score=None)).reranker_score is None
    result = normalize_result(raw(score=1.5, reranker_score=3.4))
    assert result.score == 1.5
    assert result.reranker_score == 3.4


def test_captions_highlights_and_answer_pass_through():
    result = normalize_result(raw(
        title="Lease",
        metadata_storage_path="https://store/docs/lease.pdf",
        highlights={"chunk": ["<em>renewal</em> terms"]},
        captions=[{"text": "Renewal terms apply.", "highlights": None}],
        semantic_answer={"key": "c1", "text": "Two years.", "score": 0.9},
    ))
    assert result.title == "Lease"
    assert result.url == "https://store/docs/lease.pdf"
    assert result.highlights == {"chunk": ["<em>renewal</em> terms"]}
    assert result.captions[0].text == "Renewal terms apply."
    assert result.semantic_answer.text == "Two years."


def test_wire_shape_is_camel_case():
    body = normalize_result(raw(text=["a"], reranker_score=2.0)).model_dump(by_alias=True)
    for key in ("textLines", "layoutLines", "keyPhrases", "rerankerScore", "semanticAnswer"):
        assert key in body


def test_normalize_results_caps_at_300():
    raws = [raw(f"c{i}") for i in range(350)]
    results = normalize_results(raws)
    assert len(results) == 300
    assert results[0].id == "c0"
    assert results[-1].id == "c299"


def test_null_caption_text_becomes_empty_string():
    result = normalize_result(raw(chunk="x", captions=[{"text": None}, "not-a-caption", {"text": "ok"}]))
    assert [c.text for c in result.captions] == ["", "ok"]


def test_malformed_answer_is_coerced():
    answer = normalize_answer({"key": 7, "text": None, "score": "bad"})
    assert (answer.key, answer.text, answer.score) == ("7", "", None)
    assert normalize_answer("nope") is None
    assert normalize_result(raw(semantic_answer={"text": None})).semantic_answer.text == ""
