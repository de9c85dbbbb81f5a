"""
Tests for tolerant parsing of analysis responses.
Run with: pytest test_analysis_record.py -v
"""
import dataclasses

import pytest

from analysis_record import AnalysisPayload, AnalysisRecord, has_scores, normalize_response


def test_record_from_sample(sample_analysis):
    """Scores, sources and checklist are normalized."""
    record = AnalysisRecord.from_payload(sample_analysis)

    assert record.score("average") == 7.5
    assert record.score("gm") == 8.25
    assert set(record.competitor_sources) == {"ds", "gm", "gpt"}
    assert len(record.competitor_sources["gm"]) == 3
    assert [item.name for item in record.checklist] == [
        "Organization schema", "FAQ content", "Sitemap", "Press mentions",
    ]
    assert record.checklist[3].category == ""


def test_missing_fields_default_to_empty():
    """An empty response is a valid record with zero scores."""
    record = AnalysisRecord.from_payload({})
    assert record.score("average") == 0.0
    assert record.score("gpt") == 0.0
    assert all(len(entries) == 0 for entries in record.competitor_sources.values())
    assert record.checklist == ()


def test_null_and_non_list_collections_are_empty():
    record = AnalysisRecord.from_payload({
        "competitor_listDP": None,
        "competitor_listGM": "oops",
        "checklist": {"name": "not a list"},
    })
    assert record.competitor_sources["ds"] == ()
    assert record.competitor_sources["gm"] == ()
    assert record.checklist == ()


def _as_plain(record):
    return dict(record.scores), dict(record.competitor_sources), record.checklist


def test_array_response_uses_first_element(sample_analysis):
    """Some workflows wrap the result in a one-element array."""
    wrapped = AnalysisRecord.from_payload([sample_analysis])
    assert _as_plain(wrapped) == _as_plain(AnalysisRecord.from_payload(sample_analysis))
    assert normalize_response([]) == {}
    assert normalize_response("text") == {}


def test_payload_model_accepts_field_names_and_aliases():
    by_alias = AnalysisPayload.model_validate({"pointAverage": 3})
    by_name = AnalysisPayload(point_average=3)
    assert _as_plain(AnalysisRecord.from_payload(by_alias)) == _as_plain(AnalysisRecord.from_payload(by_name))


def test_has_scores():
    assert has_scores({"pointDS": 0})
    assert has_scores([{"pointGPT": None}])
    assert not has_scores({"checklist": []})
    assert not has_scores(None)


def test_record_is_immutable(sample_analysis):
    record = AnalysisRecord.from_payload(sample_analysis)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.checklist = ()
    with pytest.raises(TypeError):
        record.scores["average"] = 1.0
