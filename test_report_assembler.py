"""
Tests for report assembly: view model, filename and document consistency.
Run with: pytest test_report_assembler.py -v
"""
import time
from datetime import datetime

from analysis_record import AnalysisRecord
from report_assembler import (
    ReportMeta, assemble_report, build_view_model, compose_report_document,
    report_filename, score_chips,
)
from reports.components import TextRun

META = ReportMeta("Acme, Inc.", "acme.com", datetime(2026, 10, 19, 10, 0))


def _page_texts(document):
    return [p.text for page in document.pages for p in page.primitives if isinstance(p, TextRun)]


def test_score_formatting_scenario():
    """7.5 / 6 / 8.25 / 7 -> 7.50 / 6.00 / 8.25 / 7.00."""
    record = AnalysisRecord.from_payload({"pointAverage": 7.5, "pointDS": 6, "pointGM": 8.25, "pointGPT": 7})
    view = build_view_model(record)
    assert view.average_score == "7.50"
    assert view.per_model_scores == {"ds": "6.00", "gm": "8.25", "gpt": "7.00"}


def test_view_model_from_sample(sample_analysis):
    view = build_view_model(AnalysisRecord.from_payload(sample_analysis))
    data = view.to_dict()

    assert set(data) == {"averageScore", "perModelScores", "competitors", "checklistByCategory"}
    assert [(c["name"], c["score"], c["domain"]) for c in data["competitors"]] == [
        ("Acme", 9.0, "acme.com"),
        ("Initech", 7.0, None),
        ("Globex", 2.0, "globex.com"),
    ]
    assert [(g["category"], [i["name"] for i in g["items"]]) for g in data["checklistByCategory"]] == [
        ("SEO", ["Organization schema", "Sitemap"]),
        ("Content", ["FAQ content"]),
        ("", ["Press mentions"]),
    ]
    assert data["checklistByCategory"][2]["label"] == "Uncategorized"


def test_missing_scores_format_as_zero():
    view = build_view_model(AnalysisRecord.from_payload({}))
    assert view.average_score == "0.00"
    assert set(view.per_model_scores.values()) == {"0.00"}
    assert view.competitors == ()
    assert view.checklist_by_category == ()


def test_score_chip_order():
    record = AnalysisRecord.from_payload({"pointAverage": 1, "pointDS": 2, "pointGM": 3, "pointGPT": 4})
    assert score_chips(build_view_model(record)) == [
        "AIRO: 1.00", "ChatGPT: 4.00", "Gemini: 3.00", "DeepSeek: 2.00",
    ]


def test_report_filename():
    """Characters outside [A-Za-z0-9 _-] become underscores."""
    assert report_filename("Acme, Inc.") == "Acme_ Inc_ AIRO Report"
    assert report_filename("my-brand_2 x") == "my-brand_2 x AIRO Report"
    assert report_filename("Çelik & Co") == "_elik _ Co AIRO Report"
    assert report_filename("") == "Brand AIRO Report"
    assert report_filename(None, "Visibility") == "Brand Visibility"


def test_document_matches_view_model(sample_analysis, measure):
    """The PDF shows exactly the competitors and checklist of the view model."""
    report = assemble_report(AnalysisRecord.from_payload(sample_analysis), META, measure=measure)
    texts = _page_texts(report.document)

    competitor_rows = [t for t in texts if "Mentions:" in t]
    assert competitor_rows == [
        "Acme  (acme.com)  • Mentions: 9.00",
        "Initech  (n/a)  • Mentions: 7.00",
        "Globex  (globex.com)  • Mentions: 2.00",
    ]
    checklist_rows = [t for t in texts if "(Weight:" in t]
    assert checklist_rows == [
        f"{item.name}  (Weight: {item.to_dict()['weightDisplay']})"
        for group in report.view_model.checklist_by_category
        for item in group.items
    ]
    assert report.filename == "Acme_ Inc_ AIRO Report"
    assert report.document.filename == report.filename
    for expected in ["AIRO Report", "Acme, Inc.", "acme.com", "October 19, 2026 10:00"]:
        assert expected in texts


def test_composing_twice_is_identical(sample_analysis, measure):
    record = AnalysisRecord.from_payload(sample_analysis)
    first = compose_report_document(record, META, measure=measure)
    second = compose_report_document(record, META, measure=measure)
    assert first == second


def test_custom_label_and_footer(sample_analysis, measure):
    report = assemble_report(
        AnalysisRecord.from_payload(sample_analysis), META,
        label="Visibility Report", footer="Made by us", measure=measure,
    )
    texts = _page_texts(report.document)
    assert texts[-1] == "Made by us"
    assert "Visibility Report" in texts
    assert report.filename == "Acme_ Inc_ Visibility Report"


def test_fifty_thousand_character_name_composes_quickly():
    """Oversized upstream names are truncated without stalling layout."""
    huge = "A" * 50000
    record = AnalysisRecord.from_payload({
        "competitor_listGPT": [{"company_name": huge, "company_score": 3}],
    })

    started = time.perf_counter()
    report = assemble_report(record, ReportMeta(huge, "acme.com", datetime(2026, 10, 19, 10, 0)))
    elapsed = time.perf_counter() - started

    assert elapsed < 5
    assert report.view_model.competitors[0].name == huge
    competitor_rows = [t for t in _page_texts(report.document) if t.startswith("AAAA")]
    assert competitor_rows and all(t.endswith("...") for t in competitor_rows)
    assert all(len(t) < 200 for t in competitor_rows)
