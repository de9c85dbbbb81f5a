"""Shared pytest fixtures: sample analysis responses and a deterministic text measure."""

import pytest


def get_sample_analysis() -> dict:
    """Analysis workflow response as the webhook returns it."""
    return {
        "pointAverage": 7.5,
        "pointDS": 6,
        "pointGM": "8.25",
        "pointGPT": 7,
        "competitor_listDP": [
            {"company_name": "Acme", "company_domain": "acme.com", "company_score": 5},
            {"company_name": "Globex", "company_domain": "globex.com", "company_score": 2},
        ],
        "competitor_listGM": [
            {"company_name": "Acme", "company_domain": "acme.io", "company_score": 9},
            {"company_name": "Initech", "company_score": 3},
            {"company_domain": "nameless.com", "company_score": 99},
        ],
        "competitor_listGPT": [
            {"company_name": "Initech", "company_domain": "initech.com", "company_score": 7},
            "not-an-object",
        ],
        "checklist": [
            {"name": "Organization schema", "category": "SEO", "weight": 0.3, "score": 1},
            {"name": "FAQ content", "category": "Content", "weight": 0.2, "score": 0},
            {"name": "Sitemap", "category": "SEO", "weight": 0.1, "score": 0.5},
            {"name": "Press mentions", "weight": 0.15, "score": 0},
        ],
    }


def fixed_width_measure(text: str, font: str, size: float) -> float:
    """2mm per character regardless of font."""
    return len(text) * 2.0


@pytest.fixture
def sample_analysis() -> dict:
    return get_sample_analysis()


@pytest.fixture
def measure():
    return fixed_width_measure
