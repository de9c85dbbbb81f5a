"""
Tests for environment-driven settings.
Run with: pytest test_config.py -v
"""
import logging

from config import get_settings


def test_defaults(monkeypatch):
    for name in ["REPORT_LABEL", "REPORT_DELIVERY_URL", "REPORT_EXPORT_TIMEOUT", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.report_label == "AIRO Report"
    assert settings.delivery_url is None
    assert settings.export_timeout == 60.0
    assert settings.log_level == "INFO"


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    """A bad LOG_LEVEL must not break logging setup at import time."""
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    settings = get_settings()
    assert settings.log_level == "INFO"
    assert isinstance(logging.getLevelName(settings.log_level), int)


def test_log_level_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    assert get_settings().log_level == "DEBUG"


def test_bad_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("REPORT_EXPORT_TIMEOUT", "soon")
    assert get_settings().export_timeout == 60.0
