"""Configuration for the AIRO report service.

All settings come from environment variables; a local `.env.local` is loaded
first when present.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from reports.design_system import TORNETA_BRAND

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _get_env(name: str, fallback: str = "") -> str:
    v = os.getenv(name)
    return (v or fallback).strip()


@dataclass(frozen=True)
class Settings:
    report_label: str
    footer_text: str
    output_dir: str
    delivery_url: Optional[str]
    export_timeout: float
    log_level: str


def get_settings() -> Settings:
    """Read settings from the environment (re-read on every call)."""
    load_dotenv('.env.local')

    try:
        timeout = float(_get_env("REPORT_EXPORT_TIMEOUT", "60"))
    except ValueError:
        timeout = 60.0

    log_level = _get_env("LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    return Settings(
        report_label=_get_env("REPORT_LABEL", TORNETA_BRAND['title']),
        footer_text=_get_env("REPORT_FOOTER_TEXT", TORNETA_BRAND['footer']),
        output_dir=_get_env("REPORT_OUTPUT_DIR", "reports_out"),
        delivery_url=_get_env("REPORT_DELIVERY_URL") or None,
        export_timeout=timeout,
        log_level=log_level,
    )
