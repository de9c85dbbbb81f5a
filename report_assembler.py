"""
Report Assembler - view model and PDF document from one analysis record

Both outputs are derived from the same ReportViewModel instance, so the
on-screen report and the exported PDF always show the same competitors and
checklist groups.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from analysis_record import AnalysisRecord
from checklist import group_checklist
from competitors import DEFAULT_SOURCE_ORDER, aggregate_competitors
from report_types import CategoryGroup, CompetitorRecord
from reports.components import chip_text
from reports.composer import ComposedDocument, compose_report
from reports.design_system import (
    A4, DEFAULT_METRICS, TORNETA_BRAND, LayoutMetrics, PageGeometry, TextMeasure,
    format_generated_at, measure_text,
)
from scoring import CHIP_ORDER, MODEL_LABELS, PER_MODEL_KEYS, format_score

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT_NAME = 'Brand'

_UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9 _-]')


@dataclass(frozen=True)
class ReportMeta:
    """Presentation metadata supplied by the caller."""
    subject_name: str
    subject_domain: str = ''
    generated_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ReportViewModel:
    average_score: str
    per_model_scores: Mapping[str, str]
    competitors: Tuple[CompetitorRecord, ...]
    checklist_by_category: Tuple[CategoryGroup, ...]

    def score_for(self, key: str) -> str:
        if key == 'average':
            return self.average_score
        return self.per_model_scores.get(key, format_score(None))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'averageScore': self.average_score,
            'perModelScores': dict(self.per_model_scores),
            'competitors': [c.to_dict() for c in self.competitors],
            'checklistByCategory': [g.to_dict() for g in self.checklist_by_category],
        }


@dataclass(frozen=True)
class AssembledReport:
    view_model: ReportViewModel
    document: ComposedDocument
    filename: str


def report_filename(subject_name: Optional[str], label: str = TORNETA_BRAND['title']) -> str:
    """'<sanitized subject name> <label>', e.g. 'Acme_ Inc_ AIRO Report'."""
    safe_name = _UNSAFE_FILENAME_CHARS.sub('_', subject_name or DEFAULT_SUBJECT_NAME)
    return f'{safe_name} {label}'


def build_view_model(
    record: AnalysisRecord,
    source_order: Sequence[str] = DEFAULT_SOURCE_ORDER,
) -> ReportViewModel:
    """Formatted scores, ranked competitors and grouped checklist."""
    return ReportViewModel(
        average_score=format_score(record.score('average')),
        per_model_scores={key: format_score(record.score(key)) for key in PER_MODEL_KEYS},
        competitors=tuple(aggregate_competitors(record.competitor_sources, source_order)),
        checklist_by_category=tuple(group_checklist(record.checklist)),
    )


def score_chips(view_model: ReportViewModel) -> List[str]:
    """Chip labels in document order: AIRO, ChatGPT, Gemini, DeepSeek."""
    return [chip_text(MODEL_LABELS[key], view_model.score_for(key)) for key in CHIP_ORDER]


def compose_view_model(
    view_model: ReportViewModel,
    meta: ReportMeta,
    label: str = TORNETA_BRAND['title'],
    footer: str = TORNETA_BRAND['footer'],
    geometry: PageGeometry = A4,
    metrics: LayoutMetrics = DEFAULT_METRICS,
    measure: TextMeasure = measure_text,
) -> ComposedDocument:
    """Lay out an already derived view model as a paginated document."""
    return compose_report(
        subject_name=meta.subject_name or DEFAULT_SUBJECT_NAME,
        subject_domain=meta.subject_domain or '',
        generated_at=format_generated_at(meta.generated_at),
        chips=score_chips(view_model),
        competitors=view_model.competitors,
        checklist_groups=view_model.checklist_by_category,
        title=label,
        footer=footer,
        filename=report_filename(meta.subject_name, label),
        geometry=geometry,
        metrics=metrics,
        measure=measure,
    )


def compose_report_document(
    record: AnalysisRecord,
    meta: ReportMeta,
    source_order: Sequence[str] = DEFAULT_SOURCE_ORDER,
    **layout: Any,
) -> ComposedDocument:
    """Derive the view model for a record and lay it out."""
    return compose_view_model(build_view_model(record, source_order), meta, **layout)


def assemble_report(
    record: AnalysisRecord,
    meta: ReportMeta,
    source_order: Sequence[str] = DEFAULT_SOURCE_ORDER,
    label: str = TORNETA_BRAND['title'],
    footer: str = TORNETA_BRAND['footer'],
    geometry: PageGeometry = A4,
    measure: TextMeasure = measure_text,
) -> AssembledReport:
    """View model plus document, the document built from that same view model."""
    view_model = build_view_model(record, source_order)
    document = compose_view_model(view_model, meta, label=label, footer=footer,
                                  geometry=geometry, measure=measure)
    logger.info(
        f"Assembled report for {meta.subject_name!r}: {len(view_model.competitors)} competitors, "
        f"{len(view_model.checklist_by_category)} checklist categories, {document.page_count} page(s)"
    )
    return AssembledReport(view_model=view_model, document=document, filename=document.filename)
