"""
Document Composer - page layout for the AIRO PDF report

Phase one of the export: turns report content into pages of positioned
primitives (see components.py). Phase two (pdf_renderer.py) draws them.

Layout rules:
- One cursor (page, x, y) per composition; y only grows within a page
- Before placing an element, if its box would cross the bottom margin the
  page is finalized and the cursor resets to the top-left margin
- Rows start at the left margin and span the content width
- Chips flow left to right; the line-wrap check runs before the page-break check
- An element that cannot fit even on an empty page is placed there anyway and
  clipped, so every placement moves the cursor forward
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from report_types import CategoryGroup, CompetitorRecord
from scoring import format_score

from .components import (
    HEADER_BOTTOM, Primitive, Status,
    CategoryHeading, Divider, Footer, PageBackground, ReportHeader, ReportRow,
    ScoreChip, SectionHeading, checklist_line, chip_width, competitor_line,
)
from .design_system import (
    A4, DEFAULT_METRICS, TORNETA_BRAND, LayoutMetrics, PageGeometry, TextMeasure,
    measure_text,
)

logger = logging.getLogger(__name__)

SCORES_HEADING = 'AI Visibility Scores'
COMPETITORS_HEADING = 'Competitors (Mentions)'
CHECKLIST_HEADING = 'Optimization Checklist'
NO_COMPETITORS_TEXT = 'No competitor data available.'


@dataclass
class LayoutCursor:
    page: int = 0
    x: float = 0.0
    y: float = 0.0


@dataclass
class Page:
    index: int
    primitives: List[Primitive] = field(default_factory=list)


@dataclass(frozen=True)
class ComposedDocument:
    geometry: PageGeometry
    pages: Tuple[Page, ...]
    filename: str = ''

    @property
    def page_count(self) -> int:
        return len(self.pages)


class DocumentComposer:
    """Places report elements onto fixed-size pages."""

    def __init__(
        self,
        geometry: PageGeometry = A4,
        metrics: LayoutMetrics = DEFAULT_METRICS,
        measure: TextMeasure = measure_text,
        background: bool = True,
    ):
        self.geometry = geometry
        self.metrics = metrics
        self.measure = measure
        self.background = background
        self.cursor = LayoutCursor()
        # (page, y, height) of every element placed through the cursor
        self.placements: List[Tuple[int, float, float]] = []
        self._pages: List[Page] = []
        self._fresh = True
        self._start_page()

    # ------------------------------------------------------------------
    # cursor
    # ------------------------------------------------------------------

    def _start_page(self) -> None:
        page = Page(index=len(self._pages))
        if self.background:
            page.primitives.extend(PageBackground(self.geometry, first_page=page.index == 0))
        self._pages.append(page)
        self.cursor = LayoutCursor(page=page.index, x=self.geometry.left, y=self.geometry.top)
        self._fresh = True

    @property
    def current_page(self) -> Page:
        return self._pages[-1]

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def add(self, primitives: Sequence[Primitive]) -> None:
        self.current_page.primitives.extend(primitives)

    def ensure_space(self, height: float) -> bool:
        """Break to a new page if an element of this height would not fit."""
        if self.cursor.y + height > self.geometry.bottom and not self._fresh:
            logger.debug(f"Page break after page {self.cursor.page + 1} at y={self.cursor.y:.1f}")
            self._start_page()
            return True
        return False

    def _advance(self, height: float, gap: float = 0.0) -> None:
        self.placements.append((self.cursor.page, self.cursor.y, height))
        self.cursor.y += height + gap
        self.cursor.x = self.geometry.left
        self._fresh = False

    def advance_to(self, y: float) -> None:
        """Move the cursor down to y (never up)."""
        if y > self.cursor.y:
            self.cursor.y = y
        self.cursor.x = self.geometry.left
        self._fresh = False

    def skip(self, height: float) -> None:
        """Vertical whitespace; no page-break check."""
        self.advance_to(self.cursor.y + height)

    # ------------------------------------------------------------------
    # elements
    # ------------------------------------------------------------------

    def place_heading(self, text: str) -> None:
        height = self.metrics.heading_height
        self.ensure_space(height)
        self.add(SectionHeading(self.geometry.left, self.cursor.y, text,
                                self.geometry.content_width, self.metrics, self.measure))
        self._advance(height)

    def place_category(self, text: str) -> None:
        height = self.metrics.category_height
        self.ensure_space(height)
        self.add(CategoryHeading(self.geometry.left, self.cursor.y, text,
                                 self.geometry.content_width, self.metrics, self.measure))
        self._advance(height)

    def place_divider(self) -> None:
        height = self.metrics.divider_height
        self.ensure_space(height)
        self.add(Divider(self.geometry.left, self.geometry.right, self.cursor.y))
        self._advance(height)

    def place_row(self, text: str, status: Optional[Status] = None) -> None:
        height = self.metrics.row_height
        self.ensure_space(height)
        self.add(ReportRow(self.geometry.left, self.cursor.y, self.geometry.content_width,
                           text, status, self.metrics, self.measure))
        self._advance(height, self.metrics.row_gap)

    def place_chips(self, texts: Sequence[str]) -> None:
        """Lay out chips left to right, wrapping lines and pages as needed."""
        if not texts:
            return
        metrics = self.metrics
        left, right = self.geometry.left, self.geometry.right

        for text in texts:
            width = min(chip_width(text, metrics, self.measure), self.geometry.content_width)

            if self.cursor.x > left and self.cursor.x + width > right:
                self.cursor.x = left
                self.cursor.y += metrics.chip_height + metrics.chip_line_gap

            self.ensure_space(metrics.chip_height)

            self.add(ScoreChip(self.cursor.x, self.cursor.y, text, width, metrics, self.measure))
            self.placements.append((self.cursor.page, self.cursor.y, metrics.chip_height))
            self._fresh = False
            self.cursor.x += width + metrics.chip_gap_x

        self.cursor.y += metrics.chip_height
        self.cursor.x = left

    def place_footer(self, text: str) -> None:
        """Footer on the current (last) page; does not move the cursor."""
        self.add(Footer(self.geometry, text, self.metrics, self.measure))

    def finish(self) -> Tuple[Page, ...]:
        return tuple(self._pages)


def compose_report(
    subject_name: str,
    subject_domain: str,
    generated_at: str,
    chips: Sequence[str],
    competitors: Sequence[CompetitorRecord],
    checklist_groups: Sequence[CategoryGroup],
    title: str = TORNETA_BRAND['title'],
    footer: str = TORNETA_BRAND['footer'],
    filename: str = '',
    geometry: PageGeometry = A4,
    metrics: LayoutMetrics = DEFAULT_METRICS,
    measure: TextMeasure = measure_text,
) -> ComposedDocument:
    """Compose the full AIRO report.

    Section order: header, score chips, divider, competitors (always, with a
    placeholder row when empty), divider, checklist (only when non-empty),
    then the footer on the last page.
    """
    composer = DocumentComposer(geometry, metrics, measure)

    composer.add(ReportHeader(geometry, title, subject_name, subject_domain, generated_at, measure))
    composer.advance_to(HEADER_BOTTOM)

    composer.place_heading(SCORES_HEADING)
    composer.place_chips(chips)
    composer.skip(metrics.section_gap)
    composer.place_divider()

    composer.place_heading(COMPETITORS_HEADING)
    if not competitors:
        composer.place_row(NO_COMPETITORS_TEXT)
    for competitor in competitors:
        composer.place_row(competitor_line(competitor.name, competitor.domain,
                                           format_score(competitor.score)))
    composer.place_divider()

    if any(group.items for group in checklist_groups):
        composer.place_heading(CHECKLIST_HEADING)
        for group in checklist_groups:
            composer.place_category(group.label)
            for item in group.items:
                composer.place_row(checklist_line(item.name, format_score(item.weight)),
                                   status='pass' if item.passed else 'fail')

    composer.place_footer(footer)

    pages = composer.finish()
    logger.info(f"Composed report for {subject_name!r}: {len(pages)} page(s)")
    return ComposedDocument(geometry=geometry, pages=pages, filename=filename)
