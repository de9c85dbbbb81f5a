"""
Torneta AIRO Design System - PDF Components

Drawing primitives plus the report components built from them.
Each component is a pure function that returns a list of positioned
primitives; nothing here knows about pages or cursors.
"""

from dataclasses import dataclass
from typing import List, Literal, Optional, Union

from .design_system import (
    COLORS, FONT_BOLD, FONT_REGULAR, BODY_SIZE, TITLE_SIZE, FOOTER_SIZE,
    DEFAULT_METRICS, LayoutMetrics, PageGeometry, TextMeasure,
    measure_text, truncate_text,
)

# ============================================================================
# PRIMITIVES
# ============================================================================

@dataclass(frozen=True)
class Rect:
    """Filled rectangle."""
    x: float
    y: float
    w: float
    h: float
    fill: str
    kind: str = 'rect'


@dataclass(frozen=True)
class RoundedRect:
    """Stroked rectangle with rounded corners."""
    x: float
    y: float
    w: float
    h: float
    radius: float
    stroke: str
    kind: str = 'rounded_rect'


@dataclass(frozen=True)
class Circle:
    """Filled circle centred on (cx, cy)."""
    cx: float
    cy: float
    r: float
    fill: str
    kind: str = 'circle'


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    kind: str = 'line'


@dataclass(frozen=True)
class TextRun:
    """Single line of text; y is the baseline, w the measured width."""
    x: float
    y: float
    text: str
    font: str
    size: float
    color: str
    w: float = 0.0
    kind: str = 'text'


Primitive = Union[Rect, RoundedRect, Circle, Line, TextRun]

Status = Literal['pass', 'fail']

# ============================================================================
# TEXT
# ============================================================================

def Text(
    x: float,
    y: float,
    text: str,
    font: str = FONT_REGULAR,
    size: float = BODY_SIZE,
    color: str = COLORS['text'],
    max_width: Optional[float] = None,
    measure: TextMeasure = measure_text,
) -> TextRun:
    """Measured text run, truncated when max_width is given."""
    if max_width is not None:
        text = truncate_text(text, max_width, font, size, measure)
    return TextRun(x=x, y=y, text=text, font=font, size=size, color=color,
                   w=measure(text, font, size))


# ============================================================================
# PAGE BACKGROUND
# ============================================================================

def PageBackground(geometry: PageGeometry, first_page: bool = False) -> List[Primitive]:
    """Pale page fill; the cover page also gets the two decorative circles."""
    parts: List[Primitive] = [
        Rect(0, 0, geometry.width, geometry.height, fill=COLORS['background']),
    ]
    if first_page:
        parts.append(Circle(geometry.width - 20, 18, 22, fill=COLORS['decoration']))
        parts.append(Circle(28, geometry.height - 22, 26, fill=COLORS['decorationAlt']))
    return parts


# ============================================================================
# HEADER
# ============================================================================

def ReportHeader(
    geometry: PageGeometry,
    title: str,
    subject_name: str,
    subject_domain: str,
    generated_at: str,
    measure: TextMeasure = measure_text,
) -> List[Primitive]:
    """Identity block at fixed positions on the first page."""
    left = geometry.left
    width = geometry.content_width
    return [
        Text(left, 20, title, FONT_BOLD, TITLE_SIZE, COLORS['primary'], width, measure),
        Text(left, 28, subject_name, FONT_REGULAR, BODY_SIZE, COLORS['text'], width, measure),
        Text(left, 34, subject_domain, FONT_REGULAR, BODY_SIZE, COLORS['muted'], width, measure),
        Text(left, 40, generated_at, FONT_REGULAR, BODY_SIZE, COLORS['text'], width, measure),
        Line(left, 44, geometry.right, 44, stroke=COLORS['border']),
    ]


# Cursor position where content starts below the header
HEADER_BOTTOM = 54.0

# ============================================================================
# SECTION HEADING / DIVIDER
# ============================================================================

def SectionHeading(
    x: float,
    y: float,
    text: str,
    max_width: float,
    metrics: LayoutMetrics = DEFAULT_METRICS,
    measure: TextMeasure = measure_text,
) -> List[Primitive]:
    return [Text(x, y + metrics.heading_baseline, text, FONT_BOLD, BODY_SIZE,
                 COLORS['primary'], max_width, measure)]


def CategoryHeading(
    x: float,
    y: float,
    text: str,
    max_width: float,
    metrics: LayoutMetrics = DEFAULT_METRICS,
    measure: TextMeasure = measure_text,
) -> List[Primitive]:
    """Uppercase checklist category label."""
    return [Text(x, y + metrics.heading_baseline, text.upper(), FONT_BOLD, BODY_SIZE,
                 COLORS['muted'], max_width, measure)]


def Divider(x1: float, x2: float, y: float) -> List[Primitive]:
    return [Line(x1, y + 2, x2, y + 2, stroke=COLORS['divider'])]


# ============================================================================
# SCORE CHIP
# ============================================================================

def chip_text(label: str, value: str) -> str:
    return f'{label}: {value}'


def chip_width(text: str, metrics: LayoutMetrics = DEFAULT_METRICS,
               measure: TextMeasure = measure_text) -> float:
    """Measured chip width: text width plus horizontal padding."""
    return measure(text, FONT_REGULAR, BODY_SIZE) + metrics.chip_pad_x * 2


def ScoreChip(
    x: float,
    y: float,
    text: str,
    width: float,
    metrics: LayoutMetrics = DEFAULT_METRICS,
    measure: TextMeasure = measure_text,
) -> List[Primitive]:
    """Rounded chip showing one score, e.g. 'ChatGPT: 7.00'."""
    baseline = y + metrics.chip_height - metrics.chip_pad_y - 1
    return [
        RoundedRect(x, y, width, metrics.chip_height, metrics.corner_radius, stroke=COLORS['border']),
        Text(x + metrics.chip_pad_x, baseline, text, FONT_REGULAR, BODY_SIZE, COLORS['text'],
             width - metrics.chip_pad_x * 2, measure),
    ]


# ============================================================================
# ROWS
# ============================================================================

def competitor_line(name: str, domain: Optional[str], mentions: str) -> str:
    return f'{name}  ({domain or "n/a"})  • Mentions: {mentions}'


def checklist_line(name: str, weight: str) -> str:
    return f'{name}  (Weight: {weight})'


def ReportRow(
    x: float,
    y: float,
    width: float,
    text: str,
    status: Optional[Status] = None,
    metrics: LayoutMetrics = DEFAULT_METRICS,
    measure: TextMeasure = measure_text,
) -> List[Primitive]:
    """Card-like full-width row; checklist rows carry a pass/fail dot."""
    parts: List[Primitive] = [
        RoundedRect(x, y, width, metrics.row_height, metrics.corner_radius, stroke=COLORS['border']),
    ]
    inset = metrics.row_text_inset
    if status is not None:
        color = COLORS['success'] if status == 'pass' else COLORS['danger']
        parts.append(Circle(x + metrics.dot_inset, y + metrics.row_height / 2,
                            metrics.dot_radius, fill=color))
        inset = metrics.dot_text_inset
    parts.append(Text(x + inset, y + metrics.row_text_baseline, text, FONT_REGULAR, BODY_SIZE,
                      COLORS['text'], width - inset - metrics.row_text_inset, measure))
    return parts


# ============================================================================
# FOOTER
# ============================================================================

def Footer(
    geometry: PageGeometry,
    text: str,
    metrics: LayoutMetrics = DEFAULT_METRICS,
    measure: TextMeasure = measure_text,
) -> List[Primitive]:
    """Branding line at a fixed offset from the bottom of the page."""
    return [Text(geometry.left, geometry.height - metrics.footer_offset, text, FONT_REGULAR,
                 FOOTER_SIZE, COLORS['primary'], geometry.content_width, measure)]
