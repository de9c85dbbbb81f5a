"""
Torneta AIRO Design System - PDF layout tokens

Single source of layout quantities for the exported AIRO report:
- Page geometry (A4 portrait, millimetres)
- Row, chip and section spacing
- Fonts, sizes and colors
- Text measurement

All lengths are millimetres with a top-left origin; y grows downwards.
The renderer converts to PDF points when drawing.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

# ============================================================================
# BRANDING
# ============================================================================

TORNETA_BRAND = {
    'name': 'Torneta',
    'product': 'AIRO',
    'title': 'AIRO Report',
    'footer': 'Generated via Torneta AIRO Platform',
}

# ============================================================================
# COLORS
# ============================================================================

COLORS = {
    'primary': '#1d4ed8',
    'text': '#111111',
    'muted': '#6b7280',
    'border': '#dcdcdc',
    'divider': '#ebebeb',
    'background': '#f5f9ff',
    'decoration': '#eaf2ff',
    'decorationAlt': '#e3eeff',
    'success': '#22c55e',
    'danger': '#ef4444',
}

# ============================================================================
# TYPOGRAPHY
# ============================================================================

FONT_REGULAR = 'Helvetica'
FONT_BOLD = 'Helvetica-Bold'

TITLE_SIZE = 20
BODY_SIZE = 11
FOOTER_SIZE = 10

# (text, font name, font size in pt) -> width in mm
TextMeasure = Callable[[str, str, float], float]


def measure_text(text: str, font: str, size: float) -> float:
    """Width of a text run in millimetres, using the standard font metrics."""
    return stringWidth(text, font, size) / mm


# ============================================================================
# GEOMETRY
# ============================================================================

@dataclass(frozen=True)
class PageGeometry:
    """Page size and margin. Defaults to A4 portrait with 16mm margins."""
    width: float = 210.0
    height: float = 297.0
    margin: float = 16.0

    @property
    def left(self) -> float:
        return self.margin

    @property
    def right(self) -> float:
        return self.width - self.margin

    @property
    def top(self) -> float:
        return self.margin

    @property
    def bottom(self) -> float:
        """Lowest y any element may reach before a page break."""
        return self.height - self.margin

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin


@dataclass(frozen=True)
class LayoutMetrics:
    """Fixed element sizes and gaps."""
    row_height: float = 12.0
    row_gap: float = 2.0
    row_text_inset: float = 5.0
    row_text_baseline: float = 8.0
    corner_radius: float = 2.0

    dot_radius: float = 2.2
    dot_inset: float = 5.0
    dot_text_inset: float = 10.0

    chip_height: float = 12.0
    chip_pad_x: float = 4.0
    chip_pad_y: float = 3.0
    chip_gap_x: float = 6.0
    chip_line_gap: float = 6.0

    heading_height: float = 8.0
    heading_baseline: float = 5.0
    category_height: float = 8.0
    divider_height: float = 10.0
    section_gap: float = 10.0

    footer_offset: float = 8.0


A4 = PageGeometry()
DEFAULT_METRICS = LayoutMetrics()

# ============================================================================
# HELPERS
# ============================================================================

ELLIPSIS = '...'


def truncate_text(
    text: str,
    max_width: float,
    font: str,
    size: float,
    measure: TextMeasure = measure_text,
) -> str:
    """Truncate text with an ellipsis so it fits max_width (mm).

    The cut point is found by binary search over the prefix length, so the
    number of measurements grows with log(len(text)).
    """
    # widths are derived by adding and removing padding; allow float noise
    limit = max_width + 1e-6
    if not text or measure(text, font, size) <= limit:
        return text

    def fits(cut: int) -> bool:
        return measure(text[:cut].rstrip() + ELLIPSIS, font, size) <= limit

    # largest prefix length in [0, len(text)) whose truncated form fits
    low, high = 0, len(text) - 1
    best = -1
    while low <= high:
        mid = (low + high) // 2
        if fits(mid):
            best = mid
            low = mid + 1
        else:
            high = mid - 1
    if best <= 0:
        return ELLIPSIS
    return text[:best].rstrip() + ELLIPSIS


def format_generated_at(value: datetime) -> str:
    """Generation timestamp as printed in the report header."""
    return value.strftime('%B %d, %Y %H:%M')
