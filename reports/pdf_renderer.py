"""
PDF Renderer - draws composed pages with reportlab

Phase two of the export. Input is a ComposedDocument (millimetres, top-left
origin); output is the PDF as bytes. The canvas runs in invariant mode so the
same document always renders to the same bytes.
"""

import io
import logging

from reportlab.lib.colors import HexColor
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas as pdf_canvas

from .components import Circle, Line, Primitive, Rect, RoundedRect, TextRun
from .composer import ComposedDocument

logger = logging.getLogger(__name__)


class _PageDrawer:
    """Converts top-left millimetre coordinates to reportlab points."""

    def __init__(self, canvas: pdf_canvas.Canvas, page_height: float):
        self.canvas = canvas
        self.page_height = page_height

    def _y(self, y: float) -> float:
        return (self.page_height - y) * mm

    def draw(self, primitive: Primitive) -> None:
        c = self.canvas
        if isinstance(primitive, Rect):
            c.setFillColor(HexColor(primitive.fill))
            c.rect(primitive.x * mm, self._y(primitive.y + primitive.h),
                   primitive.w * mm, primitive.h * mm, stroke=0, fill=1)
        elif isinstance(primitive, RoundedRect):
            c.setStrokeColor(HexColor(primitive.stroke))
            c.roundRect(primitive.x * mm, self._y(primitive.y + primitive.h),
                        primitive.w * mm, primitive.h * mm, primitive.radius * mm,
                        stroke=1, fill=0)
        elif isinstance(primitive, Circle):
            c.setFillColor(HexColor(primitive.fill))
            c.circle(primitive.cx * mm, self._y(primitive.cy), primitive.r * mm, stroke=0, fill=1)
        elif isinstance(primitive, Line):
            c.setStrokeColor(HexColor(primitive.stroke))
            c.line(primitive.x1 * mm, self._y(primitive.y1), primitive.x2 * mm, self._y(primitive.y2))
        elif isinstance(primitive, TextRun):
            c.setFont(primitive.font, primitive.size)
            c.setFillColor(HexColor(primitive.color))
            c.drawString(primitive.x * mm, self._y(primitive.y), primitive.text)
        else:
            raise TypeError(f"Unknown primitive: {type(primitive).__name__}")


def render_pdf(document: ComposedDocument) -> bytes:
    """Render all pages of a composed document to PDF bytes."""
    geometry = document.geometry
    buffer = io.BytesIO()
    canvas = pdf_canvas.Canvas(
        buffer,
        pagesize=(geometry.width * mm, geometry.height * mm),
        invariant=1,
    )
    if document.filename:
        canvas.setTitle(document.filename)

    drawer = _PageDrawer(canvas, geometry.height)
    for page in document.pages:
        for primitive in page.primitives:
            drawer.draw(primitive)
        canvas.showPage()
    canvas.save()

    pdf_bytes = buffer.getvalue()
    logger.info(f"Rendered {document.page_count} page(s), {len(pdf_bytes) / 1024:.1f} KB")
    return pdf_bytes
