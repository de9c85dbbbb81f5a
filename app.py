#!/usr/bin/env python3
"""
AIRO Report Service - Production API

Turns an analysis workflow result into:
1. Report view - formatted scores, ranked competitors, grouped checklist
2. PDF report - paginated document download
3. Delivery - PDF pushed to the configured delivery webhook

Environment Variables (all optional):
- REPORT_LABEL: Report title and filename suffix (default "AIRO Report")
- REPORT_FOOTER_TEXT: Footer branding line
- REPORT_DELIVERY_URL: Webhook for /report/deliver
- REPORT_EXPORT_TIMEOUT: Delivery timeout in seconds
- LOG_LEVEL: Logging level (default INFO)
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from analysis_record import AnalysisRecord, has_scores
from config import get_settings
from pdf_export import WebhookExportBackend, export_report, pdf_filename
from report_assembler import AssembledReport, ReportMeta, assemble_report
from report_types import ExportError
from reports.pdf_renderer import render_pdf

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

# Initialize FastAPI
app = FastAPI(
    title="AIRO Report Service",
    description="Brand visibility report view model + PDF export",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==================== Models ====================

class ReportRequest(BaseModel):
    analysis: Union[Dict[str, Any], List[Any]] = Field(..., description="Analysis workflow response (object or array)")
    subject_name: str = Field("", description="Brand name shown in the report")
    subject_domain: str = Field("", description="Brand domain shown in the report")
    generated_at: Optional[datetime] = None

class CompetitorModel(BaseModel):
    name: str
    domain: Optional[str] = None
    score: float
    scoreDisplay: str

class ChecklistItemModel(BaseModel):
    name: str
    category: str
    weight: float
    weightDisplay: str
    score: float
    passed: bool

class CategoryGroupModel(BaseModel):
    category: str
    label: str
    items: List[ChecklistItemModel]

class ReportViewResponse(BaseModel):
    averageScore: str
    perModelScores: Dict[str, str]
    competitors: List[CompetitorModel]
    checklistByCategory: List[CategoryGroupModel]
    hasScores: bool
    filename: str
    pageCount: int

class DeliveryResponse(BaseModel):
    filename: str
    location: str
    size_bytes: int
    page_count: int

# ==================== Helpers ====================

def _assemble(request: ReportRequest) -> AssembledReport:
    settings = get_settings()
    record = AnalysisRecord.from_payload(request.analysis)
    meta = ReportMeta(
        subject_name=request.subject_name.strip(),
        subject_domain=request.subject_domain.strip(),
        generated_at=request.generated_at or datetime.now(),
    )
    return assemble_report(record, meta, label=settings.report_label, footer=settings.footer_text)

# ==================== Report ====================

@app.post("/report/view", response_model=ReportViewResponse)
async def report_view(request: ReportRequest):
    """On-screen report: the same data the PDF is built from."""
    report = await asyncio.to_thread(_assemble, request)
    return ReportViewResponse(
        **report.view_model.to_dict(),
        hasScores=has_scores(request.analysis),
        filename=pdf_filename(report.filename),
        pageCount=report.document.page_count,
    )

@app.post("/report/pdf")
async def report_pdf(request: ReportRequest):
    """Download the report as a PDF."""
    report = await asyncio.to_thread(_assemble, request)
    try:
        pdf_bytes = await asyncio.to_thread(render_pdf, report.document)
    except Exception as e:
        logger.error(f"PDF rendering failed: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"PDF rendering failed: {str(e)}")

    filename = pdf_filename(report.filename)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )

@app.post("/report/deliver", response_model=DeliveryResponse)
async def report_deliver(request: ReportRequest):
    """Render the PDF and push it to REPORT_DELIVERY_URL."""
    settings = get_settings()
    if not settings.delivery_url:
        raise HTTPException(status_code=503, detail="REPORT_DELIVERY_URL is not configured")

    report = await asyncio.to_thread(_assemble, request)
    backend = WebhookExportBackend(settings.delivery_url, timeout=settings.export_timeout)
    try:
        result = await export_report(report.document, backend)
    except ExportError as e:
        raise HTTPException(status_code=502, detail=f"Report delivery failed: {str(e)}")

    return DeliveryResponse(
        filename=result.filename,
        location=result.location,
        size_bytes=result.size_bytes,
        page_count=result.page_count,
    )

# ==================== Info ====================

@app.get("/")
async def root():
    """Service info."""
    return {
        "service": "AIRO Report Service",
        "version": "1.0.0",
        "status": "ready",
        "endpoints": {
            "/report/view": "POST - Report view model (scores, competitors, checklist)",
            "/report/pdf": "POST - PDF report download",
            "/report/deliver": "POST - PDF report delivery to the configured webhook",
            "/": "GET - This info"
        },
    }

@app.get("/status")
async def status():
    """Health status."""
    return {
        "status": "healthy",
        "delivery_configured": bool(get_settings().delivery_url)
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
