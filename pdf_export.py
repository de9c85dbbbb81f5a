"""
AIRO report PDF exporter.

Renders a composed report and hands it to a delivery backend:
- FileExportBackend: writes <output_dir>/<filename>.pdf
- WebhookExportBackend: POSTs the PDF as base64 JSON to a configurable endpoint

Expected webhook payload (POST JSON):
{
  "filename": "Acme AIRO Report.pdf",
  "pdf_base64": "JVBERi0xLjQK...",
  "size_bytes": 4821
}

Export is the only asynchronous step. Delivery is shielded from cancellation:
once started it either completes or fails as a whole.
"""

import os
import json
import base64
import asyncio
import logging
import argparse
import tempfile
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol

import httpx

from analysis_record import AnalysisRecord
from config import get_settings
from report_assembler import ReportMeta, assemble_report
from report_types import ExportError
from reports.composer import ComposedDocument
from reports.pdf_renderer import render_pdf

logger = logging.getLogger(__name__)


def pdf_filename(filename: str) -> str:
    return filename if filename.lower().endswith(".pdf") else f"{filename}.pdf"


class ExportBackend(Protocol):
    name: str

    async def deliver(self, filename: str, pdf_bytes: bytes) -> str:
        """Deliver one PDF; returns where it went."""
        ...


class FileExportBackend:
    """Writes the PDF into a directory; the file appears atomically."""
    name = "file"

    def __init__(self, output_dir: str):
        self.output_dir = output_dir

    def _write(self, filename: str, pdf_bytes: bytes) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        target = os.path.join(self.output_dir, pdf_filename(filename))
        fd, tmp_path = tempfile.mkstemp(dir=self.output_dir, suffix=".part")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(pdf_bytes)
            os.replace(tmp_path, target)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        return target

    async def deliver(self, filename: str, pdf_bytes: bytes) -> str:
        return await asyncio.to_thread(self._write, filename, pdf_bytes)


class WebhookExportBackend:
    """POSTs the PDF to an HTTP endpoint."""
    name = "webhook"

    def __init__(
        self,
        endpoint: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    async def deliver(self, filename: str, pdf_bytes: bytes) -> str:
        payload = {
            "filename": pdf_filename(filename),
            "pdf_base64": base64.b64encode(pdf_bytes).decode("ascii"),
            "size_bytes": len(pdf_bytes),
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.post(self.endpoint, json=payload)
            resp.raise_for_status()
        return self.endpoint


def _delivery_error(backend_name: str, error: Exception) -> ExportError:
    """Log a failed delivery and wrap it as ExportError."""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        logger.error(f"{backend_name} delivery failed: HTTP {status}")
        return ExportError(f"Delivery failed: HTTP {status}", backend=backend_name,
                           is_retryable=status >= 500)
    if isinstance(error, httpx.HTTPError):
        logger.error(f"{backend_name} delivery error: {error}")
        return ExportError(f"Delivery error: {error}", backend=backend_name, is_retryable=True)
    logger.error(f"{backend_name} delivery error: {type(error).__name__}: {error}")
    return ExportError(f"Delivery error: {error}", backend=backend_name)


def _detached_delivery_logger(filename: str, backend_name: str) -> Callable[["asyncio.Future[str]"], None]:
    """Done-callback that reports a delivery whose caller was cancelled."""
    def _log_outcome(task: "asyncio.Future[str]") -> None:
        if task.cancelled():
            logger.error(f"{backend_name} delivery of {filename!r} was cancelled")
            return
        error = task.exception()
        if error is None:
            logger.info(f"Exported {filename!r} via {backend_name} -> {task.result()} (caller cancelled)")
        elif isinstance(error, Exception):
            export_error = _delivery_error(backend_name, error)
            logger.error(f"Delivery of {filename!r} failed after caller cancelled: {export_error}")
        else:
            logger.error(f"{backend_name} delivery of {filename!r} aborted: {type(error).__name__}")
    return _log_outcome


@dataclass(frozen=True)
class ExportResult:
    filename: str
    location: str
    size_bytes: int
    page_count: int


async def export_report(document: ComposedDocument, backend: ExportBackend) -> ExportResult:
    """Render a composed document and deliver it through the backend.

    Raises:
        ExportError: rendering or delivery failed. The caller's view model and
            document are left untouched and can be exported again.
    """
    filename = document.filename or "report"
    try:
        pdf_bytes = await asyncio.to_thread(render_pdf, document)
    except Exception as e:
        raise ExportError(f"PDF rendering failed: {e}", backend=backend.name) from e

    delivery = asyncio.ensure_future(backend.deliver(filename, pdf_bytes))
    try:
        location = await asyncio.shield(delivery)
    except asyncio.CancelledError:
        # Caller gave up; the delivery finishes on its own and reports its outcome
        logger.warning(f"Export of {filename!r} cancelled by caller, delivery continues")
        delivery.add_done_callback(_detached_delivery_logger(filename, backend.name))
        raise
    except Exception as e:
        raise _delivery_error(backend.name, e) from e

    logger.info(f"Exported {filename!r} via {backend.name} -> {location}")
    return ExportResult(
        filename=pdf_filename(filename),
        location=location,
        size_bytes=len(pdf_bytes),
        page_count=document.page_count,
    )


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    parser = argparse.ArgumentParser(description="Export an AIRO analysis result as a PDF report")
    parser.add_argument("analysis_path", help="Path to the analysis JSON (object or single-element array)")
    parser.add_argument("--name", "-n", default="", help="Brand name shown in the report")
    parser.add_argument("--domain", "-d", default="", help="Brand domain shown in the report")
    parser.add_argument(
        "--output-dir",
        "-o",
        default=settings.output_dir,
        help=f"Directory for the PDF (default env REPORT_OUTPUT_DIR or {settings.output_dir})",
    )
    parser.add_argument(
        "--endpoint",
        "-e",
        default=settings.delivery_url,
        help="Deliver to this webhook instead of writing a file (default env REPORT_DELIVERY_URL)",
    )
    args = parser.parse_args()

    with open(args.analysis_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    record = AnalysisRecord.from_payload(data)
    meta = ReportMeta(subject_name=args.name, subject_domain=args.domain, generated_at=datetime.now())
    report = assemble_report(record, meta, label=settings.report_label, footer=settings.footer_text)

    if args.endpoint:
        backend: ExportBackend = WebhookExportBackend(args.endpoint, timeout=settings.export_timeout)
    else:
        backend = FileExportBackend(args.output_dir)

    result = asyncio.run(export_report(report.document, backend))
    size_kb = result.size_bytes / 1024
    print(f"✅ PDF saved to {result.location} ({size_kb:.1f} KB, {result.page_count} page(s))")


if __name__ == "__main__":
    main()
