"""Report API — download single-model and comparison PDF reports."""

import asyncio
from urllib.parse import quote

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from modelbench.config import settings
from modelbench.errors import EmptySelectionError, IncompleteDataError
from modelbench.registry.models import ModelStatus
from modelbench.reports.renderer import (
    COMPARISON_REPORT_FILENAME,
    render_comparison,
    render_single,
    report_filename,
)

router = APIRouter()

# Set by main.py during lifespan (same pattern as models_api.py)
_registry = None


def set_registry(registry):
    global _registry
    _registry = registry


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback name plus the RFC 5987 UTF-8 name."""
    clean = filename.replace("\r", "").replace("\n", "")
    fallback = clean.encode("ascii", "ignore").decode("ascii")
    fallback = fallback.replace('"', "").replace("\\", "") or "report.pdf"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(clean, safe='')}"


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(filename)},
    )


@router.get("/reports/comparison")
async def comparison_report():
    """Compare every selected model that has finished benchmarking."""
    if _registry is None:
        raise HTTPException(status_code=503, detail="Model registry not initialized")

    records = [r for r in _registry.selected() if r.status == ModelStatus.COMPLETED]
    if len(records) < settings.min_comparison_models:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Select at least {settings.min_comparison_models} completed models "
                f"for a comparison report ({len(records)} selected)"
            ),
        )

    # Rendering is CPU-bound; records are immutable snapshots so a worker thread is safe
    loop = asyncio.get_running_loop()
    try:
        content = await loop.run_in_executor(None, render_comparison, records)
    except EmptySelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _pdf_response(content, COMPARISON_REPORT_FILENAME)


@router.get("/reports/{model_id}")
async def model_report(model_id: str):
    """Benchmark report for one model."""
    if _registry is None:
        raise HTTPException(status_code=503, detail="Model registry not initialized")

    record = _registry.get(model_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Model not found")

    loop = asyncio.get_running_loop()
    try:
        content = await loop.run_in_executor(None, render_single, record)
    except IncompleteDataError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _pdf_response(content, report_filename(record.name))
