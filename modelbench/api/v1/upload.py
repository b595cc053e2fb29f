"""Browser-facing model file upload.

  POST /upload — receive a model file, register it and start benchmarking

File contents are only counted, never stored or inspected. The simulated
benchmark depends on the filename and byte size alone.
"""

from pathlib import PureWindowsPath

from fastapi import APIRouter, File, HTTPException, UploadFile

from modelbench.api.v1.models_api import register_and_submit
from modelbench.config import settings
from modelbench.registry.models import ACCEPTED_EXTENSIONS

router = APIRouter()

_CHUNK_BYTES = 1024 * 1024


def model_name_from_upload(filename) -> str:
    """Client filename without any directory part (handles both / and \\ separators)."""
    return PureWindowsPath(filename or "").name or "upload"


@router.post("/upload")
async def upload_model(file: UploadFile = File(...)):
    """Accept a model file upload and start a benchmark run.

    Returns:
        {model_id, file_type, status, message, size}
    """
    filename = model_name_from_upload(file.filename)
    total = 0
    while True:
        chunk = await file.read(_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            limit_mb = settings.max_upload_bytes // (1024 * 1024)
            raise HTTPException(status_code=413, detail=f"File too large (max {limit_mb} MB)")

    response = await register_and_submit(filename, total)
    if not filename.lower().endswith(ACCEPTED_EXTENSIONS):
        response.message = (
            f"Unrecognised model extension; benchmarking as '{response.file_type}'. "
            + response.message
        )

    return {**response.model_dump(), "size": total}
