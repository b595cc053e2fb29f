"""Models API — register, list, inspect and remove benchmarked models."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

from modelbench.processing.formatting import format_file_size, format_upload_age
from modelbench.registry.models import ModelFormat, ModelRecord, ModelStatus, classify_file_type

router = APIRouter()

# These will be set by main.py during lifespan
_registry = None
_dispatcher = None


def set_registry(registry):
    global _registry
    _registry = registry


def set_dispatcher(dispatcher):
    global _dispatcher
    _dispatcher = dispatcher


class ModelRegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    size: int = Field(ge=0)


class ModelSubmitResponse(BaseModel):
    model_id: str
    file_type: str
    status: str
    message: str


def serialize_record(record: ModelRecord, selected: bool = False) -> Dict[str, Any]:
    """JSON shape of a model record, with display helpers for the dashboard."""
    data = record.model_dump(mode="json")
    data["size_label"] = format_file_size(record.size)
    data["uploaded_ago"] = format_upload_age(record.uploaded_at)
    data["selected"] = selected
    return data


def _require_registry():
    if _registry is None:
        raise HTTPException(status_code=503, detail="Model registry not initialized")
    return _registry


async def register_and_submit(name: str, size: int) -> ModelSubmitResponse:
    """Register a model and start its simulated upload + benchmark run."""
    registry = _require_registry()
    if _dispatcher is None:
        raise HTTPException(status_code=503, detail="Benchmark dispatcher not initialized")

    file_type = classify_file_type(name)
    model_id = registry.register(name, file_type, size)
    await _dispatcher.submit(model_id)
    return ModelSubmitResponse(
        model_id=model_id,
        file_type=file_type.value,
        status=ModelStatus.UPLOADING.value,
        message="Model registered. Poll GET /api/v1/models/{id} for benchmark status.",
    )


@router.post("/models", response_model=ModelSubmitResponse)
async def register_model(request: ModelRegisterRequest):
    """Register a model from its filename and byte size and benchmark it."""
    return await register_and_submit(request.name, request.size)


@router.get("/models")
async def list_models(
    status: Optional[ModelStatus] = None,
    file_type: Optional[ModelFormat] = None,
):
    """List all registered models with optional filtering."""
    registry = _require_registry()
    records = registry.list_models(status=status, file_type=file_type)
    return {
        "models": [serialize_record(r, registry.is_selected(r.id)) for r in records],
        "count": len(records),
    }


@router.get("/models/{model_id}")
async def get_model(model_id: str):
    """Get the current status and metrics of one model."""
    registry = _require_registry()
    record = registry.get(model_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Model not found")
    return serialize_record(record, registry.is_selected(model_id))


@router.delete("/models/{model_id}")
async def remove_model(model_id: str):
    """Remove a model. Any benchmark still running for it is discarded on completion."""
    registry = _require_registry()
    if not registry.remove(model_id):
        raise HTTPException(status_code=404, detail="Model not found")
    return {"model_id": model_id, "removed": True}


@router.get("/dashboard")
async def dashboard():
    """Counters for the dashboard overview."""
    registry = _require_registry()
    stats = registry.stats()
    stats["benchmarks_running"] = _dispatcher.in_flight() if _dispatcher is not None else 0
    return stats
