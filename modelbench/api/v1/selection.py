"""Selection API — choose which models go into comparison reports."""

from fastapi import APIRouter, HTTPException

from modelbench.api.v1.models_api import serialize_record

router = APIRouter()

# Set by main.py during lifespan (same pattern as models_api.py)
_registry = None


def set_registry(registry):
    global _registry
    _registry = registry


def _selection_response():
    records = _registry.selected()
    return {
        "selected_ids": [r.id for r in records],
        "models": [serialize_record(r, selected=True) for r in records],
        "count": len(records),
    }


def _require_registry():
    if _registry is None:
        raise HTTPException(status_code=503, detail="Model registry not initialized")
    return _registry


@router.get("/selection")
async def get_selection():
    """Currently selected models in upload order."""
    _require_registry()
    return _selection_response()


@router.post("/selection/all")
async def select_all():
    _require_registry().select_all()
    return _selection_response()


@router.post("/selection/{model_id}/toggle")
async def toggle_selection(model_id: str):
    """Add a model to the selection, or drop it if it is already selected."""
    selected = _require_registry().toggle_selection(model_id)
    return {"model_id": model_id, "selected": selected, **_selection_response()}


@router.delete("/selection")
async def clear_selection():
    _require_registry().clear_selection()
    return _selection_response()


@router.delete("/selection/models")
async def delete_selected():
    """Delete every selected model; the selection is empty afterwards."""
    removed = _require_registry().remove_selected()
    return {"removed_ids": removed, "removed_count": len(removed), **_selection_response()}
