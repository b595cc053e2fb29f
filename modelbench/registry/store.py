"""In-memory model registry with selection tracking and change notification."""

from collections import OrderedDict
from typing import Callable, Dict, List, Optional

from modelbench.registry.models import (
    IN_PROGRESS_STATUSES,
    BenchmarkMetrics,
    ModelFormat,
    ModelRecord,
    ModelStatus,
)

# Listener signature: fn(event, model_id). model_id is None for bulk selection changes.
RegistryListener = Callable[[str, Optional[str]], None]


class ModelRegistry:
    """Single source of truth for uploaded models and the current selection.

    - Records keep insertion order; mutations never reorder them
    - Every mutation replaces the stored record with an updated copy,
      so records handed out earlier are never changed underneath a caller
    - Operations on unknown ids are no-ops and return False
    - Not thread-safe: owned by the service's event loop
    """

    def __init__(self):
        self._models: "OrderedDict[str, ModelRecord]" = OrderedDict()
        self._selected: Dict[str, None] = {}
        self._listeners: List[RegistryListener] = []

    # -- observers ---------------------------------------------------------

    def subscribe(self, listener: RegistryListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str, model_id: Optional[str] = None) -> None:
        for listener in list(self._listeners):
            listener(event, model_id)

    # -- lifecycle ---------------------------------------------------------

    def register(self, name: str, file_type: ModelFormat, size: int) -> str:
        """Create a new record in UPLOADING state and return its id."""
        record = ModelRecord(name=name, file_type=file_type, size=size)
        while record.id in self._models:
            record = ModelRecord(name=name, file_type=file_type, size=size)
        self._models[record.id] = record
        self._notify("registered", record.id)
        return record.id

    def set_status(
        self,
        model_id: str,
        status: ModelStatus,
        error: Optional[str] = None,
    ) -> bool:
        """Overwrite a model's status and clear its metrics.

        COMPLETED is rejected with ValueError; only set_metrics() completes a
        model. An error message is only recorded with FAILED. Without a new
        message a failed record keeps its previous one, and moving to any
        other status clears it.
        """
        if status == ModelStatus.COMPLETED:
            raise ValueError("COMPLETED is reached through set_metrics()")
        record = self._models.get(model_id)
        if record is None:
            return False

        update = {"status": status, "metrics": None}
        if status != ModelStatus.FAILED:
            update["error"] = None
        elif error is not None:
            update["error"] = error
        self._models[model_id] = record.model_copy(update=update)
        self._notify("status", model_id)
        return True

    def set_metrics(self, model_id: str, metrics: BenchmarkMetrics) -> bool:
        """Attach metrics and mark the model COMPLETED in one update."""
        record = self._models.get(model_id)
        if record is None:
            return False
        self._models[model_id] = record.model_copy(
            update={"metrics": metrics, "status": ModelStatus.COMPLETED, "error": None}
        )
        self._notify("metrics", model_id)
        return True

    def remove(self, model_id: str) -> bool:
        """Delete a model and drop it from the selection."""
        if model_id not in self._models:
            return False
        del self._models[model_id]
        self._selected.pop(model_id, None)
        self._notify("removed", model_id)
        return True

    def remove_selected(self) -> List[str]:
        """Delete every selected model and clear the selection.

        Returns the removed ids in registry order. Selected ids with no live
        record are dropped from the selection without being reported.
        """
        removed = [mid for mid in self._models if mid in self._selected]
        for model_id in removed:
            del self._models[model_id]
        self._selected = {}
        for model_id in removed:
            self._notify("removed", model_id)
        self._notify("selection")
        return removed

    # -- selection ---------------------------------------------------------

    def toggle_selection(self, model_id: str) -> bool:
        """Flip selection membership for an id. Returns the new membership."""
        if model_id in self._selected:
            del self._selected[model_id]
            selected = False
        else:
            self._selected[model_id] = None
            selected = True
        self._notify("selection", model_id)
        return selected

    def select_all(self) -> None:
        self._selected = dict.fromkeys(self._models)
        self._notify("selection")

    def clear_selection(self) -> None:
        self._selected = {}
        self._notify("selection")

    def selected(self) -> List[ModelRecord]:
        """Selected records in registry insertion order."""
        return [r for mid, r in self._models.items() if mid in self._selected]

    def selected_ids(self) -> List[str]:
        """Selected ids in the order they were selected."""
        return list(self._selected)

    def is_selected(self, model_id: str) -> bool:
        return model_id in self._selected

    # -- queries -----------------------------------------------------------

    def get(self, model_id: str) -> Optional[ModelRecord]:
        return self._models.get(model_id)

    def list_models(
        self,
        status: Optional[ModelStatus] = None,
        file_type: Optional[ModelFormat] = None,
    ) -> List[ModelRecord]:
        """List records, optionally filtered by status and/or file type."""
        records = list(self._models.values())
        if status:
            records = [r for r in records if r.status == status]
        if file_type:
            records = [r for r in records if r.file_type == file_type]
        return records

    def completed(self) -> List[ModelRecord]:
        return self.list_models(status=ModelStatus.COMPLETED)

    def stats(self) -> Dict[str, int]:
        """Counters shown on the dashboard."""
        records = list(self._models.values())
        return {
            "total": len(records),
            "completed": sum(1 for r in records if r.status == ModelStatus.COMPLETED),
            "failed": sum(1 for r in records if r.status == ModelStatus.FAILED),
            "in_progress": sum(1 for r in records if r.status in IN_PROGRESS_STATUSES),
            "selected": len(self.selected()),
        }

    def __len__(self) -> int:
        return len(self._models)

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._models
