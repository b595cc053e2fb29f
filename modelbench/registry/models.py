"""Model record data model for the in-memory registry."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
import uuid


class ModelFormat(str, Enum):
    PT = "pt"
    H5 = "h5"
    ONNX = "onnx"
    PB = "pb"
    TFLITE = "tflite"
    OTHER = "other"


class ModelStatus(str, Enum):
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    BENCHMARKING = "benchmarking"
    COMPLETED = "completed"
    FAILED = "failed"


# Statuses counted as "in progress" on the dashboard
IN_PROGRESS_STATUSES = (
    ModelStatus.UPLOADING,
    ModelStatus.UPLOADED,
    ModelStatus.BENCHMARKING,
)

# Extensions the upload form offers. Anything else is still accepted as OTHER.
ACCEPTED_EXTENSIONS = (".pt", ".pth", ".h5", ".onnx", ".pb", ".tflite")


def classify_file_type(filename: str) -> ModelFormat:
    """Derive the model format from a filename's last extension.

    Unknown or missing extensions (including ``.pth``) map to OTHER.
    """
    if "." not in filename:
        return ModelFormat.OTHER
    extension = filename.rsplit(".", 1)[1].lower()
    try:
        fmt = ModelFormat(extension)
    except ValueError:
        return ModelFormat.OTHER
    return fmt


class BenchmarkMetrics(BaseModel):
    """Performance figures produced by a benchmark run."""
    model_config = ConfigDict(frozen=True)

    accuracy: float = Field(gt=0, le=1)  # fraction
    inference_time: float = Field(gt=0)  # ms
    memory_usage: float = Field(gt=0)  # MB
    parameters: float = Field(gt=0)  # millions
    flops: float = Field(gt=0)  # billions


class ModelRecord(BaseModel):
    """Tracks one uploaded model through its benchmark lifecycle."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    file_type: ModelFormat
    size: int = Field(ge=0)
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metrics: Optional[BenchmarkMetrics] = None
    status: ModelStatus = ModelStatus.UPLOADING
    error: Optional[str] = None
