"""PDF benchmark reports for a single model or a comparison of several.

Rendering only reads the records it is given; it never touches the registry.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from modelbench.errors import EmptySelectionError, IncompleteDataError
from modelbench.processing.formatting import format_file_size, format_timestamp
from modelbench.registry.models import BenchmarkMetrics, ModelRecord
from modelbench.reports.layout import (
    MARGIN_MM,
    PAGE_WIDTH_MM,
    RGB,
    PdfCanvas,
    bullet_lines,
)

COMPARISON_REPORT_FILENAME = "model_comparison_report.pdf"

TITLE_COLOR: RGB = (0, 51, 102)
BODY_COLOR: RGB = (60, 60, 60)

# Bar visualization: bars start at x=60mm and are 1.5mm long per point on a 0-100 scale
BAR_X_MM = 60.0
BAR_MM_PER_POINT = 1.5
BAR_HEIGHT_MM = 10.0
BAR_SPACING_MM = 20.0

# Recommendation thresholds
SLOW_INFERENCE_MS = 50
HIGH_MEMORY_MB = 200
LOW_ACCURACY = 0.90


@dataclass(frozen=True)
class MetricBar:
    label: str
    scaled: float  # 0-100
    value_text: str
    color: RGB


@dataclass(frozen=True)
class ComparisonSummary:
    best_accuracy: ModelRecord
    fastest_inference: ModelRecord
    lowest_memory: ModelRecord


def report_filename(model_name: str) -> str:
    """``resnet.onnx`` -> ``resnet_report.pdf``."""
    return re.sub(r"\.[^/.]+$", "", model_name) + "_report.pdf"


def recommendations(metrics: BenchmarkMetrics) -> List[str]:
    """Threshold-based tuning suggestions. Every rule that applies is included."""
    recs = []
    if metrics.inference_time > SLOW_INFERENCE_MS:
        recs.append("Consider model quantization to reduce inference time")
    if metrics.memory_usage > HIGH_MEMORY_MB:
        recs.append("Model pruning could reduce memory footprint")
    if metrics.accuracy < LOW_ACCURACY:
        recs.append("Evaluate model architecture for improved accuracy")
    if not recs:
        recs.append("Model performance is within optimal parameters")
    return recs


def metric_rows(metrics: BenchmarkMetrics) -> List[List[str]]:
    return [
        ["Accuracy", f"{metrics.accuracy * 100:.2f}", "%", "Model prediction accuracy"],
        ["Inference Time", f"{metrics.inference_time:.2f}", "ms", "Average inference latency"],
        ["Memory Usage", f"{metrics.memory_usage:.2f}", "MB", "GPU memory consumption"],
        ["Parameters", f"{metrics.parameters:.2f}", "M", "Total model parameters"],
        ["FLOPS", f"{metrics.flops:.2f}", "B", "Floating point ops per second"],
    ]


def metric_bars(metrics: BenchmarkMetrics) -> List[MetricBar]:
    """Scale metrics onto 0-100 for the bar chart.

    Accuracy is a percentage, inference time assumes a 0-100 ms range and
    memory a 0-1000 MB range.
    """
    accuracy_pct = metrics.accuracy * 100
    return [
        MetricBar("Accuracy", min(100.0, accuracy_pct), f"{accuracy_pct:.2f}%", (41, 128, 185)),
        MetricBar("Inference", min(100.0, metrics.inference_time),
                  f"{metrics.inference_time:.2f}ms", (46, 204, 113)),
        MetricBar("Memory", min(100.0, metrics.memory_usage / 10),
                  f"{metrics.memory_usage:.2f}MB", (231, 76, 60)),
    ]


def comparison_rows(records: Sequence[ModelRecord]) -> List[List[str]]:
    rows = []
    for r in records:
        m = r.metrics
        rows.append([
            r.name,
            r.file_type.value.upper(),
            f"{m.accuracy * 100:.2f}%" if m else "N/A",
            f"{m.inference_time:.2f}ms" if m else "N/A",
            f"{m.memory_usage:.2f}MB" if m else "N/A",
        ])
    return rows


def comparison_summary(records: Sequence[ModelRecord]) -> ComparisonSummary:
    """Pick the best record per category. Ties go to the earliest record.

    Records without metrics rank last in every category.
    """
    if not records:
        raise EmptySelectionError("No models to compare")
    inf = float("inf")
    return ComparisonSummary(
        best_accuracy=max(records, key=lambda r: r.metrics.accuracy if r.metrics else 0.0),
        fastest_inference=min(records, key=lambda r: r.metrics.inference_time if r.metrics else inf),
        lowest_memory=min(records, key=lambda r: r.metrics.memory_usage if r.metrics else inf),
    )


def summary_lines(summary: ComparisonSummary) -> List[str]:
    def fmt(record: ModelRecord, attr: str, scale: float, unit: str) -> str:
        if record.metrics is None:
            return f"0{unit}"
        return f"{getattr(record.metrics, attr) * scale:.2f}{unit}"

    return [
        f"Best Accuracy: {summary.best_accuracy.name} "
        f"({fmt(summary.best_accuracy, 'accuracy', 100, '%')})",
        f"Fastest Inference: {summary.fastest_inference.name} "
        f"({fmt(summary.fastest_inference, 'inference_time', 1, 'ms')})",
        f"Lowest Memory: {summary.lowest_memory.name} "
        f"({fmt(summary.lowest_memory, 'memory_usage', 1, 'MB')})",
    ]


def render_single(record: ModelRecord, generated_at: Optional[datetime] = None) -> bytes:
    """Render the benchmark report for one completed model as PDF bytes."""
    metrics = record.metrics
    if metrics is None:
        raise IncompleteDataError(
            f"Model '{record.name}' has no benchmark metrics (status: {record.status.value})"
        )
    generated_at = generated_at or datetime.now(timezone.utc)

    with PdfCanvas(
        title=f"Benchmark report: {record.name}",
        footer="AI Model Benchmarking Tool - Performance Report",
    ) as canvas:
        canvas.text(PAGE_WIDTH_MM / 2, 20, "AI Model Benchmark Report",
                    size=22, color=TITLE_COLOR, align="center")

        canvas.text(MARGIN_MM, 40, "Model Information", size=16)
        info = [
            f"Model Name: {record.name}",
            f"Model Type: {record.file_type.value.upper()}",
            f"Model Size: {format_file_size(record.size)}",
            f"Report Generated: {format_timestamp(generated_at)}",
        ]
        for i, line in enumerate(info):
            canvas.text(MARGIN_MM, 50 + 8 * i, line, size=12, color=BODY_COLOR)

        canvas.text(MARGIN_MM, 90, "Key Performance Metrics", size=16)
        y = canvas.table(95, ["Metric", "Value", "Unit", "Description"], metric_rows(metrics),
                         col_widths=(35, 25, 20, 90))

        bars = metric_bars(metrics)
        y = canvas.ensure_space(y + 15, 20 + BAR_SPACING_MM * len(bars))
        canvas.text(MARGIN_MM, y, "Performance Visualization", size=16)
        canvas.text(MARGIN_MM, y + 10, "Comparative performance across key metrics:",
                    size=12, color=BODY_COLOR)
        y = _draw_bars(canvas, y + 20, bars)

        recs = bullet_lines(recommendations(metrics))
        y = canvas.ensure_space(y + 10, 10 + 8 * len(recs))
        canvas.text(MARGIN_MM, y, "Recommendations", size=14)
        for i, rec in enumerate(recs):
            canvas.text(MARGIN_MM, y + 10 + 8 * i, rec, size=11, color=BODY_COLOR)

        return canvas.finish()


def render_comparison(
    records: Sequence[ModelRecord],
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Render a side-by-side comparison of several models as PDF bytes."""
    if not records:
        raise EmptySelectionError("Select at least one completed model for a comparison report")
    generated_at = generated_at or datetime.now(timezone.utc)
    summary = comparison_summary(records)

    with PdfCanvas(
        title="Model comparison report",
        footer="AI Model Benchmarking Tool - Comparison Report",
    ) as canvas:
        canvas.text(PAGE_WIDTH_MM / 2, 20, "AI Model Comparison Report",
                    size=22, color=TITLE_COLOR, align="center")

        canvas.text(MARGIN_MM, 40, "Comparison Overview", size=16)
        canvas.text(MARGIN_MM, 50, f"Models Compared: {len(records)}", size=12, color=BODY_COLOR)
        canvas.text(MARGIN_MM, 58, f"Report Generated: {format_timestamp(generated_at)}",
                    size=12, color=BODY_COLOR)

        y = canvas.table(
            70,
            ["Model Name", "Type", "Accuracy", "Inference Time", "Memory Usage"],
            comparison_rows(records),
            col_widths=(60, 20, 30, 30, 30),
        )

        lines = bullet_lines(summary_lines(summary))
        y = canvas.ensure_space(y + 20, 10 + 10 * len(lines))
        canvas.text(MARGIN_MM, y, "Performance Summary", size=16)
        canvas.text(MARGIN_MM, y + 10, "Best performing models by category:", size=12, color=BODY_COLOR)
        for i, line in enumerate(lines):
            canvas.text(MARGIN_MM, y + 20 + 10 * i, line, size=12, color=BODY_COLOR)

        return canvas.finish()


def _draw_bars(canvas: PdfCanvas, y: float, bars: Sequence[MetricBar]) -> float:
    """Draw horizontal bars starting at y. Returns the y below the last bar."""
    for i, bar in enumerate(bars):
        top = y + BAR_SPACING_MM * i
        length = bar.scaled * BAR_MM_PER_POINT
        canvas.rect(BAR_X_MM, top, length, BAR_HEIGHT_MM, bar.color)
        canvas.text(MARGIN_MM, top + 7, bar.label, size=12, color=BODY_COLOR)
        canvas.text(BAR_X_MM + length + 5, top + 7, bar.value_text, size=12, color=BODY_COLOR)
    return y + BAR_SPACING_MM * (len(bars) - 1) + BAR_HEIGHT_MM
