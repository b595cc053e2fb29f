"""Metric synthesizer interface and the randomized mock implementation.

There is no real benchmarking engine behind this service. The default
synthesizer waits for a random delay to stand in for a benchmark run and then
draws plausible-looking metrics from the model's format and file size.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, Optional

import numpy as np

from modelbench.errors import SynthesisFailure
from modelbench.registry.models import BenchmarkMetrics, ModelFormat

# Per-format adjustment applied to every base metric
TYPE_MULTIPLIERS: Dict[ModelFormat, float] = {
    ModelFormat.PT: 1.10,      # PyTorch
    ModelFormat.H5: 0.95,      # Keras
    ModelFormat.ONNX: 1.05,
    ModelFormat.PB: 0.90,      # TensorFlow
    ModelFormat.TFLITE: 0.80,  # TensorFlow Lite
    ModelFormat.OTHER: 1.00,
}

MAX_ACCURACY = 0.999
MIN_PARAMETERS = 0.1
BYTES_PER_MB = 1024 * 1024


class MetricSynthesizer(ABC):
    """Abstract interface for producing benchmark metrics."""

    @abstractmethod
    async def synthesize(self, file_type: ModelFormat, size_bytes: int) -> BenchmarkMetrics:
        """Benchmark a model. Raises SynthesisFailure when the run fails."""
        ...


class RandomMetricSynthesizer(MetricSynthesizer):
    """Mock benchmark: random delay, then randomized metrics.

    min_delay / max_delay: seconds, delay drawn uniformly from [min, max)
    failure_rate: probability in [0, 1] that a run raises SynthesisFailure
    seed: optional seed for reproducible draws
    """

    def __init__(
        self,
        min_delay: float = 1.0,
        max_delay: float = 4.0,
        failure_rate: float = 0.0,
        seed: Optional[int] = None,
    ):
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError(f"Invalid delay range [{min_delay}, {max_delay})")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"failure_rate must be within [0, 1], got {failure_rate}")
        self._min_delay = min_delay
        self._max_delay = max_delay
        self._failure_rate = failure_rate
        self._rng = np.random.default_rng(seed)

    async def synthesize(self, file_type: ModelFormat, size_bytes: int) -> BenchmarkMetrics:
        await asyncio.sleep(float(self._rng.uniform(self._min_delay, self._max_delay)))

        if self._failure_rate and self._rng.random() < self._failure_rate:
            raise SynthesisFailure(f"Simulated benchmark failure for {file_type.value} model")

        return self.draw_metrics(file_type, size_bytes)

    def draw_metrics(self, file_type: ModelFormat, size_bytes: int) -> BenchmarkMetrics:
        """Draw one set of metrics without the artificial delay."""
        size_mb = size_bytes / BYTES_PER_MB
        rng = self._rng

        base_accuracy = rng.uniform(0.85, 0.95)
        base_inference_time = rng.uniform(10, 50)
        base_memory = 50 + size_mb * rng.uniform(0, 10)
        base_parameters = max(MIN_PARAMETERS, rng.uniform(0, 2) + size_mb / 10)
        base_flops = rng.uniform(0, 5) + 1

        multiplier = TYPE_MULTIPLIERS.get(file_type, 1.0)
        return BenchmarkMetrics(
            accuracy=float(min(MAX_ACCURACY, base_accuracy * multiplier)),
            inference_time=float(base_inference_time * multiplier),
            memory_usage=float(base_memory * multiplier),
            parameters=float(base_parameters * multiplier),
            flops=float(base_flops * multiplier),
        )
