"""Shared test fixtures for modelbench tests."""

import time

import pytest
from starlette.testclient import TestClient

from modelbench.benchmarking.synthesizer import MetricSynthesizer
from modelbench.config import settings
from modelbench.errors import SynthesisFailure
from modelbench.registry.models import BenchmarkMetrics, ModelStatus, classify_file_type
from modelbench.registry.store import ModelRegistry


def make_metrics(
    accuracy=0.92,
    inference_time=25.0,
    memory_usage=120.0,
    parameters=1.5,
    flops=3.0,
) -> BenchmarkMetrics:
    return BenchmarkMetrics(
        accuracy=accuracy,
        inference_time=inference_time,
        memory_usage=memory_usage,
        parameters=parameters,
        flops=flops,
    )


class FakeSynthesizer(MetricSynthesizer):
    """Deterministic synthesizer: returns fixed metrics or raises on demand."""

    def __init__(self, metrics=None, fail_with=None):
        self.metrics = metrics or make_metrics()
        self.fail_with = fail_with
        self.calls = []

    async def synthesize(self, file_type, size_bytes):
        self.calls.append((file_type, size_bytes))
        if self.fail_with is not None:
            raise SynthesisFailure(self.fail_with)
        return self.metrics


@pytest.fixture
def registry():
    return ModelRegistry()


@pytest.fixture
def completed_model(registry):
    """Factory: register a model and complete it with the given metrics."""
    def _make(name="net.onnx", size=10 * 1024 * 1024, **metric_kwargs):
        model_id = registry.register(name, classify_file_type(name), size)
        registry.set_metrics(model_id, make_metrics(**metric_kwargs))
        return registry.get(model_id)
    return _make


@pytest.fixture
def client(monkeypatch):
    """TestClient with instant uploads and benchmarks."""
    monkeypatch.setattr(settings, "upload_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "benchmark_min_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "benchmark_max_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "benchmark_failure_rate", 0.0)
    monkeypatch.setattr(settings, "benchmark_seed", 7)

    from modelbench.main import app
    with TestClient(app) as c:
        yield c


def wait_for_status(client, model_id, statuses=(ModelStatus.COMPLETED, ModelStatus.FAILED),
                    timeout=5.0):
    """Poll GET /api/v1/models/{id} until the model reaches one of `statuses`."""
    wanted = {s.value for s in statuses}
    deadline = time.monotonic() + timeout
    while True:
        data = client.get(f"/api/v1/models/{model_id}").json()
        if data["status"] in wanted:
            return data
        if time.monotonic() > deadline:
            raise AssertionError(f"model {model_id} stuck in {data['status']}")
        time.sleep(0.02)
