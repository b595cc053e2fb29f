"""Tests for the randomized metric synthesizer."""

import asyncio

import pytest

from modelbench.benchmarking.synthesizer import (
    MAX_ACCURACY,
    TYPE_MULTIPLIERS,
    RandomMetricSynthesizer,
)
from modelbench.errors import SynthesisFailure
from modelbench.registry.models import ModelFormat

TEN_MB = 10_485_760


def _instant(seed=None, failure_rate=0.0):
    return RandomMetricSynthesizer(min_delay=0.0, max_delay=0.0, failure_rate=failure_rate, seed=seed)


class TestMetricBounds:
    @pytest.mark.parametrize("file_type", list(ModelFormat))
    def test_bounds_hold_for_every_format(self, file_type):
        synth = _instant(seed=1234)
        m = TYPE_MULTIPLIERS[file_type]
        for size in (0, 1, 512 * 1024, TEN_MB, 2 * 1024 ** 3):
            for _ in range(50):
                metrics = synth.draw_metrics(file_type, size)
                assert 0 < metrics.accuracy <= MAX_ACCURACY
                assert metrics.inference_time > 0
                assert metrics.memory_usage > 0
                assert metrics.parameters >= 0.1 * m - 1e-12
                assert metrics.flops > m

    def test_base_ranges(self):
        synth = _instant(seed=99)
        for _ in range(200):
            metrics = synth.draw_metrics(ModelFormat.OTHER, 0)
            assert 0.85 <= metrics.accuracy < 0.95
            assert 10 <= metrics.inference_time < 50
            assert metrics.memory_usage == pytest.approx(50.0)
            assert 0.1 <= metrics.parameters < 2
            assert 1 <= metrics.flops < 6

    def test_accuracy_is_capped(self):
        synth = _instant(seed=5)
        # pt multiplies accuracy by 1.1, so most draws would exceed the cap
        values = [synth.draw_metrics(ModelFormat.PT, 0).accuracy for _ in range(200)]
        assert max(values) == MAX_ACCURACY


class TestSynthesize:
    def test_onnx_applies_multiplier_to_all_fields(self):
        base = asyncio.run(_instant(seed=42).synthesize(ModelFormat.OTHER, TEN_MB))
        onnx = asyncio.run(_instant(seed=42).synthesize(ModelFormat.ONNX, TEN_MB))

        assert onnx.accuracy <= MAX_ACCURACY
        assert onnx.accuracy == pytest.approx(base.accuracy * 1.05)
        assert onnx.inference_time == pytest.approx(base.inference_time * 1.05)
        assert onnx.memory_usage == pytest.approx(base.memory_usage * 1.05)
        assert onnx.parameters == pytest.approx(base.parameters * 1.05)
        assert onnx.flops == pytest.approx(base.flops * 1.05)

    def test_seeded_runs_are_reproducible(self):
        first = asyncio.run(_instant(seed=3).synthesize(ModelFormat.H5, TEN_MB))
        second = asyncio.run(_instant(seed=3).synthesize(ModelFormat.H5, TEN_MB))
        assert first == second

    def test_fault_injection_raises_synthesis_failure(self):
        synth = _instant(seed=0, failure_rate=1.0)
        with pytest.raises(SynthesisFailure, match="tflite"):
            asyncio.run(synth.synthesize(ModelFormat.TFLITE, 1))

    def test_delay_is_awaited(self, monkeypatch):
        slept = []

        async def fake_sleep(seconds):
            slept.append(seconds)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)
        synth = RandomMetricSynthesizer(min_delay=1.0, max_delay=4.0, seed=8)
        asyncio.run(synth.synthesize(ModelFormat.PB, TEN_MB))
        assert len(slept) == 1
        assert 1.0 <= slept[0] < 4.0


class TestValidation:
    def test_rejects_bad_delay_range(self):
        with pytest.raises(ValueError):
            RandomMetricSynthesizer(min_delay=3.0, max_delay=1.0)

    def test_rejects_bad_failure_rate(self):
        with pytest.raises(ValueError):
            RandomMetricSynthesizer(failure_rate=1.5)
