"""In-process benchmark runner using asyncio tasks.

Each submitted model gets its own fire-and-forget task, so several benchmarks
can be in flight at once. Tasks are never cancelled: once started, a run
always posts its result back to the registry, even when the model has been
removed in the meantime (the registry update is then a no-op).
"""

import asyncio
from typing import Optional, Set

from modelbench.benchmarking.synthesizer import MetricSynthesizer
from modelbench.jobs.dispatcher import BenchmarkDispatcher
from modelbench.registry.models import ModelStatus
from modelbench.registry.store import ModelRegistry


class InProcessBenchmarkQueue(BenchmarkDispatcher):
    """Local benchmark runner. All registry writes happen on the event loop."""

    def __init__(
        self,
        registry: ModelRegistry,
        synthesizer: MetricSynthesizer,
        upload_delay: float = 0.0,
    ):
        """
        upload_delay: seconds a model stays in UPLOADING before it is
            marked UPLOADED and benchmarking begins.
        """
        self._registry = registry
        self._synthesizer = synthesizer
        self._upload_delay = upload_delay
        self._tasks: Set[asyncio.Task] = set()
        self._running = False

    async def submit(self, model_id: str) -> str:
        if not self._running:
            raise RuntimeError("Benchmark dispatcher is not running")
        task = asyncio.create_task(self._run(model_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return model_id

    def in_flight(self) -> int:
        return len(self._tasks)

    async def start(self) -> None:
        self._running = True

    async def stop(self) -> None:
        """Refuse new work and wait for in-flight runs to post their results."""
        self._running = False
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run(self, model_id: str) -> None:
        """Drive one model from UPLOADING to COMPLETED or FAILED."""
        record = self._registry.get(model_id)
        if record is None:
            return

        if self._upload_delay > 0:
            await asyncio.sleep(self._upload_delay)

        if not self._registry.set_status(model_id, ModelStatus.UPLOADED):
            print(f"  Benchmark skipped: model {model_id} was removed during upload")
            return
        self._registry.set_status(model_id, ModelStatus.BENCHMARKING)

        try:
            metrics = await self._synthesizer.synthesize(record.file_type, record.size)
        except Exception as e:
            outcome = f"failed ({type(e).__name__}: {e})"
            applied = self._registry.set_status(model_id, ModelStatus.FAILED, error=str(e))
        else:
            outcome = "completed"
            applied = self._registry.set_metrics(model_id, metrics)

        if applied:
            print(f"  Benchmark {outcome}: {record.name} ({model_id})")
        else:
            print(f"  Benchmark {outcome} but model {model_id} was removed; result dropped")
