"""Model Benchmark Service - FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modelbench.config import settings
from modelbench.api.v1.router import v1_router
from modelbench.api.v1 import health as health_api
from modelbench.api.v1 import models_api
from modelbench.api.v1 import reports as reports_api
from modelbench.api.v1 import selection as selection_api
from modelbench.benchmarking.synthesizer import MetricSynthesizer, RandomMetricSynthesizer
from modelbench.jobs.in_process_queue import InProcessBenchmarkQueue
from modelbench.registry.store import ModelRegistry


def build_synthesizer() -> MetricSynthesizer:
    """Mock synthesizer configured from settings."""
    return RandomMetricSynthesizer(
        min_delay=settings.benchmark_min_delay_seconds,
        max_delay=settings.benchmark_max_delay_seconds,
        failure_rate=settings.benchmark_failure_rate,
        seed=settings.benchmark_seed,
    )


def wire(registry, dispatcher) -> None:
    """Hand the registry and dispatcher to the API modules."""
    health_api.set_registry(registry)
    health_api.set_dispatcher(dispatcher)
    models_api.set_registry(registry)
    models_api.set_dispatcher(dispatcher)
    selection_api.set_registry(registry)
    reports_api.set_registry(registry)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic."""
    print(f"Starting Model Benchmark Service on port {settings.service_port}")
    print(
        f"Benchmark delay: {settings.benchmark_min_delay_seconds}-"
        f"{settings.benchmark_max_delay_seconds}s, "
        f"failure rate: {settings.benchmark_failure_rate}"
    )

    registry = ModelRegistry()
    dispatcher = InProcessBenchmarkQueue(
        registry,
        build_synthesizer(),
        upload_delay=settings.upload_delay_seconds,
    )
    await dispatcher.start()
    print("Benchmark dispatcher started")

    wire(registry, dispatcher)
    app.state.registry = registry
    app.state.dispatcher = dispatcher

    yield

    # Shutdown
    print(f"Shutting down: waiting for {dispatcher.in_flight()} running benchmark(s)")
    await dispatcher.stop()
    wire(None, None)


app = FastAPI(
    title="Model Benchmark Service",
    description="Upload ML model files, simulate benchmark metrics and export PDF reports",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(health_api.router, tags=["health"])  # GET /health at root
app.include_router(v1_router)  # All /api/v1/* endpoints
