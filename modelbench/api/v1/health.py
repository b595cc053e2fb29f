"""Health check endpoint."""

from fastapi import APIRouter
import platform
import sys

router = APIRouter()

# Set by main.py during lifespan
_registry = None
_dispatcher = None


def set_registry(registry):
    global _registry
    _registry = registry


def set_dispatcher(dispatcher):
    global _dispatcher
    _dispatcher = dispatcher


@router.get("/health")
async def health_check():
    """Service health, registry size and system info."""
    ready = _registry is not None and _dispatcher is not None
    return {
        "status": "healthy" if ready else "starting",
        "models_registered": len(_registry) if _registry is not None else 0,
        "benchmarks_running": _dispatcher.in_flight() if _dispatcher is not None else 0,
        "python_version": sys.version,
        "platform": platform.platform(),
    }
