"""Aggregate all v1 API routers."""

from fastapi import APIRouter
from modelbench.api.v1.health import router as health_router
from modelbench.api.v1.models_api import router as models_router
from modelbench.api.v1.upload import router as upload_router
from modelbench.api.v1.selection import router as selection_router
from modelbench.api.v1.reports import router as reports_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(models_router, tags=["models"])
v1_router.include_router(upload_router, tags=["upload"])
v1_router.include_router(selection_router, tags=["selection"])
v1_router.include_router(reports_router, tags=["reports"])
