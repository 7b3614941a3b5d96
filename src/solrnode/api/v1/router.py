"""API v1 Router — Execution and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from solrnode.api.v1.endpoints.execute import router as execute_router
from solrnode.api.v1.endpoints.health import router as health_router

router = APIRouter(tags=["v1"])
router.include_router(execute_router)
router.include_router(health_router)
