from __future__ import annotations

from fastapi import APIRouter

from sortstep.api.routes.engine import router as engine_router
from sortstep.api.routes.health import router as health_router

# Top-level API router
router = APIRouter()

# Route composition
router.include_router(health_router)
router.include_router(engine_router)
