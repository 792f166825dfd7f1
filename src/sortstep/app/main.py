from __future__ import annotations

import structlog
from fastapi import FastAPI

from sortstep.api import router as api_router
from sortstep.core.config.settings import settings
from sortstep.core.logging.setup import clear_context, configure_logging

log = structlog.get_logger()


def create_app() -> FastAPI:
    """
    Application factory.

    Single place where the FastAPI app is created and configured. The app
    exposes the engine's snapshot and command interface to a visualizer.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title="sortstep",
        version="0.1.0",
    )

    @app.on_event("startup")
    async def on_startup() -> None:
        log.info(
            "app.startup",
            environment=settings.env,
            default_size=settings.default_size,
            default_algorithm=settings.default_algorithm,
        )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        log.info("app.shutdown")
        clear_context()

    app.include_router(api_router, prefix="/api")

    return app


# ASGI entrypoint
app = create_app()
