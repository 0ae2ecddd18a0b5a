from __future__ import annotations

from fastapi import FastAPI

from deep_pagination.api.errors import register_error_handlers
from deep_pagination.api.lifespan import lifespan
from deep_pagination.api.routes.health import router as health_router
from deep_pagination.api.routes.root import router as root_router
from deep_pagination.api.routes.search import router as search_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Deep Pagination API",
        description="Cursor-based product search over Elasticsearch search_after.",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(search_router)

    return app
