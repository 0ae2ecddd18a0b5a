from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint."""
    return {
        "meta": {
            "title": "Deep Pagination API",
            "description": "Cursor-based product search over Elasticsearch search_after.",
            "version": "0.1.0",
        },
        "links": {
            "self": "/",
            "cursorSearch": "/search/cursor",
            "health": "/health",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
