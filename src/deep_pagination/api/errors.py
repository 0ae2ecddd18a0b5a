"""Map search errors onto HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from deep_pagination.core.errors import CursorError, InvalidFilterPredicate, SearchUnavailable
from deep_pagination.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(exc: Exception, status_code: int) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _client_error(_request: Request, exc: Exception) -> JSONResponse:
    logger.info("Rejected search request: %s", exc)
    return _error_response(exc, status.HTTP_400_BAD_REQUEST)


async def _search_unavailable(_request: Request, exc: Exception) -> JSONResponse:
    logger.error("Search engine unavailable: %s", exc, exc_info=exc.__cause__)
    return _error_response(exc, status.HTTP_503_SERVICE_UNAVAILABLE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CursorError, _client_error)
    app.add_exception_handler(InvalidFilterPredicate, _client_error)
    app.add_exception_handler(SearchUnavailable, _search_unavailable)
