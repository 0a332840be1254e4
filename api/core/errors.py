"""
Domain errors and their HTTP mapping.

Services raise these; `install_exception_handlers` turns them into JSON
responses of the form {"error": "..."}. Internal causes are logged, never
returned to the caller.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_MONTH_MESSAGE = "Invalid month. Please provide a valid month between 1 and 12."


class InvalidMonth(ValueError):
    def __init__(self, value: object):
        super().__init__(f"Invalid month: {value!r}")
        self.value = value


class IngestionFailure(RuntimeError):
    pass


class QueryFailure(RuntimeError):
    pass


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _invalid_month_handler(_: Request, exc: InvalidMonth) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, INVALID_MONTH_MESSAGE)


async def _ingestion_failure_handler(_: Request, exc: IngestionFailure) -> JSONResponse:
    logger.error("ingestion_failed error=%s", exc, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to initialize database")


async def _query_failure_handler(_: Request, exc: QueryFailure) -> JSONResponse:
    logger.error("query_failed error=%s", exc, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


async def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and unsupported methods both answer 404.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return _error(status.HTTP_404_NOT_FOUND, "Not found")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error error=%s", exc, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidMonth, _invalid_month_handler)
    app.add_exception_handler(IngestionFailure, _ingestion_failure_handler)
    app.add_exception_handler(QueryFailure, _query_failure_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
