"""Global error handlers rendering the ``{"status": "error", ...}`` envelope."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from campus_commons.core.errors import AppError
from campus_commons.core.settings import settings
from campus_commons.schemas.common import ErrorResponse, FieldError

logger = logging.getLogger(__name__)


def _render(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _field_name(location: tuple[Any, ...]) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI adds.
    parts = [str(part) for part in location[1:]] or [str(part) for part in location]
    return ".".join(parts)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        errors = [FieldError(**error) for error in exc.errors] if exc.errors else None
        return _render(exc.status_code, ErrorResponse(message=exc.message, errors=errors))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            FieldError(field=_field_name(tuple(error.get("loc", ()))), message=error.get("msg", ""))
            for error in exc.errors()
        ]
        return _render(400, ErrorResponse(message="Validation failed", errors=errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _render(exc.status_code, ErrorResponse(message=str(exc.detail)))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return _render(
            500,
            ErrorResponse(
                message="Internal server error",
                error=str(exc) if settings.debug else None,
            ),
        )
