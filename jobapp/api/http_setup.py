"""HTTP middleware and exception handler wiring for FastAPI apps."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jobapp.api.contracts import ApiErrorResponse
from jobapp.api.errors import ApiErrorCode, api_error_from_generation, to_error_payload
from jobapp.core.config import AppConfig
from jobapp.core.logging import set_correlation_id
from jobapp.pdf.errors import PdfGenerationError, TemplateError, UploadLimitError

MAX_REPORTED_FIELDS = 10


def invalid_fields(exc: RequestValidationError) -> list[str]:
    """Dotted paths of the rejected request fields, without the ``body`` prefix."""
    paths: list[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        path = ".".join(loc)
        if path and path not in paths:
            paths.append(path)
    return paths


def register_http_middleware(app: FastAPI, *, config: AppConfig, logger: Any) -> None:
    """Attach request size limiting and request logging middleware to an app."""

    @app.middleware("http")
    async def request_size_limit_middleware(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                parsed_length = int(content_length)
            except ValueError:
                parsed_length = 0
            if parsed_length > config.limits.request_max_bytes:
                return JSONResponse(
                    status_code=413,
                    content=ApiErrorResponse(
                        error_code=ApiErrorCode.REQUEST_TOO_LARGE,
                        message=(
                            "Request size exceeds configured limit "
                            f"({config.limits.request_max_bytes} bytes)."
                        ),
                    ).model_dump(),
                )
        return await call_next(request)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        correlation_id = (
            request.headers.get("x-request-id")
            or request.headers.get("x-correlation-id")
            or uuid.uuid4().hex
        )
        set_correlation_id(correlation_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = correlation_id
        logger.info(
            "request_completed",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
            },
        )
        return response


def register_exception_handlers(app: FastAPI, *, logger: Any) -> None:
    """Attach API exception handlers that return stable error contracts."""

    @app.exception_handler(HTTPException)
    async def handle_http_exception(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        payload = to_error_payload(exc.detail, exc.status_code)
        logger.warning(
            "http_exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=ApiErrorResponse(**payload).model_dump(),
        )

    @app.exception_handler(PdfGenerationError)
    async def handle_generation_exception(
        request: Request, exc: PdfGenerationError
    ) -> JSONResponse:
        api_error = api_error_from_generation(exc)
        extra: dict[str, Any] = {
            "path": request.url.path,
            "method": request.method,
            "status_code": api_error.status_code,
        }
        if isinstance(exc, UploadLimitError):
            extra["document_name"] = exc.document_name
        elif isinstance(exc, TemplateError):
            extra["document_name"] = exc.template
        logger.warning("pdf_generation_failed", extra=extra)
        return JSONResponse(
            status_code=api_error.status_code,
            content=ApiErrorResponse(
                **to_error_payload(api_error.detail, api_error.status_code)
            ).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_exception(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        fields = invalid_fields(exc)
        logger.warning(
            "validation_exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": 422,
                "field_name": ", ".join(fields),
            },
        )
        message = "Invalid applicant data."
        if fields:
            shown = ", ".join(fields[:MAX_REPORTED_FIELDS])
            if len(fields) > MAX_REPORTED_FIELDS:
                shown += f" (+{len(fields) - MAX_REPORTED_FIELDS} more)"
            message = f"Invalid applicant data: {shown}"
        return JSONResponse(
            status_code=422,
            content=ApiErrorResponse(
                error_code=ApiErrorCode.VALIDATION_ERROR,
                message=message,
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_exception(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(
            "unexpected_exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": 500,
            },
        )
        return JSONResponse(
            status_code=500,
            content=ApiErrorResponse(
                error_code=ApiErrorCode.INTERNAL_SERVER_ERROR,
                message=str(exc) or "Internal server error",
            ).model_dump(),
        )
