"""Shared API error types and helpers."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from fastapi import HTTPException

from jobapp.pdf.errors import (
    PdfGenerationDisabledError,
    PdfGenerationError,
    TemplateError,
    UploadLimitError,
)


class ApiErrorCode(StrEnum):
    """Machine-readable API error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    TEMPLATE_UNAVAILABLE = "TEMPLATE_UNAVAILABLE"
    PDF_GENERATION_DISABLED = "PDF_GENERATION_DISABLED"
    PDF_GENERATION_FAILED = "PDF_GENERATION_FAILED"
    SUBMISSION_TOO_LARGE = "SUBMISSION_TOO_LARGE"
    DOCUMENT_NOT_GENERATED = "DOCUMENT_NOT_GENERATED"
    REQUEST_TOO_LARGE = "REQUEST_TOO_LARGE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ApiError(HTTPException):
    """HTTP exception carrying stable API error envelope."""

    def __init__(
        self, *, status_code: int, error_code: ApiErrorCode, message: str
    ) -> None:
        """Build an HTTP exception with standard detail structure."""
        super().__init__(
            status_code=status_code,
            detail={"error_code": str(error_code), "message": message},
        )


def to_error_payload(detail: Any, status_code: int) -> dict[str, str]:
    """Normalize HTTP exception detail into stable error payload."""
    if isinstance(detail, dict):
        error_code = str(detail.get("error_code") or f"HTTP_{status_code}")
        message = str(detail.get("message") or detail.get("detail") or "HTTP error")
        return {"error_code": error_code, "message": message}
    return {
        "error_code": f"HTTP_{status_code}",
        "message": str(detail or "HTTP error"),
    }


def api_error_from_generation(exc: PdfGenerationError) -> ApiError:
    """Translate a PDF pipeline failure into its HTTP error."""
    if isinstance(exc, UploadLimitError):
        return ApiError(
            status_code=413,
            error_code=ApiErrorCode.SUBMISSION_TOO_LARGE,
            message=str(exc),
        )
    if isinstance(exc, PdfGenerationDisabledError):
        return ApiError(
            status_code=503,
            error_code=ApiErrorCode.PDF_GENERATION_DISABLED,
            message=str(exc) or "PDF generation is disabled.",
        )
    if isinstance(exc, TemplateError):
        return ApiError(
            status_code=500,
            error_code=ApiErrorCode.TEMPLATE_UNAVAILABLE,
            message=str(exc),
        )
    return ApiError(
        status_code=500,
        error_code=ApiErrorCode.PDF_GENERATION_FAILED,
        message=str(exc) or "PDF generation failed.",
    )
