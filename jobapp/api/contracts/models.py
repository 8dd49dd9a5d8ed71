"""Pydantic API response models used in OpenAPI contracts."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ApiErrorResponse(BaseModel):
    """Stable error envelope for API responses."""

    error_code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """Health check response payload."""

    status: Literal["ok"]


class GeneratedPdfResponse(BaseModel):
    """Generated PDFs as base64 plus the fill and merge report."""

    submission_id: str = ""
    application_pdf: str = Field(description="Base64-encoded application PDF")
    i9_pdf: str | None = Field(
        default=None, description="Base64-encoded I-9 PDF, when one was generated"
    )
    report: dict[str, Any]
