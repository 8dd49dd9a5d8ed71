"""Route registration for health and PDF generation endpoints."""

from __future__ import annotations

import re
from base64 import b64encode
from dataclasses import dataclass
from typing import Literal

from fastapi import FastAPI, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from jobapp.api.contracts import ApiErrorResponse, GeneratedPdfResponse, HealthResponse
from jobapp.api.errors import ApiError, ApiErrorCode, api_error_from_generation
from jobapp.applicants.models import ApplicantRecord
from jobapp.core.config import AppConfig
from jobapp.pdf.errors import PdfGenerationError
from jobapp.pdf.service import ApplicationPdfService, GeneratedOutput

DOCUMENT_PARAM = Query(default="application")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_-]+")

_ERROR_RESPONSES = {
    413: {"model": ApiErrorResponse},
    422: {"model": ApiErrorResponse},
    500: {"model": ApiErrorResponse},
    503: {"model": ApiErrorResponse},
}


@dataclass(frozen=True)
class ApplicationRouteDeps:
    """Dependencies required to mount application routes."""

    config: AppConfig
    pdf_service: ApplicationPdfService


def download_filename(record: ApplicantRecord, document: str) -> str:
    """Attachment name such as ``OBrien-Smith_Mary_application.pdf``."""
    parts = [record.legal_last_name, record.legal_first_name, document]
    cleaned = [_UNSAFE_FILENAME_CHARS.sub("", part.replace(" ", "_")) for part in parts]
    return "_".join(part for part in cleaned if part) + ".pdf"


def register_application_routes(app: FastAPI, *, deps: ApplicationRouteDeps) -> None:
    """Register health, generate and download endpoints."""

    async def _generate(record: ApplicantRecord) -> GeneratedOutput:
        try:
            return await run_in_threadpool(deps.pdf_service.generate, record)
        except PdfGenerationError as exc:
            raise api_error_from_generation(exc) from exc

    @app.get(
        "/api/health",
        response_model=HealthResponse,
    )
    def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post(
        "/api/applications/pdf",
        response_model=GeneratedPdfResponse,
        responses=_ERROR_RESPONSES,
    )
    async def generate_application_pdf(record: ApplicantRecord) -> GeneratedPdfResponse:
        output = await _generate(record)
        return GeneratedPdfResponse(
            submission_id=record.submission_id,
            application_pdf=b64encode(output.application_pdf).decode("ascii"),
            i9_pdf=(
                b64encode(output.i9_pdf).decode("ascii")
                if output.i9_pdf is not None
                else None
            ),
            report=output.report.to_dict(),
        )

    @app.post(
        "/api/applications/pdf/download",
        response_class=Response,
        responses={404: {"model": ApiErrorResponse}, **_ERROR_RESPONSES},
    )
    async def download_application_pdf(
        record: ApplicantRecord,
        document: Literal["application", "i9"] = DOCUMENT_PARAM,
    ) -> Response:
        output = await _generate(record)
        content = output.application_pdf if document == "application" else output.i9_pdf
        if content is None:
            raise ApiError(
                status_code=404,
                error_code=ApiErrorCode.DOCUMENT_NOT_GENERATED,
                message="No I-9 was generated for this applicant.",
            )
        filename = download_filename(record, document)
        return Response(
            content=content,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
