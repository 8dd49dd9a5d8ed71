"""Exceptions raised by the PDF generation pipeline."""

from __future__ import annotations


class PdfGenerationError(Exception):
    """Base class for fatal PDF generation failures."""


class TemplateError(PdfGenerationError):
    """Template file is missing, unreadable or not a fillable PDF."""

    def __init__(self, template: str, reason: str) -> None:
        super().__init__(f"Template '{template}' is unavailable: {reason}")
        self.template = template
        self.reason = reason


class PdfGenerationDisabledError(PdfGenerationError):
    """PDF generation is switched off by configuration."""


class UploadLimitError(PdfGenerationError):
    """Uploaded documents exceed the per-file or per-submission ceiling."""

    def __init__(self, message: str, *, document_name: str = "") -> None:
        super().__init__(message)
        self.document_name = document_name
