"""End-to-end generation: templates in, application (and I-9) PDF bytes out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import fitz  # PyMuPDF

from jobapp.applicants.models import ApplicantRecord, UploadedDocument
from jobapp.core.config import AppConfig, LimitsConfig, PdfConfig
from jobapp.pdf.citizenship import I9Policy, requires_i9, resolve_citizenship
from jobapp.pdf.errors import PdfGenerationDisabledError, UploadLimitError
from jobapp.pdf.fields import FormHandle
from jobapp.pdf.filler import FormFiller
from jobapp.pdf.mappings import default_application_mappings, default_i9_mappings
from jobapp.pdf.merger import DocumentMerger
from jobapp.pdf.report import FillReport, GenerationReport, MergeOutcome
from jobapp.pdf.templates import TemplateStore

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedOutput:
    """Serialized PDFs for one submission."""

    application_pdf: bytes
    i9_pdf: bytes | None
    report: GenerationReport

    @property
    def is_pair(self) -> bool:
        return self.i9_pdf is not None


def upload_size(document: UploadedDocument) -> int:
    """Byte size of an upload: the declared size or the decoded base64 length."""
    encoded = document.data.strip()
    if "," in encoded and encoded.startswith("data:"):
        encoded = encoded.split(",", 1)[1]
    estimated = len(encoded) * 3 // 4 - encoded.count("=")
    return max(document.size, estimated, 0)


def check_upload_limits(documents: list[UploadedDocument], limits: LimitsConfig) -> None:
    """Raise ``UploadLimitError`` when any upload or their sum is too large."""
    total = 0
    for document in documents:
        size = upload_size(document)
        if size > limits.upload_max_file_bytes:
            raise UploadLimitError(
                f"Document '{document.name}' is {size} bytes; "
                f"the limit is {limits.upload_max_file_bytes} bytes per file.",
                document_name=document.name,
            )
        total += size
    if total > limits.upload_max_total_bytes:
        raise UploadLimitError(
            f"Uploaded documents total {total} bytes; "
            f"the limit is {limits.upload_max_total_bytes} bytes per submission."
        )


def serialize(doc: fitz.Document, *, flatten_widgets: bool) -> bytes:
    """Write the filled document out, asking viewers to regenerate appearances."""
    try:
        doc.need_appearances(True)
    except Exception:
        LOGGER.exception("Failed setting need_appearances on filled PDF.")
    if flatten_widgets:
        try:
            # Some viewers render checkbox appearances incorrectly even when
            # /V values are correct. Baking widgets makes visual output stable.
            doc.bake(annots=False, widgets=True)
        except Exception:
            LOGGER.exception("Failed baking widgets for filled PDF.")
    return doc.tobytes(garbage=3, deflate=True)


class ApplicationPdfService:
    """Runs the fill, I-9 and merge steps for a single ApplicantRecord."""

    def __init__(
        self,
        *,
        pdf_config: PdfConfig,
        limits: LimitsConfig,
        templates: TemplateStore,
        filler: FormFiller,
        merger: DocumentMerger,
    ) -> None:
        self._pdf_config = pdf_config
        self._limits = limits
        self._templates = templates
        self._filler = filler
        self._merger = merger
        self._i9_policy = I9Policy(pdf_config.i9_policy)

    @classmethod
    def from_config(
        cls, config: AppConfig, *, templates_dir: str | Path | None = None
    ) -> "ApplicationPdfService":
        """Wire the default mapping tables and a template store from config."""
        return cls(
            pdf_config=config.pdf,
            limits=config.limits,
            templates=TemplateStore(templates_dir or config.pdf.templates_dir),
            filler=FormFiller(default_application_mappings(), default_i9_mappings()),
            merger=DocumentMerger(),
        )

    @property
    def i9_policy(self) -> I9Policy:
        return self._i9_policy

    def generate(self, record: ApplicantRecord) -> GeneratedOutput:
        """Produce the application PDF and, when the policy asks for it, the I-9."""
        if not self._pdf_config.enabled:
            raise PdfGenerationDisabledError("PDF generation is disabled.")
        check_upload_limits(record.documents, self._limits)

        log_extra = {"submission_id": record.submission_id}
        application_pdf, application_report, merged = self._build_application(record)

        i9_pdf: bytes | None = None
        i9_report = None
        if requires_i9(record.citizenship_status, self._i9_policy):
            i9_pdf, i9_report = self._build_i9(record)
        else:
            LOGGER.info("Skipping I-9 for this applicant", extra=log_extra)

        report = GenerationReport(application=application_report, i9=i9_report, merged=merged)
        LOGGER.info(
            "Generated application PDF (%d fields filled, %d errors, i9=%s)",
            len(application_report.filled),
            len(application_report.errors),
            i9_pdf is not None,
            extra=log_extra,
        )
        return GeneratedOutput(application_pdf=application_pdf, i9_pdf=i9_pdf, report=report)

    def _build_application(
        self, record: ApplicantRecord
    ) -> tuple[bytes, FillReport, list[MergeOutcome]]:
        doc = self._templates.open_form(self._pdf_config.application_template)
        try:
            fill_report = self._filler.fill_application(FormHandle(doc), record)
            # Merge after filling so the template's widgets stay on the first pages.
            merged = self._merger.merge(doc, record.documents, submission_id=record.submission_id)
            data = serialize(doc, flatten_widgets=self._pdf_config.flatten_widgets)
        finally:
            doc.close()
        return data, fill_report, merged

    def _build_i9(self, record: ApplicantRecord) -> tuple[bytes, FillReport]:
        resolution = resolve_citizenship(record)
        doc = self._templates.open_form(self._pdf_config.i9_template)
        try:
            fill_report = self._filler.fill_i9(FormHandle(doc), record, resolution)
            data = serialize(doc, flatten_widgets=self._pdf_config.flatten_widgets)
        finally:
            doc.close()
        return data, fill_report
