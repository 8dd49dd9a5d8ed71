from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import fitz
import pytest

from jobapp.core.config import AppConfig, LimitsConfig, LoggingConfig, PdfConfig
from jobapp.pdf.citizenship import I9Policy
from jobapp.pdf.errors import PdfGenerationDisabledError, TemplateError, UploadLimitError
from jobapp.pdf.filler import FormFiller
from jobapp.pdf.inspection import read_field_values
from jobapp.pdf.mappings import default_application_mappings, default_i9_mappings
from jobapp.pdf.merger import DocumentMerger
from jobapp.pdf.service import ApplicationPdfService, check_upload_limits, upload_size
from jobapp.pdf.templates import TemplateStore
from tests.pdf_factory import application_template, i9_template, jpeg_image, plain_pdf
from tests.sample_applicant import sample_record, upload

APPLICATION = "Wareworks Application.pdf"
I9 = "i-9.pdf"


def _pdf_config(**overrides: object) -> PdfConfig:
    config = PdfConfig(
        enabled=True,
        templates_dir="unused",
        application_template=APPLICATION,
        i9_template=I9,
        i9_policy="non_citizens_only",
        flatten_widgets=False,
    )
    return replace(config, **overrides)


def _limits(**overrides: int) -> LimitsConfig:
    limits = LimitsConfig(
        request_max_bytes=1024 * 1024,
        upload_max_file_bytes=512 * 1024,
        upload_max_total_bytes=768 * 1024,
    )
    return replace(limits, **overrides)


@pytest.fixture(scope="module")
def templates_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    directory = tmp_path_factory.mktemp("templates")
    (directory / APPLICATION).write_bytes(application_template())
    (directory / I9).write_bytes(i9_template())
    return directory


def _service(templates_dir: Path, *, pdf_config: PdfConfig | None = None, limits: LimitsConfig | None = None):
    return ApplicationPdfService(
        pdf_config=pdf_config or _pdf_config(),
        limits=limits or _limits(),
        templates=TemplateStore(templates_dir),
        filler=FormFiller(default_application_mappings(), default_i9_mappings()),
        merger=DocumentMerger(),
    )


def test_citizen_gets_single_application_pdf(templates_dir: Path) -> None:
    output = _service(templates_dir).generate(sample_record(citizenship_status="us_citizen"))

    assert output.is_pair is False
    assert output.i9_pdf is None
    assert output.report.i9 is None
    assert read_field_values(output.application_pdf)["Applicant Legal First Name"] == "Mary"


def test_non_citizen_gets_application_and_i9(templates_dir: Path) -> None:
    record = sample_record(citizenship_status="alien_authorized", uscis_a_number="A123")

    output = _service(templates_dir).generate(record)

    assert output.is_pair is True
    assert output.i9_pdf is not None
    i9_values = read_field_values(output.i9_pdf)
    assert i9_values["CB_4"] is True
    assert i9_values["USCIS ANumber"] == "A123"
    assert output.report.i9 is not None
    assert output.report.to_dict()["i9"]["document"] == "i9"


def test_always_policy_generates_i9_for_citizens(templates_dir: Path) -> None:
    service = _service(templates_dir, pdf_config=_pdf_config(i9_policy="always"))

    output = service.generate(sample_record(citizenship_status="us_citizen"))

    assert output.is_pair is True
    assert read_field_values(output.i9_pdf)["CB_1"] is True


def test_uploads_are_appended_to_application(templates_dir: Path) -> None:
    with fitz.open(templates_dir / APPLICATION) as template:
        template_pages = template.page_count
    record = sample_record(
        documents=[
            upload("resume.pdf", "application/pdf", plain_pdf(2), doc_type="resume"),
            upload("id.jpg", "image/jpeg", jpeg_image()),
            upload("notes.txt", "text/plain", b"notes"),
        ]
    )

    output = _service(templates_dir).generate(record)

    with fitz.open(stream=output.application_pdf, filetype="pdf") as doc:
        assert doc.page_count == template_pages + 3
    assert [item.status for item in output.report.merged] == ["appended", "appended", "skipped"]


def test_flattened_output_has_no_widgets(templates_dir: Path) -> None:
    service = _service(templates_dir, pdf_config=_pdf_config(flatten_widgets=True))

    output = service.generate(sample_record())

    with fitz.open(stream=output.application_pdf, filetype="pdf") as doc:
        assert all(not list(page.widgets()) for page in doc)
        assert "Mary" in doc[0].get_text()


def test_disabled_generation_raises(templates_dir: Path) -> None:
    service = _service(templates_dir, pdf_config=_pdf_config(enabled=False))

    with pytest.raises(PdfGenerationDisabledError):
        service.generate(sample_record())


def test_missing_template_raises_template_error(tmp_path: Path) -> None:
    with pytest.raises(TemplateError) as exc_info:
        _service(tmp_path).generate(sample_record())

    assert exc_info.value.template == APPLICATION


def test_non_form_template_raises_template_error(tmp_path: Path) -> None:
    (tmp_path / APPLICATION).write_bytes(plain_pdf(1))

    with pytest.raises(TemplateError):
        _service(tmp_path).generate(sample_record())


def test_corrupt_i9_template_fails_generation(tmp_path: Path) -> None:
    (tmp_path / APPLICATION).write_bytes(application_template())
    (tmp_path / I9).write_bytes(b"%PDF-1.7 truncated")

    with pytest.raises(TemplateError):
        _service(tmp_path).generate(sample_record(citizenship_status="lawful_permanent"))


def test_oversized_upload_is_rejected_before_filling(tmp_path: Path) -> None:
    record = sample_record(documents=[upload("big.pdf", "application/pdf", b"x" * 2048)])
    service = _service(tmp_path, limits=_limits(upload_max_file_bytes=1024))

    # No templates exist in tmp_path: the limit check must fire first.
    with pytest.raises(UploadLimitError) as exc_info:
        service.generate(record)

    assert exc_info.value.document_name == "big.pdf"


def test_total_upload_ceiling() -> None:
    documents = [upload(f"doc{n}.pdf", "application/pdf", b"x" * 600) for n in range(3)]

    with pytest.raises(UploadLimitError):
        check_upload_limits(documents, _limits(upload_max_file_bytes=1000, upload_max_total_bytes=1500))
    check_upload_limits(documents, _limits(upload_max_file_bytes=1000, upload_max_total_bytes=1800))


def test_upload_size_uses_decoded_length_when_declared_size_is_low() -> None:
    document = upload("scan.pdf", "application/pdf", b"y" * 300).model_copy(update={"size": 0})

    assert upload_size(document) == 300


def test_from_config_uses_default_tables(templates_dir: Path) -> None:
    config = AppConfig(
        pdf=_pdf_config(i9_policy="always"),
        logging=LoggingConfig(level="INFO"),
        limits=_limits(),
    )

    service = ApplicationPdfService.from_config(config, templates_dir=templates_dir)
    output = service.generate(sample_record())

    assert service.i9_policy == I9Policy.ALWAYS
    assert output.is_pair is True
