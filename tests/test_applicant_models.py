from __future__ import annotations

import binascii

import pytest
from pydantic import ValidationError

from jobapp.applicants.models import ApplicantRecord, UploadedDocument
from tests.sample_applicant import SAMPLE_APPLICANT, sample_record


def test_camel_case_payload_is_accepted() -> None:
    record = ApplicantRecord.model_validate(SAMPLE_APPLICANT)

    assert record.legal_last_name == "O'Brien-Smith"
    assert record.equipment_sd == "advanced"
    assert record.education[0].school_name == "Lincoln High, Seattle"
    assert record.employment[0].may_contact == "yes"


def test_state_is_normalized_and_checked() -> None:
    assert sample_record(state=" ca ").state == "CA"
    with pytest.raises(ValidationError):
        sample_record(state="ZZ")


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("social_security_number", "123456789"),
        ("phone_number", "206-555-0100"),
        ("zip_code", "9810"),
        ("legal_first_name", ""),
        ("email", "not-an-email"),
        ("age18", "maybe"),
    ],
)
def test_invalid_values_are_rejected(field: str, value: str) -> None:
    with pytest.raises(ValidationError):
        sample_record(**{field: value})


def test_work_permit_expiration_reads_either_key() -> None:
    assert sample_record(work_auth_expiration="2026-01-01").work_permit_expiration == "2026-01-01"
    assert (
        sample_record(
            work_auth_expiration="2026-01-01",
            work_authorization_expiration="2027-02-02",
        ).work_permit_expiration
        == "2027-02-02"
    )


def test_uploaded_document_decoding() -> None:
    document = UploadedDocument.model_validate(
        {
            "type": "resume",
            "name": "cv.pdf",
            "size": 3,
            "mimeType": "application/pdf",
            "data": "data:application/pdf;base64,YWJj",
        }
    )

    assert document.decoded() == b"abc"
    with pytest.raises(binascii.Error):
        document.model_copy(update={"data": "a$b"}).decoded()


def test_records_are_immutable() -> None:
    record = sample_record()

    with pytest.raises(ValidationError):
        record.city = "Tacoma"  # type: ignore[misc]
