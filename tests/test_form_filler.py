from __future__ import annotations

import logging
from typing import Any

import pytest

from jobapp.applicants.models import ApplicantRecord
from jobapp.pdf.fields import FormHandle
from jobapp.pdf.filler import FormFiller
from jobapp.pdf.inspection import read_field_values
from jobapp.pdf.mappings import default_application_mappings, default_i9_mappings
from jobapp.pdf.report import FillReport
from jobapp.pdf.service import serialize
from tests.pdf_factory import application_template, build_form_pdf, open_form
from tests.sample_applicant import sample_record


def _fill(pdf: bytes, record: ApplicantRecord) -> tuple[FillReport, dict[str, Any]]:
    filler = FormFiller(default_application_mappings(), default_i9_mappings())
    doc = open_form(pdf)
    try:
        report = filler.fill_application(FormHandle(doc), record)
        data = serialize(doc, flatten_widgets=False)
    finally:
        doc.close()
    return report, read_field_values(data)


@pytest.fixture(scope="module")
def full_template() -> bytes:
    return application_template()


def test_primary_field_receives_value() -> None:
    pdf = build_form_pdf([("Applicant Legal First Name", "text")])

    report, values = _fill(pdf, sample_record())

    assert values["Applicant Legal First Name"] == "Mary"
    assert report.field_for("personal_info.legal_first_name") == "Applicant Legal First Name"


def test_first_fallback_receives_value_when_primary_missing() -> None:
    pdf = build_form_pdf([("Legal First Name", "text")])

    report, values = _fill(pdf, sample_record())

    assert values["Legal First Name"] == "Mary"
    assert report.field_for("personal_info.legal_first_name") == "Legal First Name"


def test_primary_wins_over_fallback_when_both_exist() -> None:
    pdf = build_form_pdf([("Legal First Name", "text"), ("Applicant Legal First Name", "text")])

    _, values = _fill(pdf, sample_record())

    assert values["Applicant Legal First Name"] == "Mary"
    assert values["Legal First Name"] == ""


def test_missing_field_is_reported_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    pdf = build_form_pdf([("Unrelated Field", "text")])

    with caplog.at_level(logging.WARNING):
        report, values = _fill(pdf, sample_record())

    error = report.error_for("personal_info.legal_first_name")
    assert error is not None
    assert error.reason == "not_found"
    assert error.candidates[0] == "Applicant Legal First Name"
    assert values == {"Unrelated Field": ""}
    assert "Could not place attribute" in caplog.text


def test_missing_checkboxes_are_skipped_silently() -> None:
    pdf = build_form_pdf([("Applicant Legal First Name", "text")])

    report, _ = _fill(pdf, sample_record())

    assert report.error_for("eligibility.age_over_18_yes") is None
    assert report.error_for("education[0].diploma_yes") is None


def test_two_attributes_never_share_a_field() -> None:
    # "Phone" is a fallback for both the home phone and the first employer phone.
    pdf = build_form_pdf([("Phone", "text")])

    report, values = _fill(pdf, sample_record())

    assert report.field_for("contact_info.home_phone") == "Phone"
    assert values["Phone"] == "(206) 555-0100"
    error = report.error_for("employment[0].phone")
    assert error is not None
    assert error.reason == "conflict"


def test_field_of_wrong_kind_is_reported() -> None:
    pdf = build_form_pdf([("Applicant Legal First Name", "checkbox")])

    report, _ = _fill(pdf, sample_record())

    error = report.error_for("personal_info.legal_first_name")
    assert error is not None
    assert error.reason == "wrong_kind"


def test_full_template_fills_without_errors(full_template: bytes) -> None:
    report, values = _fill(full_template, sample_record())

    assert report.ok
    assert values["Applicant Legal Last Name"] == "O'Brien-Smith"
    assert values["Applicant City"] == "Seattle"
    assert values["Applicant State"] == "WA"
    assert values["Position Applied For"] == "Warehouse Associate"
    assert values["Monday  Hours"] == "8am-5pm"
    assert values["Sunday Hours"] == ""


def test_single_field_form_is_written_without_errors() -> None:
    pdf = build_form_pdf([("Applicant Legal Last Name", "text")])
    record = sample_record(legal_last_name="O'Brien-Smith")

    report, values = _fill(pdf, record)

    assert report.error_for("personal_info.legal_last_name") is None
    assert values["Applicant Legal Last Name"] == "O'Brien-Smith"


def test_apostrophe_and_hyphen_survive_save_and_reload(full_template: bytes) -> None:
    _, values = _fill(full_template, sample_record(legal_last_name="O'Brien-Smith"))

    assert values["Applicant Legal Last Name"] == "O'Brien-Smith"


def test_dates_ssn_and_phones_are_formatted(full_template: bytes) -> None:
    _, values = _fill(full_template, sample_record())

    assert values["Applicant DOB - Month"] == "03"
    assert values["Applicant DOB - Day"] == "07"
    assert values["Applicant DOB - Year"] == "1990"
    assert values["Applicant SSN - P1"] == "123"
    assert values["Applicant SSN - P2"] == "45"
    assert values["Applicant SSN - P3"] == "6789"
    # Home phone falls back to the primary phone number.
    assert values["Applicant Home Phone"] == "(206) 555-0100"
    assert values["Applicant Cell Phone Number"] == "(206) 555-0100"


def test_eligibility_and_equipment(full_template: bytes) -> None:
    _, values = _fill(full_template, sample_record())

    assert values["Are you 18 years of age or older? Yes"] is True
    assert values["Are you 18 years of age or older? No"] is False
    assert values["Do you have a reliable means of transportation? Yes"] is True
    assert values["Do you have forklift certification? Yes"] is False
    assert values["Do you have forklift certification? No"] is True
    assert values["SD Sit Down"] == "Advanced"
    assert values["SU Stand Up"] == "None"
    assert values["CP Cherry Picker"] == ""


def test_equipment_checkbox_template_is_ticked() -> None:
    pdf = build_form_pdf([("SD Sit Down", "checkbox"), ("SU Stand Up", "checkbox")])

    report, values = _fill(pdf, sample_record())

    assert values["SD Sit Down"] is True
    assert values["SU Stand Up"] is False
    assert report.error_for("equipment.sd") is None


def test_education_and_employment_blocks(full_template: bytes) -> None:
    _, values = _fill(full_template, sample_record())

    assert values["School Name and Location 1"] == "Lincoln High, Seattle"
    assert values["School Diploma 1 - yes"] is True
    assert values["Company Name and Location 1"] == "Acme Freight, Tacoma"
    assert values["Company Date Started 1 - Month"] == "06"
    assert values["Company Date Ended 1 - Year"] == "2020"
    assert values["Company Telephone Number 1"] == "(253) 555-0142"
    assert values["Company May we contact 1? Yes"] is True
    assert values["Company Name and Location 2"] == ""


def test_only_two_education_and_employment_entries_are_placed(full_template: bytes) -> None:
    record = sample_record(
        education=[{"school_name": f"School {n}"} for n in range(1, 4)],
        employment=[{"company_name": f"Employer {n}"} for n in range(1, 4)],
    )

    report, values = _fill(full_template, record)

    assert values["School Name and Location 1"] == "School 1"
    assert values["School Name and Location 2"] == "School 2"
    assert values["Company Name and Location 1"] == "Employer 1"
    assert values["Company Name and Location 2"] == "Employer 2"
    assert "School 3" not in values.values()
    assert "Employer 3" not in values.values()
    assert report.dropped_entries == {"education": 1, "employment": 1}
