from __future__ import annotations

from typing import Any

import pytest

from jobapp.applicants.models import ApplicantRecord
from jobapp.pdf.citizenship import resolve_citizenship
from jobapp.pdf.fields import FormHandle
from jobapp.pdf.filler import FormFiller
from jobapp.pdf.inspection import read_field_values
from jobapp.pdf.mappings import default_application_mappings, default_i9_mappings
from jobapp.pdf.report import FillReport
from jobapp.pdf.service import serialize
from tests.pdf_factory import build_form_pdf, i9_template, open_form
from tests.sample_applicant import sample_record

CHECKBOXES = ("CB_1", "CB_2", "CB_3", "CB_4")


def _fill_i9(pdf: bytes, record: ApplicantRecord) -> tuple[FillReport, dict[str, Any]]:
    filler = FormFiller(default_application_mappings(), default_i9_mappings())
    doc = open_form(pdf)
    try:
        report = filler.fill_i9(FormHandle(doc), record, resolve_citizenship(record))
        data = serialize(doc, flatten_widgets=False)
    finally:
        doc.close()
    return report, read_field_values(data)


@pytest.fixture(scope="module")
def template() -> bytes:
    return i9_template()


@pytest.mark.parametrize(
    ("code", "checked"),
    [
        ("us_citizen", "CB_1"),
        ("noncitizen_national", "CB_2"),
        ("lawful_permanent", "CB_3"),
        ("alien_authorized", "CB_4"),
    ],
)
def test_exactly_one_citizenship_box_is_checked(template: bytes, code: str, checked: str) -> None:
    _, values = _fill_i9(template, sample_record(citizenship_status=code))

    assert [name for name in CHECKBOXES if values[name] is True] == [checked]


def test_section_one_identity_fields(template: bytes) -> None:
    report, values = _fill_i9(template, sample_record(citizenship_status="noncitizen_national"))

    assert report.ok
    assert values["Last Name (Family Name)"] == "O'Brien-Smith"
    assert values["First Name Given Name"] == "Mary"
    assert values["Last Name Family Name from Section 1"] == "O'Brien-Smith"
    assert values["Employee Other Last Names Used (if any)"] == "Smith"
    assert values["Apt Number (if any)"] == "4B"
    assert values["Date of Birth mmddyyyy"] == "03071990"
    assert values["US Social Security Number"] == "123456789"
    assert values["Employees E-mail Address"] == "mary@example.com"


def test_state_dropdown_selects_option(template: bytes) -> None:
    report, values = _fill_i9(template, sample_record(state="wa"))

    assert values["State"] == "WA"
    assert report.field_for("address.state") == "State"


def test_state_missing_from_dropdown_is_invalid_option() -> None:
    pdf = build_form_pdf([("State", "combobox")], options=["CA", "NY"])

    report, values = _fill_i9(pdf, sample_record())

    error = report.error_for("address.state")
    assert error is not None
    assert error.reason == "invalid_option"
    assert values["State"] == "CA"


def test_state_written_as_text_when_template_uses_text_field() -> None:
    pdf = build_form_pdf([("State", "text")])

    _, values = _fill_i9(pdf, sample_record())

    assert values["State"] == "WA"


def test_alien_with_a_number_and_i94_fills_only_a_number(template: bytes) -> None:
    record = sample_record(
        citizenship_status="alien_authorized",
        uscis_a_number="A987654321",
        i94_admission_number="12345678901",
        work_authorization_expiration="2027-12-31",
    )

    _, values = _fill_i9(template, record)

    assert values["USCIS ANumber"] == "A987654321"
    assert values["Form I94 Admission Number"] == ""
    assert values["Foreign Passport Number and Country of IssuanceRow1"] == ""
    assert values["Exp Date mmddyyyy"] == "12312027"


def test_permanent_resident_a_number_field(template: bytes) -> None:
    record = sample_record(citizenship_status="lawful_permanent", uscis_a_number="A123456789")

    _, values = _fill_i9(template, record)

    assert values["3 A lawful permanent resident Enter USCIS or ANumber"] == "A123456789"
    assert values["USCIS ANumber"] == ""


def test_alien_passport_alternative(template: bytes) -> None:
    record = sample_record(
        citizenship_status="alien_authorized",
        foreign_passport_number="X1234567",
        foreign_passport_country="Mexico",
    )

    _, values = _fill_i9(template, record)

    assert values["Foreign Passport Number and Country of IssuanceRow1"] == "X1234567 - Mexico"
    assert values["CB_4"] is True
