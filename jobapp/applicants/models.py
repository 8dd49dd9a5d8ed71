"""Pydantic models for a validated job-application submission."""

from __future__ import annotations

import re
from base64 import b64decode
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

US_STATES = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
        "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
        "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
        "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    }
)

SSN_PATTERN = r"^\d{3}-\d{2}-\d{4}$"
PHONE_PATTERN = r"^\(\d{3}\) \d{3}-\d{4}$"
OPTIONAL_PHONE_PATTERN = r"^(\(\d{3}\) \d{3}-\d{4})?$"
ZIP_PATTERN = r"^\d{5}(-\d{4})?$"
OPTIONAL_EMAIL_PATTERN = r"^([^@\s]+@[^@\s]+\.[^@\s]+)?$"

_DATA_URL_PREFIX = re.compile(r"^data:[^;,]*;base64,", re.IGNORECASE)

YesNo = Literal["yes", "no", ""]


class _CamelModel(BaseModel):
    """Accept both snake_case names and the camelCase keys the web form posts."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class EducationEntry(_CamelModel):
    """One school block of the application."""

    school_name: str = ""
    graduation_year: str = ""
    field_of_study: str = ""
    degree_received: str = ""


class EmploymentEntry(_CamelModel):
    """One previous-employer block of the application."""

    company_name: str = ""
    start_date: str = ""
    end_date: str = ""
    starting_position: str = ""
    ending_position: str = ""
    supervisor_name: str = ""
    supervisor_phone: str = Field(default="", pattern=OPTIONAL_PHONE_PATTERN)
    responsibilities: str = ""
    responsibilities_continued: str = ""
    reason_for_leaving: str = ""
    reason_leaving_continued: str = ""
    may_contact: YesNo = ""


class UploadedDocument(_CamelModel):
    """Uploaded file carried inline as base64."""

    type: Literal["identification", "resume", "certification"]
    category: str = ""
    name: str
    size: int = Field(ge=0)
    mime_type: str
    data: str

    def decoded(self) -> bytes:
        """Return raw file bytes; raises ``binascii.Error`` on malformed base64."""
        payload = _DATA_URL_PREFIX.sub("", self.data.strip())
        return b64decode(payload, validate=True)


class ApplicantRecord(_CamelModel):
    """Validated submission as produced by the multi-step form."""

    submission_id: str = ""

    legal_first_name: str = Field(min_length=1)
    middle_initial: str = Field(default="", max_length=1)
    legal_last_name: str = Field(min_length=1)
    other_last_names: str = ""
    date_of_birth: str = ""
    social_security_number: str = Field(pattern=SSN_PATTERN)

    street_address: str = Field(min_length=1)
    apt_number: str = ""
    city: str = Field(min_length=1)
    state: str
    zip_code: str = Field(pattern=ZIP_PATTERN)
    phone_number: str = Field(pattern=PHONE_PATTERN)
    home_phone: str = Field(default="", pattern=OPTIONAL_PHONE_PATTERN)
    email: str = Field(default="", pattern=OPTIONAL_EMAIL_PATTERN)

    emergency_name: str = ""
    emergency_phone: str = Field(default="", pattern=OPTIONAL_PHONE_PATTERN)
    emergency_relationship: str = ""

    citizenship_status: str = ""
    uscis_a_number: str = ""
    work_auth_expiration: str = ""
    work_authorization_expiration: str = ""
    alien_document_type: Literal["uscis_a_number", "form_i94", "foreign_passport", ""] = ""
    alien_document_number: str = ""
    i94_admission_number: str = ""
    foreign_passport_number: str = ""
    foreign_passport_country: str = ""

    age18: YesNo = ""
    transportation: YesNo = ""
    reliable_transport: YesNo = ""
    work_authorization_confirm: YesNo = ""
    work_authorized: YesNo = ""
    forklift_certification: YesNo = ""
    full_time_employment: YesNo = ""
    swing_shifts: YesNo = ""
    graveyard_shifts: YesNo = ""
    previously_applied: YesNo = ""
    previous_application_when: str = ""

    position_applied: str = ""
    expected_salary: str = ""
    job_discovery: str = ""
    job_discovery_continued: str = ""

    equipment_sd: str = Field(default="", alias="equipmentSD")
    equipment_su: str = Field(default="", alias="equipmentSU")
    equipment_sur: str = Field(default="", alias="equipmentSUR")
    equipment_cp: str = Field(default="", alias="equipmentCP")
    equipment_cl: str = Field(default="", alias="equipmentCL")
    equipment_riding_jack: str = ""

    skills1: str = ""
    skills2: str = ""
    skills3: str = ""

    availability_sunday: str = ""
    availability_monday: str = ""
    availability_tuesday: str = ""
    availability_wednesday: str = ""
    availability_thursday: str = ""
    availability_friday: str = ""
    availability_saturday: str = ""

    education: list[EducationEntry] = Field(default_factory=list)
    employment: list[EmploymentEntry] = Field(default_factory=list)
    documents: list[UploadedDocument] = Field(default_factory=list)

    language: str = ""
    ip_address: str = ""
    user_agent: str = ""
    submitted_at: str = ""

    @field_validator("state")
    @classmethod
    def _known_state(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in US_STATES:
            raise ValueError("Please select a valid state")
        return normalized

    @property
    def work_permit_expiration(self) -> str:
        """Expiration date under either of the two keys the form has used."""
        return self.work_authorization_expiration or self.work_auth_expiration
