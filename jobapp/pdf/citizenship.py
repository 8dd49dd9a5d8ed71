"""Citizenship status -> I-9 Section 1 checkbox and document-number fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from jobapp.applicants.models import ApplicantRecord

LOGGER = logging.getLogger(__name__)

I94_MAX_LENGTH = 11


class CitizenshipStatus(StrEnum):
    """The four attestation boxes of I-9 Section 1 (CB_1..CB_4)."""

    US_CITIZEN = "us_citizen"
    NONCITIZEN_NATIONAL = "noncitizen_national"
    LAWFUL_PERMANENT = "lawful_permanent"
    ALIEN_AUTHORIZED = "alien_authorized"


STATUS_ALIASES: dict[str, CitizenshipStatus] = {
    "us_citizen": CitizenshipStatus.US_CITIZEN,
    "citizen": CitizenshipStatus.US_CITIZEN,
    "noncitizen_national": CitizenshipStatus.NONCITIZEN_NATIONAL,
    "non_citizen_national": CitizenshipStatus.NONCITIZEN_NATIONAL,
    "lawful_permanent": CitizenshipStatus.LAWFUL_PERMANENT,
    "permanent_resident": CitizenshipStatus.LAWFUL_PERMANENT,
    "alien_authorized": CitizenshipStatus.ALIEN_AUTHORIZED,
    "work_authorized": CitizenshipStatus.ALIEN_AUTHORIZED,
    "authorized_alien": CitizenshipStatus.ALIEN_AUTHORIZED,
}

# Box checked when the status is empty or unrecognised. Long-standing
# behaviour; pending product confirmation, keep it in this one place.
UNKNOWN_STATUS_CHECKBOX = CitizenshipStatus.ALIEN_AUTHORIZED


class I9Policy(StrEnum):
    """When the separate I-9 document is produced."""

    NON_CITIZENS_ONLY = "non_citizens_only"
    ALWAYS = "always"


@dataclass(frozen=True)
class SubsidiaryField:
    """Value for one key of the I-9 ``work_authorization`` mapping namespace."""

    attribute: str
    value: str


@dataclass(frozen=True)
class CitizenshipResolution:
    status_code: str
    checkbox: CitizenshipStatus
    subsidiary: tuple[SubsidiaryField, ...] = ()
    defaulted: bool = False

    def checkbox_states(self) -> dict[str, bool]:
        """State for all four boxes: exactly one ``True``."""
        return {status.value: status == self.checkbox for status in CitizenshipStatus}


def normalize_status(code: str) -> CitizenshipStatus | None:
    return STATUS_ALIASES.get((code or "").strip().lower())


def requires_i9(status_code: str, policy: I9Policy = I9Policy.NON_CITIZENS_ONLY) -> bool:
    """Decide whether a separate I-9 document is generated for this applicant."""
    if policy == I9Policy.ALWAYS:
        return True
    raw = (status_code or "").strip()
    if not raw:
        return False
    return normalize_status(raw) != CitizenshipStatus.US_CITIZEN


def _alien_documents(record: ApplicantRecord) -> tuple[str, str, str, str]:
    a_number = record.uscis_a_number.strip()
    i94 = record.i94_admission_number.strip()
    passport = record.foreign_passport_number.strip()
    country = record.foreign_passport_country.strip()

    # Older form revisions posted a single type + number pair instead.
    legacy_number = record.alien_document_number.strip()
    if legacy_number:
        if record.alien_document_type == "uscis_a_number" and not a_number:
            a_number = legacy_number
        elif record.alien_document_type == "form_i94" and not i94:
            i94 = legacy_number
        elif record.alien_document_type == "foreign_passport" and not passport:
            passport = legacy_number
    return a_number, i94, passport, country


def _alien_subsidiary(record: ApplicantRecord) -> tuple[SubsidiaryField, ...]:
    fields: list[SubsidiaryField] = []
    expiration = record.work_permit_expiration.strip()
    if expiration:
        fields.append(SubsidiaryField("expiration_date", expiration))

    a_number, i94, passport, country = _alien_documents(record)
    if a_number:
        fields.append(SubsidiaryField("uscis_a_number_alien", a_number))
    elif i94:
        fields.append(SubsidiaryField("i94_admission_number", i94[:I94_MAX_LENGTH]))
    elif passport and country:
        fields.append(SubsidiaryField("foreign_passport", f"{passport} - {country}"))
    else:
        LOGGER.warning(
            "Alien authorized to work but no USCIS A-Number, I-94 or foreign passport provided",
            extra={"submission_id": record.submission_id},
        )
    return tuple(fields)


def resolve_citizenship(record: ApplicantRecord) -> CitizenshipResolution:
    """Map the record's status code to one checkbox plus its subsidiary fields."""
    raw = record.citizenship_status.strip()
    status = normalize_status(raw)

    if status is None:
        LOGGER.warning(
            "Unknown citizenship status %r; defaulting to %s",
            raw,
            UNKNOWN_STATUS_CHECKBOX.value,
            extra={"submission_id": record.submission_id},
        )
        return CitizenshipResolution(
            status_code=raw, checkbox=UNKNOWN_STATUS_CHECKBOX, defaulted=True
        )

    if status == CitizenshipStatus.LAWFUL_PERMANENT:
        a_number, _, _, _ = _alien_documents(record)
        subsidiary: tuple[SubsidiaryField, ...] = ()
        if a_number:
            subsidiary = (SubsidiaryField("uscis_a_number_permanent", a_number),)
        return CitizenshipResolution(status_code=raw, checkbox=status, subsidiary=subsidiary)

    if status == CitizenshipStatus.ALIEN_AUTHORIZED:
        return CitizenshipResolution(
            status_code=raw, checkbox=status, subsidiary=_alien_subsidiary(record)
        )

    return CitizenshipResolution(status_code=raw, checkbox=status)
