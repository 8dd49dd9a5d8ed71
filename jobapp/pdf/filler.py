"""Populate application and I-9 forms from an ApplicantRecord."""

from __future__ import annotations

import logging

from jobapp.applicants.models import ApplicantRecord, EducationEntry, EmploymentEntry
from jobapp.pdf.citizenship import CitizenshipResolution
from jobapp.pdf.fields import (
    CheckboxField,
    DropdownField,
    FormField,
    FormHandle,
    NotFound,
    TextField,
    apply_checkbox,
    apply_choice,
    apply_text,
)
from jobapp.pdf.formatting import equipment_label, i9_date, split_date, ssn_digits, ssn_parts
from jobapp.pdf.mappings import (
    ApplicationFieldMappings,
    FieldMapping,
    I9FieldMappings,
    Namespace,
)
from jobapp.pdf.report import FieldError, FilledField, FillReport

LOGGER = logging.getLogger(__name__)

_YES = {"yes", "y", "true"}
_NO = {"no", "n", "false"}


def _yes_no(answer: str) -> bool | None:
    normalized = (answer or "").strip().lower()
    if normalized in _YES:
        return True
    if normalized in _NO:
        return False
    return None


class _FillSession:
    """Writes into one form, remembering which field names are already taken."""

    def __init__(self, form: FormHandle, report: FillReport, submission_id: str) -> None:
        self._form = form
        self._report = report
        self._submission_id = submission_id
        self._claimed: dict[str, str] = {}

    def _resolve(self, attribute: str, mapping: FieldMapping) -> FormField | FieldError:
        conflict = False
        for name in mapping.candidates():
            owner = self._claimed.get(name)
            if owner is not None and owner != attribute:
                conflict = True
                continue
            field = self._form.lookup(name)
            if isinstance(field, NotFound):
                continue
            return field
        return FieldError(
            attribute=attribute,
            reason="conflict" if conflict else "not_found",
            candidates=mapping.candidates(),
        )

    def _fail(self, error: FieldError) -> None:
        LOGGER.warning(
            "Could not place attribute in PDF (%s)",
            error.reason,
            extra={"attribute": error.attribute, "submission_id": self._submission_id},
        )
        self._report.record(error)

    def _done(self, attribute: str, field_name: str, value: str | bool) -> None:
        self._claimed[field_name] = attribute
        self._report.record(FilledField(attribute=attribute, field_name=field_name, value=value))

    def text(self, attribute: str, mapping: FieldMapping, value: str) -> None:
        """Write a scalar value to a text field, or select it on a dropdown."""
        if not value or not value.strip():
            return
        resolved = self._resolve(attribute, mapping)
        if isinstance(resolved, FieldError):
            self._fail(resolved)
            return
        try:
            if isinstance(resolved, TextField):
                written = apply_text(resolved, value)
            elif isinstance(resolved, DropdownField):
                selected = apply_choice(resolved, value)
                if selected is None:
                    self._fail(
                        FieldError(
                            attribute=attribute,
                            reason="invalid_option",
                            candidates=mapping.candidates(),
                            detail=f"'{value}' is not an option of '{resolved.name}'",
                        )
                    )
                    return
                written = selected
            else:
                self._fail(
                    FieldError(
                        attribute=attribute,
                        reason="wrong_kind",
                        candidates=mapping.candidates(),
                        detail=f"'{resolved.name}' is {type(resolved).__name__}",
                    )
                )
                return
        except Exception as exc:
            self._fail(
                FieldError(
                    attribute=attribute,
                    reason="write_failed",
                    candidates=mapping.candidates(),
                    detail=str(exc),
                )
            )
            return
        self._done(attribute, resolved.name, written)

    def checkbox(self, attribute: str, mapping: FieldMapping, checked: bool) -> None:
        """Set a check state; a checkbox absent from the template is skipped silently."""
        resolved = self._resolve(attribute, mapping)
        if isinstance(resolved, FieldError):
            if resolved.reason == "not_found":
                LOGGER.debug(
                    "Checkbox not present on template",
                    extra={"attribute": attribute, "submission_id": self._submission_id},
                )
                return
            self._fail(resolved)
            return
        if not isinstance(resolved, CheckboxField):
            self._fail(
                FieldError(
                    attribute=attribute,
                    reason="wrong_kind",
                    candidates=mapping.candidates(),
                    detail=f"'{resolved.name}' is {type(resolved).__name__}",
                )
            )
            return
        try:
            apply_checkbox(resolved, checked)
        except Exception as exc:
            self._fail(
                FieldError(
                    attribute=attribute,
                    reason="write_failed",
                    candidates=mapping.candidates(),
                    detail=str(exc),
                )
            )
            return
        self._done(attribute, resolved.name, checked)

    def yes_no(self, prefix: str, namespace: Namespace, key: str, answer: str) -> None:
        """Drive a ``<key>_yes`` / ``<key>_no`` checkbox pair from a yes/no answer."""
        value = _yes_no(answer)
        if value is None:
            return
        self.checkbox(f"{prefix}.{key}_yes", namespace[f"{key}_yes"], value)
        self.checkbox(f"{prefix}.{key}_no", namespace[f"{key}_no"], not value)

    def equipment(self, attribute: str, mapping: FieldMapping, experience: str) -> None:
        """Experience level as text, or a tick when the template uses a checkbox."""
        if not experience or not experience.strip():
            return
        resolved = self._resolve(attribute, mapping)
        if isinstance(resolved, CheckboxField):
            self.checkbox(attribute, mapping, experience.strip().lower() != "none")
            return
        self.text(attribute, mapping, equipment_label(experience))

    def date_parts(self, prefix: str, namespace: Namespace, stem: str, value: str) -> None:
        parts = split_date(value)
        if parts is None:
            if value and value.strip():
                LOGGER.info(
                    "Unparsable date left blank",
                    extra={"attribute": f"{prefix}.{stem}", "submission_id": self._submission_id},
                )
            return
        month, day, year = parts
        self.text(f"{prefix}.{stem}_month", namespace[f"{stem}_month"], month)
        self.text(f"{prefix}.{stem}_day", namespace[f"{stem}_day"], day)
        self.text(f"{prefix}.{stem}_year", namespace[f"{stem}_year"], year)


class FormFiller:
    """Fills the application and I-9 templates through injected mapping tables."""

    def __init__(
        self,
        application_mappings: ApplicationFieldMappings,
        i9_mappings: I9FieldMappings,
    ) -> None:
        self._app = application_mappings
        self._i9 = i9_mappings

    def fill_application(self, form: FormHandle, record: ApplicantRecord) -> FillReport:
        """Write every mapped attribute of ``record`` into the application form."""
        report = FillReport(document="application")
        session = _FillSession(form, report, record.submission_id)
        m = self._app

        personal = m.personal_info
        session.text("personal_info.legal_first_name", personal["legal_first_name"], record.legal_first_name)
        session.text("personal_info.legal_last_name", personal["legal_last_name"], record.legal_last_name)
        session.text("personal_info.middle_initial", personal["middle_initial"], record.middle_initial)
        session.date_parts("personal_info", personal, "dob", record.date_of_birth)

        contact = m.contact_info
        session.text("contact_info.street_address", contact["street_address"], record.street_address)
        session.text("contact_info.city", contact["city"], record.city)
        session.text("contact_info.state", contact["state"], record.state)
        session.text("contact_info.zip_code", contact["zip_code"], record.zip_code)
        session.text("contact_info.home_phone", contact["home_phone"], record.home_phone or record.phone_number)
        session.text("contact_info.cell_phone", contact["cell_phone"], record.phone_number)
        session.text("contact_info.email", contact["email"], record.email)
        for index, part in enumerate(ssn_parts(record.social_security_number), start=1):
            session.text(f"contact_info.ssn_part{index}", contact[f"ssn_part{index}"], part)

        emergency = m.emergency_contact
        session.text("emergency_contact.name", emergency["name"], record.emergency_name)
        session.text("emergency_contact.phone", emergency["phone"], record.emergency_phone)
        session.text("emergency_contact.relationship", emergency["relationship"], record.emergency_relationship)

        for day, mapping in m.weekly_availability.items():
            session.text(f"weekly_availability.{day}", mapping, getattr(record, f"availability_{day}", ""))

        position = m.position
        session.text("position.position_applied", position["position_applied"], record.position_applied)
        session.text("position.job_discovery", position["job_discovery"], record.job_discovery)
        session.text(
            "position.job_discovery_continued",
            position["job_discovery_continued"],
            record.job_discovery_continued,
        )
        session.text("position.expected_salary", position["expected_salary"], record.expected_salary)

        eligibility = m.eligibility
        session.yes_no("eligibility", eligibility, "age_over_18", record.age18)
        session.yes_no(
            "eligibility", eligibility, "reliable_transport", record.reliable_transport or record.transportation
        )
        session.yes_no(
            "eligibility", eligibility, "work_authorized", record.work_authorized or record.work_authorization_confirm
        )
        session.yes_no("eligibility", eligibility, "full_time", record.full_time_employment)
        session.yes_no("eligibility", eligibility, "swing_shifts", record.swing_shifts)
        session.yes_no("eligibility", eligibility, "graveyard_shifts", record.graveyard_shifts)
        session.yes_no("eligibility", eligibility, "previously_applied", record.previously_applied)
        session.yes_no("eligibility", eligibility, "forklift_cert", record.forklift_certification)

        equipment = m.equipment
        session.equipment("equipment.sd", equipment["sd"], record.equipment_sd)
        session.equipment("equipment.su", equipment["su"], record.equipment_su)
        session.equipment("equipment.sur", equipment["sur"], record.equipment_sur)
        session.equipment("equipment.cp", equipment["cp"], record.equipment_cp)
        session.equipment("equipment.cl", equipment["cl"], record.equipment_cl)
        session.equipment("equipment.rj", equipment["rj"], record.equipment_riding_jack)

        skills = m.skills
        session.text("skills.skill1", skills["skill1"], record.skills1)
        session.text("skills.skill2", skills["skill2"], record.skills2)
        session.text("skills.skill3", skills["skill3"], record.skills3)

        # The template has a fixed number of repeating blocks; extra entries cannot be placed.
        for index, entry in enumerate(record.education[: len(m.education)]):
            self._fill_education(session, f"education[{index}]", m.education[index], entry)
        for index, entry in enumerate(record.employment[: len(m.employment)]):
            self._fill_employment(session, f"employment[{index}]", m.employment[index], entry)
        self._note_dropped(report, record, "education", len(record.education), len(m.education))
        self._note_dropped(report, record, "employment", len(record.employment), len(m.employment))

        return report

    @staticmethod
    def _fill_education(
        session: _FillSession, prefix: str, block: Namespace, entry: EducationEntry
    ) -> None:
        session.text(f"{prefix}.school_name", block["school_name"], entry.school_name)
        session.text(f"{prefix}.year", block["year"], entry.graduation_year)
        session.text(f"{prefix}.major", block["major"], entry.field_of_study)
        session.yes_no(prefix, block, "diploma", entry.degree_received)

    @staticmethod
    def _fill_employment(
        session: _FillSession, prefix: str, block: Namespace, entry: EmploymentEntry
    ) -> None:
        session.text(f"{prefix}.company_name", block["company_name"], entry.company_name)
        session.date_parts(prefix, block, "start", entry.start_date)
        session.date_parts(prefix, block, "end", entry.end_date)
        session.text(f"{prefix}.start_position", block["start_position"], entry.starting_position)
        session.text(f"{prefix}.end_position", block["end_position"], entry.ending_position)
        session.text(f"{prefix}.phone", block["phone"], entry.supervisor_phone)
        session.text(f"{prefix}.supervisor", block["supervisor"], entry.supervisor_name)
        session.yes_no(prefix, block, "may_contact", entry.may_contact)
        session.text(f"{prefix}.responsibilities", block["responsibilities"], entry.responsibilities)
        session.text(
            f"{prefix}.responsibilities_continued",
            block["responsibilities_continued"],
            entry.responsibilities_continued,
        )
        session.text(f"{prefix}.reason_leaving", block["reason_leaving"], entry.reason_for_leaving)
        session.text(
            f"{prefix}.reason_leaving_continued",
            block["reason_leaving_continued"],
            entry.reason_leaving_continued,
        )

    @staticmethod
    def _note_dropped(
        report: FillReport, record: ApplicantRecord, name: str, given: int, capacity: int
    ) -> None:
        if given <= capacity:
            return
        report.dropped_entries[name] = given - capacity
        LOGGER.info(
            "Template holds %d %s entries; %d not placed",
            capacity,
            name,
            given - capacity,
            extra={"submission_id": record.submission_id},
        )

    def fill_i9(
        self,
        form: FormHandle,
        record: ApplicantRecord,
        resolution: CitizenshipResolution,
    ) -> FillReport:
        """Fill I-9 Section 1; signature and Sections 2-3 are left for HR."""
        report = FillReport(document="i9")
        session = _FillSession(form, report, record.submission_id)
        m = self._i9

        for prefix, namespace in (("personal_info", m.personal_info), ("page_header", m.page_header)):
            session.text(f"{prefix}.last_name", namespace["last_name"], record.legal_last_name)
            session.text(f"{prefix}.first_name", namespace["first_name"], record.legal_first_name)
            session.text(f"{prefix}.middle_initial", namespace["middle_initial"], record.middle_initial)
        session.text(
            "personal_info.other_last_names",
            m.personal_info["other_last_names"],
            record.other_last_names,
        )

        address = m.address
        session.text("address.street_address", address["street_address"], record.street_address)
        session.text("address.apt_number", address["apt_number"], record.apt_number)
        session.text("address.city", address["city"], record.city)
        session.text("address.state", address["state"], record.state)
        session.text("address.zip_code", address["zip_code"], record.zip_code)

        identification = m.identification
        session.text(
            "identification.date_of_birth",
            identification["date_of_birth"],
            i9_date(record.date_of_birth),
        )
        session.text(
            "identification.social_security_number",
            identification["social_security_number"],
            ssn_digits(record.social_security_number),
        )
        session.text("identification.phone_number", identification["phone_number"], record.phone_number)
        session.text("identification.email", identification["email"], record.email)

        for status, checked in resolution.checkbox_states().items():
            session.checkbox(f"citizenship.{status}", m.citizenship[status], checked)

        for item in resolution.subsidiary:
            value = i9_date(item.value) if item.attribute == "expiration_date" else item.value
            session.text(
                f"work_authorization.{item.attribute}",
                m.work_authorization[item.attribute],
                value,
            )

        return report
