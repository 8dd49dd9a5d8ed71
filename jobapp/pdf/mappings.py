"""Logical applicant attribute -> PDF form field name tables.

Field names are the exact names found in the two fillable templates
(typos and double spaces included). Swapping a template means re-checking
these tables with ``scripts/inspect_pdf_fields.py``.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping


@dataclass(frozen=True)
class FieldMapping:
    """Primary field name plus ordered fallbacks for one attribute."""

    primary: str
    fallbacks: tuple[str, ...] = ()

    def candidates(self) -> tuple[str, ...]:
        """Names in lookup order: primary first, then each fallback."""
        return (self.primary, *self.fallbacks)


Namespace = Mapping[str, FieldMapping]


def _m(primary: str, *fallbacks: str) -> FieldMapping:
    return FieldMapping(primary=primary, fallbacks=tuple(fallbacks))


def _namespace(**entries: FieldMapping) -> Namespace:
    return MappingProxyType(dict(entries))


@dataclass(frozen=True)
class ApplicationFieldMappings:
    """Field table for the main application template."""

    personal_info: Namespace
    contact_info: Namespace
    emergency_contact: Namespace
    weekly_availability: Namespace
    position: Namespace
    eligibility: Namespace
    equipment: Namespace
    skills: Namespace
    education: tuple[Namespace, ...]
    employment: tuple[Namespace, ...]

    def namespaces(self) -> Iterator[tuple[str, Namespace]]:
        """Yield every namespace with a display name, repeating blocks indexed."""
        yield "personal_info", self.personal_info
        yield "contact_info", self.contact_info
        yield "emergency_contact", self.emergency_contact
        yield "weekly_availability", self.weekly_availability
        yield "position", self.position
        yield "eligibility", self.eligibility
        yield "equipment", self.equipment
        yield "skills", self.skills
        for index, block in enumerate(self.education):
            yield f"education[{index}]", block
        for index, block in enumerate(self.employment):
            yield f"employment[{index}]", block


@dataclass(frozen=True)
class I9FieldMappings:
    """Field table for the I-9 template (Section 1 only)."""

    personal_info: Namespace
    page_header: Namespace
    address: Namespace
    identification: Namespace
    citizenship: Namespace
    work_authorization: Namespace

    def namespaces(self) -> Iterator[tuple[str, Namespace]]:
        yield "personal_info", self.personal_info
        yield "page_header", self.page_header
        yield "address", self.address
        yield "identification", self.identification
        yield "citizenship", self.citizenship
        yield "work_authorization", self.work_authorization


def _education_block(n: int) -> Namespace:
    if n == 1:
        return _namespace(
            school_name=_m("School Name and Location 1", "School Name and Location", "School 1", "Education 1"),
            year=_m("School Year 1", "Year", "Year 1", "Graduation Year"),
            major=_m("School Major 1", "Major", "Major 1", "Degree"),
            diploma_yes=_m("School Diploma 1 - yes", "Diploma 1 Yes"),
            diploma_no=_m("School Diploma 1 - No", "Diploma 1 No"),
        )
    return _namespace(
        school_name=_m("School Name and Location 2", "School Name and Location_2", "School 2", "Education 2"),
        year=_m("School Year 2", "Year_2", "Year 2", "Graduation Year 2"),
        major=_m("School Major 2", "Major_2", "Major 2", "Degree 2"),
        diploma_yes=_m("School Diploma 2 - yes", "Diploma 2 Yes"),
        diploma_no=_m("School Diploma 2 - No", "Diploma 2 No"),
    )


def _employment_block(n: int) -> Namespace:
    dates = {
        "start_month": _m(f"Company Date Started {n} - Month", f"Start Month {n}"),
        "start_day": _m(f"Company Date Started {n} - Day", f"Start Day {n}"),
        "start_year": _m(f"Company Date Started {n} - Year", f"Start Year {n}"),
        "end_month": _m(f"Company Date Ended {n} - Month", f"End Month {n}"),
        "end_day": _m(f"Company Date Ended {n} - Day", f"End Day {n}"),
        "end_year": _m(f"Company Date Ended {n} - Year", f"End Year {n}"),
        "may_contact_yes": _m(f"Company May we contact {n}? Yes", f"May Contact {n} Yes"),
        "may_contact_no": _m(f"Company May we contact {n}? No", f"May Contact {n} No"),
    }
    if n == 1:
        return _namespace(
            company_name=_m("Company Name and Location 1", "Company Name and Location", "Company 1", "Employer 1"),
            start_position=_m("Company Starting Position 1", "Starting Position", "Start Position", "Initial Position"),
            end_position=_m("Company Ending Position 1", "Ending Position", "End Position", "Final Position"),
            phone=_m("Company Telephone Number 1", "Telephone Number", "Company Phone", "Phone"),
            supervisor=_m("Company Supervisor Name 1", "Supervisor Name", "Supervisor", "Manager"),
            responsibilities=_m("Company Responsibilities 1", "Responsibilities 1", "Duties", "Job Description"),
            responsibilities_continued=_m("Company Responsibilities 1 Continued", "Responsibilities 1 Continued"),
            reason_leaving=_m("Company Reason for Leaving 1", "Reason for Leaving 1", "Reason Leaving", "Why Left"),
            reason_leaving_continued=_m("Company Reason for Leaving 1 Conitnued", "Reason Leaving 1 Continued"),
            **dates,
        )
    return _namespace(
        company_name=_m("Company Name and Location 2", "Company Name and Location_2", "Company 2", "Employer 2"),
        start_position=_m("Company Starting Position 2", "Starting Position_2", "Start Position 2", "Initial Position 2"),
        end_position=_m("Company Ending Position 2", "Ending Position_2", "End Position 2", "Final Position 2"),
        phone=_m("Company Telephone Number 2", "Telephone Number_2", "Company Phone 2", "Phone 2"),
        supervisor=_m("Company Supervisor Name 2", "Supervisor Name_2", "Supervisor 2", "Manager 2"),
        responsibilities=_m("Company Responsibilities 2", "Responsibilities 1_2", "Duties 2", "Job Description 2"),
        responsibilities_continued=_m("Company Responsibilities 2 Continued", "Responsibilities 2 Continued"),
        reason_leaving=_m("Company Reason for Leaving 2", "Reason for Leaving 1_2", "Reason Leaving 2", "Why Left 2"),
        reason_leaving_continued=_m("Company Reason for Leaving 2 Continued", "Reason Leaving 2 Continued"),
        **dates,
    )


def default_application_mappings() -> ApplicationFieldMappings:
    """Field table matching the shipped application template."""
    return ApplicationFieldMappings(
        personal_info=_namespace(
            legal_first_name=_m("Applicant Legal First Name", "Legal First Name", "First Name", "FirstName"),
            legal_last_name=_m("Applicant Legal Last Name", "Legal Last Name", "Last Name", "LastName"),
            middle_initial=_m("Applicant Middle Initials", "Middle Initial", "MI", "Middle"),
            dob_month=_m("Applicant DOB - Month", "DOB Month", "Birth Month"),
            dob_day=_m("Applicant DOB - Day", "DOB Day", "Birth Day"),
            dob_year=_m("Applicant DOB - Year", "DOB Year", "Birth Year"),
        ),
        contact_info=_namespace(
            street_address=_m("Applicant Street Address", "Street Address", "Address", "Street"),
            city=_m("Applicant City", "City", "City Name"),
            state=_m("Applicant State", "State", "State/Province"),
            zip_code=_m("Applicant Zip Code", "Zip Code", "ZIP", "Postal Code"),
            home_phone=_m("Applicant Home Phone", "Home Phone", "Phone", "Home Phone Number"),
            cell_phone=_m("Applicant Cell Phone Number", "Cell Phone Number", "Cell Phone", "Mobile"),
            email=_m("Applicant Email", "Email", "Email Address", "E-mail"),
            ssn_part1=_m("Applicant SSN - P1", "SSN Part 1", "SSN P1"),
            ssn_part2=_m("Applicant SSN - P2", "SSN Part 2", "SSN P2"),
            ssn_part3=_m("Applicant SSN - P3", "SSN Part 3", "SSN P3"),
        ),
        emergency_contact=_namespace(
            name=_m("Emergency Contact Name", "Name", "Contact Name"),
            phone=_m("Emergency Contact Phone Number", "Number", "Emergency Phone", "Contact Phone"),
            relationship=_m("Emergency Contact Relationship", "Relationship", "Contact Relationship"),
        ),
        weekly_availability=_namespace(
            sunday=_m("Sunday Hours", "Sunday", "Sun"),
            monday=_m("Monday  Hours", "Monday", "Mon"),
            tuesday=_m("Tuesday  Hours", "Tuesday", "Tue"),
            wednesday=_m("Wednesday  Hours", "Wednesday", "Wed"),
            thursday=_m("Thursday  Hours", "Thursday", "Thu"),
            friday=_m("Friday  Hours", "Friday", "Fri"),
            saturday=_m("Saturday Hours", "Saturday", "Sat"),
        ),
        position=_namespace(
            position_applied=_m("Position Applied For", "Position", "Job Title"),
            job_discovery=_m("How did you discover this job opening", "Job Discovery", "How did you hear"),
            job_discovery_continued=_m("How did you discover this job opening - Continued", "Job Discovery Continued"),
            expected_salary=_m("Expected Salary", "Salary", "Expected Pay"),
        ),
        eligibility=_namespace(
            age_over_18_yes=_m("Are you 18 years of age or older? Yes", "Age 18+ Yes"),
            age_over_18_no=_m("Are you 18 years of age or older? No", "Age 18+ No"),
            reliable_transport_yes=_m("Do you have a reliable means of transportation? Yes", "Transport Yes"),
            reliable_transport_no=_m("Do you have a reliable means of transportation? No", "Transport No"),
            work_authorized_yes=_m(
                "Are you legally authorized to work in the country where you are applying? Yes", "Work Auth Yes"
            ),
            work_authorized_no=_m(
                "Are you legally authorized to work in the country where you are applying? No", "Work Auth No"
            ),
            full_time_yes=_m("Are you looking for full-time employment? Yes", "Full Time Yes"),
            full_time_no=_m("Are you looking for full-time employment? No", "Full Time No"),
            swing_shifts_yes=_m("Are you open to working swing shifts? Yes", "Swing Shifts Yes"),
            swing_shifts_no=_m("Are you open to working swing shifts? No", "Swing Shifts No"),
            graveyard_shifts_yes=_m("Are you willing to work graveyard shifts? Yes", "Graveyard Yes"),
            graveyard_shifts_no=_m("Are you willing to work graveyard shifts? No", "Graveyard No"),
            previously_applied_yes=_m("Have you previously applied at WareWorks? Yes", "Previously Applied Yes"),
            previously_applied_no=_m("Have you previously applied at WareWorks? No", "Previously Applied No"),
            forklift_cert_yes=_m("Do you have forklift certification? Yes", "Forklift Cert Yes"),
            forklift_cert_no=_m("Do you have forklift certification? No", "Forklift Cert No"),
        ),
        equipment=_namespace(
            sd=_m("SD Sit Down", "SD", "Sit Down"),
            su=_m("SU Stand Up", "SU", "Stand Up"),
            sur=_m("SUR Stand Up Reach", "SUR", "Stand Up Reach"),
            cp=_m("CP Cherry Picker", "CP", "Cherry Picker"),
            cl=_m("CL Clamps", "CL", "Clamps"),
            rj=_m("Riding Jack", "RJ", "Jack"),
        ),
        skills=_namespace(
            skill1=_m("Applicable Skills  Qualifications 1", "Skills 1", "Skill 1"),
            skill2=_m("Applicable Skills  Qualifications 2", "Skills 2", "Skill 2"),
            skill3=_m("Applicable Skills  Qualifications 3", "Skills 3", "Skill 3"),
        ),
        education=(_education_block(1), _education_block(2)),
        employment=(_employment_block(1), _employment_block(2)),
    )


def default_i9_mappings() -> I9FieldMappings:
    """Field table matching the shipped I-9 template."""
    return I9FieldMappings(
        personal_info=_namespace(
            last_name=_m("Last Name (Family Name)", "Last Name Family Name from Section 1", "LastName"),
            first_name=_m("First Name Given Name", "First Name Given Name from Section 1", "FirstName"),
            middle_initial=_m("Employee Middle Initial (if any)", "Middle initial if any from Section 1", "MI"),
            other_last_names=_m("Employee Other Last Names Used (if any)", "Other Names", "Previous Names"),
        ),
        # Name repeated in the header of the following pages.
        page_header=_namespace(
            last_name=_m("Last Name Family Name from Section 1"),
            first_name=_m("First Name Given Name from Section 1"),
            middle_initial=_m("Middle initial if any from Section 1"),
        ),
        address=_namespace(
            street_address=_m("Address Street Number and Name", "Street Address", "Address"),
            apt_number=_m("Apt Number (if any)", "Apartment", "Unit"),
            city=_m("City or Town", "City", "Town"),
            state=_m("State", "State/Province"),
            zip_code=_m("ZIP Code", "Zip", "Postal Code"),
        ),
        identification=_namespace(
            date_of_birth=_m("Date of Birth mmddyyyy", "DOB", "Birth Date"),
            social_security_number=_m("US Social Security Number", "SSN", "Social Security"),
            phone_number=_m("Telephone Number", "Phone", "Phone Number"),
            email=_m("Employees E-mail Address", "Email", "Email Address"),
        ),
        citizenship=_namespace(
            us_citizen=_m("CB_1", "Citizen", "US Citizen"),
            noncitizen_national=_m("CB_2", "Non-citizen National"),
            lawful_permanent=_m("CB_3", "Permanent Resident"),
            alien_authorized=_m("CB_4", "Authorized Alien", "Work Authorized"),
        ),
        work_authorization=_namespace(
            uscis_a_number_permanent=_m(
                "3 A lawful permanent resident Enter USCIS or ANumber",
                "CB_3 USCIS",
                "Permanent Resident A-Number",
            ),
            uscis_a_number_alien=_m("USCIS ANumber", "CB_4 USCIS", "A-Number"),
            expiration_date=_m("Exp Date mmddyyyy", "Expiration Date", "Exp Date"),
            i94_admission_number=_m("Form I94 Admission Number", "I-94 Number", "Admission Number"),
            foreign_passport=_m(
                "Foreign Passport Number and Country of IssuanceRow1",
                "Passport Number",
                "Foreign Passport",
            ),
        ),
    )
