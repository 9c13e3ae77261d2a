"""Reusable constrained field types with the API's error messages."""

import re
from typing import Annotated

from pydantic import AfterValidator, StringConstraints

from university.core.config import ENROLLMENT_STATUSES, ROLES, SEMESTER_NAMES

ID_NUMBER_RE = re.compile(r"^ETS\d{4}/\d{2}$")
PHONE_RE = re.compile(r"^\+?[0-9][0-9 \-]{6,18}$")
GRADE_RE = re.compile(r"^[A-F]\+?$")

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # bcrypt ignores anything past this


def _required(label: str) -> AfterValidator:
    def check(value: str) -> str:
        if not value:
            raise ValueError(f"{label} is required")
        return value

    return AfterValidator(check)


def _check_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


def _check_id_number(value: str) -> str:
    if not ID_NUMBER_RE.match(value):
        raise ValueError(
            "Invalid ID number format. Must be ETS{4 digits}/{2 digits}"
        )
    return value


def _check_phone(value: str) -> str:
    if not PHONE_RE.match(value):
        raise ValueError("Invalid phone number")
    return value


def _positive(label: str) -> AfterValidator:
    def check(value: int) -> int:
        if value < 1:
            raise ValueError(f"Invalid {label} ID")
        return value

    return AfterValidator(check)


def _check_credits(value: int) -> int:
    if value < 1:
        raise ValueError("Credits must be a positive integer")
    return value


def _check_role(value: str) -> str:
    if value not in ROLES:
        raise ValueError("Invalid role")
    return value


def _check_semester_name(value: str) -> str:
    if value not in SEMESTER_NAMES:
        raise ValueError(
            'Semester name must be "First Semester" or "Second Semester"'
        )
    return value


def _check_status(value: str) -> str:
    if value not in ENROLLMENT_STATUSES:
        raise ValueError("Invalid status")
    return value


def _check_grade(value: str) -> str:
    if len(value) > 2:
        raise ValueError("Grade must be 2 characters or less")
    if not GRADE_RE.match(value):
        raise ValueError(
            "Grade must be a letter A-F, optionally with a + (e.g., A, B+)"
        )
    return value


# secrets are taken verbatim, even inside models that strip whitespace
Password = Annotated[
    str, StringConstraints(strip_whitespace=False), AfterValidator(_check_password)
]
IdNumber = Annotated[str, AfterValidator(_check_id_number)]
Phone = Annotated[str, AfterValidator(_check_phone)]
FirstName = Annotated[str, _required("First name")]
LastName = Annotated[str, _required("Last name")]
DepartmentRef = Annotated[int, _positive("department")]
Role = Annotated[str, AfterValidator(_check_role)]

CourseName = Annotated[str, _required("Course name")]
CourseCode = Annotated[str, _required("Course code")]
Credits = Annotated[int, AfterValidator(_check_credits)]

DepartmentName = Annotated[str, _required("Department name")]
DepartmentCode = Annotated[str, _required("Department code")]

SemesterName = Annotated[str, AfterValidator(_check_semester_name)]

EnrollmentStatus = Annotated[str, AfterValidator(_check_status)]
Grade = Annotated[str, AfterValidator(_check_grade)]


def reject_nulls(value, info):
    """field_validator body for optional update fields backed by NOT NULL columns."""
    if value is None:
        raise ValueError(f"{info.field_name} cannot be null")
    return value
