from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from university.schemas.fields import EnrollmentStatus, Grade, reject_nulls


class EnrollmentCreate(BaseModel):
    user_id: int
    course_id: int
    enrollment_date: date


class EnrollmentUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    status: EnrollmentStatus | None = None
    # explicit null clears the grade
    grade: Grade | None = None

    @field_validator("status")
    @classmethod
    def not_null(cls, value, info: ValidationInfo):
        return reject_nulls(value, info)


class EnrollmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    enrollment_date: date
    status: str
    grade: str | None = None
    created_at: datetime


class EnrollmentListRow(EnrollmentRead):
    course_name: str
    course_code: str
    student_name: str


class CourseRosterRow(BaseModel):
    enrollment_id: int
    user_id: int
    first_name: str
    last_name: str
    email: str
    status: str
    grade: str | None = None
