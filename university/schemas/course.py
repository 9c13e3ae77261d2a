from datetime import datetime

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from university.schemas.fields import CourseCode, CourseName, Credits, reject_nulls


class CourseCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: CourseName
    code: CourseCode
    credits: Credits
    department_id: int | None = None
    semester_id: int | None = None


class CourseUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: CourseName | None = None
    code: CourseCode | None = None
    credits: Credits | None = None
    department_id: int | None = None
    semester_id: int | None = None

    @field_validator("name", "code", "credits")
    @classmethod
    def not_null(cls, value, info: ValidationInfo):
        return reject_nulls(value, info)


class CourseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    credits: int
    department_id: int | None = None
    department_name: str | None = None
    semester_id: int | None = None
    created_at: datetime
