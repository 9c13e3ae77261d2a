from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from university.schemas.fields import SemesterName, reject_nulls

END_BEFORE_START = "End date must be after start date"


def check_date_order(start_date: date | None, end_date: date | None) -> None:
    if start_date is not None and end_date is not None and end_date <= start_date:
        raise ValueError(END_BEFORE_START)


class SemesterCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: SemesterName
    start_date: date
    end_date: date

    @field_validator("end_date")
    @classmethod
    def end_after_start(cls, end_date: date, info: ValidationInfo) -> date:
        check_date_order(info.data.get("start_date"), end_date)
        return end_date


class SemesterUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: SemesterName | None = None
    start_date: date | None = None
    end_date: date | None = None

    @field_validator("name", "start_date", "end_date")
    @classmethod
    def not_null(cls, value, info: ValidationInfo):
        return reject_nulls(value, info)

    @field_validator("end_date")
    @classmethod
    def end_after_start(cls, end_date: date, info: ValidationInfo) -> date:
        check_date_order(info.data.get("start_date"), end_date)
        return end_date


class SemesterRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    start_date: date
    end_date: date
    created_at: datetime
