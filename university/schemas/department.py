from datetime import datetime

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from university.schemas.fields import DepartmentCode, DepartmentName, reject_nulls


class DepartmentCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: DepartmentName
    code: DepartmentCode


class DepartmentUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: DepartmentName | None = None
    code: DepartmentCode | None = None

    @field_validator("name", "code")
    @classmethod
    def not_null(cls, value, info: ValidationInfo):
        return reject_nulls(value, info)


class DepartmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    created_at: datetime
