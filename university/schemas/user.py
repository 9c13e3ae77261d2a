from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, ValidationInfo, field_validator

from university.schemas.fields import (
    DepartmentRef,
    FirstName,
    IdNumber,
    LastName,
    Password,
    Phone,
    Role,
    reject_nulls,
)


class _Registration(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: Password
    first_name: FirstName
    last_name: LastName


class StudentRegister(_Registration):
    id_number: IdNumber
    phone: Phone | None = None
    department_id: DepartmentRef | None = None


class InstructorRegister(_Registration):
    phone: Phone | None = None
    department_id: DepartmentRef


class AdminRegister(_Registration):
    pass


class UserUpdate(BaseModel):
    """Admin edit: any field, only the supplied ones are applied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr | None = None
    password: Password | None = None
    role: Role | None = None
    id_number: IdNumber | None = None
    first_name: FirstName | None = None
    last_name: LastName | None = None
    phone: Phone | None = None
    department_id: DepartmentRef | None = None

    @field_validator("email", "password", "role", "first_name", "last_name")
    @classmethod
    def not_null(cls, value, info: ValidationInfo):
        return reject_nulls(value, info)


class UserSelfUpdate(BaseModel):
    """Profile fields a user may change on their own account."""

    model_config = ConfigDict(str_strip_whitespace=True)

    password: Password | None = None
    first_name: FirstName | None = None
    last_name: LastName | None = None
    phone: Phone | None = None

    @field_validator("password", "first_name", "last_name")
    @classmethod
    def not_null(cls, value, info: ValidationInfo):
        return reject_nulls(value, info)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: str
    id_number: str | None = None
    first_name: str
    last_name: str
    phone: str | None = None
    department_id: int | None = None
    created_at: datetime


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    id_number: str | None = None
    first_name: str
    last_name: str
    role: str
