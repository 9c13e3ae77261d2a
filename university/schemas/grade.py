from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from university.schemas.fields import Grade


class GradeSubmit(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    enrollment_id: int = Field(
        validation_alias=AliasChoices("enrollment_id", "enrollmentId")
    )
    grade: Grade


class ReportCourse(BaseModel):
    code: str
    name: str
    credits: int
    grade: str


class SemesterReport(BaseModel):
    name: str
    courses: list[ReportCourse]
    creditsCompleted: int
    gpa: float
