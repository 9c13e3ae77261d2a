from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CourseAssignmentCreate(BaseModel):
    instructor_id: int
    course_id: int


class CourseAssignmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    instructor_id: int
    course_id: int
    course_code: str
    course_name: str
    first_name: str
    last_name: str
    created_at: datetime
