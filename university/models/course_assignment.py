from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import relationship

from university.db.base_class import Base


class CourseAssignment(Base):
    __tablename__ = "course_assignments"

    id = Column(Integer, primary_key=True, index=True)
    instructor_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id = Column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "instructor_id", "course_id", name="uq_course_assignments_instructor_course"
        ),
    )

    instructor = relationship("User", back_populates="course_assignments")
    course = relationship("Course", back_populates="course_assignments")

    @property
    def course_code(self) -> str:
        return self.course.code

    @property
    def course_name(self) -> str:
        return self.course.name

    @property
    def first_name(self) -> str:
        return self.instructor.first_name

    @property
    def last_name(self) -> str:
        return self.instructor.last_name
