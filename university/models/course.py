from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from university.db.base_class import Base


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(
        String(32), unique=True, index=True, nullable=False
    )
    department_id: Mapped[int | None] = mapped_column(
        ForeignKey("departments.id", ondelete="SET NULL"), index=True
    )
    semester_id: Mapped[int | None] = mapped_column(
        ForeignKey("semesters.id"), index=True
    )
    credits: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    department = relationship("Department", back_populates="courses")
    semester = relationship("Semester", back_populates="courses")

    enrollments = relationship(
        "Enrollment", back_populates="course", cascade="all, delete-orphan"
    )

    course_assignments = relationship(
        "CourseAssignment", back_populates="course", cascade="all, delete-orphan"
    )

    @property
    def department_name(self) -> str | None:
        return self.department.name if self.department else None
