# Import every model so Base.metadata is complete for create_all and alembic.
from university.db.base_class import Base  # noqa: F401
from university.models.course import Course  # noqa: F401
from university.models.course_assignment import CourseAssignment  # noqa: F401
from university.models.department import Department  # noqa: F401
from university.models.enrollment import Enrollment  # noqa: F401
from university.models.semester import Semester  # noqa: F401
from university.models.user import User  # noqa: F401
