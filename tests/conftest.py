import os

TEST_DB_FILE = "test_university.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# config is read at import time, so these must be set before the app is imported
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-only-secret-key-with-enough-bytes-for-hs256"

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from university.core.deps import get_db  # noqa: E402
from university.core.security import hash_password  # noqa: E402
from university.db.base import Base  # noqa: E402
from university.main import app  # noqa: E402
from university.models.course import Course  # noqa: E402
from university.models.course_assignment import CourseAssignment  # noqa: E402
from university.models.department import Department  # noqa: E402
from university.models.enrollment import Enrollment  # noqa: E402
from university.models.semester import Semester  # noqa: E402
from university.models.user import User  # noqa: E402

PASSWORD = "password123"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def login(client: TestClient, email: str, password: str = PASSWORD) -> str:
    r = client.post("/api/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed():
    """
    Seed a clean dataset for each test and return the ids.

    One department, one semester and two courses (CS101 taught by
    ``instructor``, CS201 unassigned), an admin, two instructors and two
    students. ``student`` is enrolled in CS101.
    """
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(Enrollment).delete()
        db.query(CourseAssignment).delete()
        db.query(Course).delete()
        db.query(Semester).delete()
        db.query(User).delete()
        db.query(Department).delete()
        db.commit()

        department = Department(name="Computer Science", code="CS")
        semester = Semester(
            name="First Semester",
            start_date=date(2024, 1, 15),
            end_date=date(2024, 5, 30),
        )
        db.add_all([department, semester])
        db.commit()

        hashed = hash_password(PASSWORD)
        admin = User(
            email="admin@uni.edu",
            hashed_password=hashed,
            role="admin",
            first_name="Ada",
            last_name="Admin",
        )
        instructor = User(
            email="instructor@uni.edu",
            hashed_password=hashed,
            role="instructor",
            first_name="Ian",
            last_name="Teach",
            department_id=department.id,
        )
        other_instructor = User(
            email="instructor2@uni.edu",
            hashed_password=hashed,
            role="instructor",
            first_name="Irene",
            last_name="Other",
            department_id=department.id,
        )
        student = User(
            email="student@uni.edu",
            hashed_password=hashed,
            role="student",
            id_number="ETS0001/24",
            first_name="Sam",
            last_name="Student",
            department_id=department.id,
        )
        other_student = User(
            email="student2@uni.edu",
            hashed_password=hashed,
            role="student",
            id_number="ETS0002/24",
            first_name="Sara",
            last_name="Second",
        )
        db.add_all([admin, instructor, other_instructor, student, other_student])
        db.commit()

        course = Course(
            name="Intro to Programming",
            code="CS101",
            credits=3,
            department_id=department.id,
            semester_id=semester.id,
        )
        other_course = Course(
            name="Data Structures",
            code="CS201",
            credits=4,
            department_id=department.id,
            semester_id=semester.id,
        )
        db.add_all([course, other_course])
        db.commit()

        assignment = CourseAssignment(instructor_id=instructor.id, course_id=course.id)
        enrollment = Enrollment(
            user_id=student.id,
            course_id=course.id,
            enrollment_date=date(2024, 1, 20),
        )
        db.add_all([assignment, enrollment])
        db.commit()

        yield {
            "department": department.id,
            "semester": semester.id,
            "admin": admin.id,
            "instructor": instructor.id,
            "other_instructor": other_instructor.id,
            "student": student.id,
            "other_student": other_student.id,
            "course": course.id,
            "other_course": other_course.id,
            "assignment": assignment.id,
            "enrollment": enrollment.id,
        }
    finally:
        db.close()


@pytest.fixture()
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    """Test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def auth(client):
    """``auth(email)`` -> bearer headers for a seeded (or newly registered) account."""
    tokens = {}

    def _auth(email: str, password: str = PASSWORD) -> dict:
        if email not in tokens:
            tokens[email] = login(client, email, password)
        return auth_header(tokens[email])

    return _auth


@pytest.fixture()
def admin_headers(auth):
    return auth("admin@uni.edu")


@pytest.fixture()
def instructor_headers(auth):
    return auth("instructor@uni.edu")


@pytest.fixture()
def other_instructor_headers(auth):
    return auth("instructor2@uni.edu")


@pytest.fixture()
def student_headers(auth):
    return auth("student@uni.edu")


@pytest.fixture()
def other_student_headers(auth):
    return auth("student2@uni.edu")
