from sqlalchemy.orm import Session

from university.models.course import Course
from university.models.enrollment import Enrollment
from university.models.semester import Semester
from university.schemas.token import Claim

GRADE_POINTS = {
    "A+": 4.0,
    "A": 4.0,
    "B+": 3.5,
    "B": 3.0,
    "C+": 2.5,
    "C": 2.0,
    "D+": 1.5,
    "D": 1.0,
    "F": 0.0,
}


def grade_points(grade: str) -> float:
    # E, E+ and F+ carry no points
    return GRADE_POINTS.get(grade, 0.0)


def student_grade_report(db: Session, claim: Claim) -> dict[str, dict]:
    """
    Completed, graded courses of the calling student grouped by semester.

    Keys are ``semester<id>`` in semester order; each value carries the
    semester name, its courses, the credits completed and the
    credit-weighted GPA rounded to one decimal.
    """
    rows = (
        db.query(Semester.id, Semester.name, Course.code, Course.name, Course.credits, Enrollment.grade)
        .select_from(Enrollment)
        .join(Course, Enrollment.course_id == Course.id)
        .join(Semester, Course.semester_id == Semester.id)
        .filter(
            Enrollment.user_id == claim.user_id,
            Enrollment.status == "completed",
            Enrollment.grade.is_not(None),
        )
        .order_by(Semester.id, Course.code)
        .all()
    )

    report: dict[str, dict] = {}
    weighted: dict[str, float] = {}
    for semester_id, semester_name, code, name, credits, grade in rows:
        key = f"semester{semester_id}"
        if key not in report:
            report[key] = {
                "name": semester_name,
                "courses": [],
                "creditsCompleted": 0,
                "gpa": 0.0,
            }
            weighted[key] = 0.0

        entry = report[key]
        entry["courses"].append(
            {"code": code, "name": name, "credits": credits, "grade": grade}
        )
        entry["creditsCompleted"] += credits
        weighted[key] += grade_points(grade) * credits

    for key, entry in report.items():
        credits = entry["creditsCompleted"]
        entry["gpa"] = round(weighted[key] / credits, 1) if credits else 0.0

    return report
