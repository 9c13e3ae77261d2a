import pytest

from university.services.reports import grade_points


def test_submit_and_read_grade(client, instructor_headers, seed):
    url = f"/api/grades/enrollment/{seed['enrollment']}"
    r = client.get(url, headers=instructor_headers)
    assert r.status_code == 200
    assert r.json() == {}

    r = client.post(
        "/api/grades",
        json={"enrollment_id": seed["enrollment"], "grade": "B+"},
        headers=instructor_headers,
    )
    assert r.status_code == 200, r.text
    assert r.json() == {
        "enrollment_id": seed["enrollment"],
        "grade": "B+",
        "message": "Grade submitted successfully",
    }

    assert client.get(url, headers=instructor_headers).json() == {"grade": "B+"}


def test_submit_replaces_previous_grade(client, instructor_headers, seed):
    for grade in ("C", "A"):
        r = client.post(
            "/api/grades",
            json={"enrollmentId": seed["enrollment"], "grade": grade},
            headers=instructor_headers,
        )
        assert r.status_code == 200
    r = client.get(f"/api/grades/enrollment/{seed['enrollment']}", headers=instructor_headers)
    assert r.json() == {"grade": "A"}


def test_grade_submission_access(
    client, other_instructor_headers, student_headers, admin_headers, instructor_headers, seed
):
    payload = {"enrollment_id": seed["enrollment"], "grade": "A"}

    r = client.post("/api/grades", json=payload, headers=other_instructor_headers)
    assert r.status_code == 403
    assert r.json() == {"error": "Instructor is not assigned to this course"}

    assert client.post("/api/grades", json=payload, headers=student_headers).status_code == 403
    assert client.post("/api/grades", json=payload, headers=admin_headers).status_code == 403

    r = client.post(
        "/api/grades", json={"enrollment_id": 99999, "grade": "A"}, headers=instructor_headers
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Enrollment not found"}

    r = client.get(
        f"/api/grades/enrollment/{seed['enrollment']}", headers=other_instructor_headers
    )
    assert r.status_code == 403


def test_invalid_grade(client, instructor_headers, seed):
    r = client.post(
        "/api/grades",
        json={"enrollment_id": seed["enrollment"], "grade": "Z"},
        headers=instructor_headers,
    )
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "grade"


def test_report_is_empty_until_courses_are_completed(client, student_headers):
    r = client.get("/student/grades", headers=student_headers)
    assert r.status_code == 200
    assert r.json() == {}


def test_report_groups_by_semester_with_weighted_gpa(client, admin_headers, student_headers, seed):
    r = client.post(
        "/api/enrollments",
        json={
            "user_id": seed["student"],
            "course_id": seed["other_course"],
            "enrollment_date": "2024-01-20",
        },
        headers=admin_headers,
    )
    other_enrollment = r.json()["enrollment_id"]

    client.put(
        f"/api/enrollments/{seed['enrollment']}",
        json={"status": "completed", "grade": "A"},
        headers=admin_headers,
    )
    client.put(
        f"/api/enrollments/{other_enrollment}",
        json={"status": "completed", "grade": "B"},
        headers=admin_headers,
    )

    r = client.get("/student/grades", headers=student_headers)
    assert r.status_code == 200
    report = r.json()
    semester = report[f"semester{seed['semester']}"]
    assert semester["name"] == "First Semester"
    assert [c["code"] for c in semester["courses"]] == ["CS101", "CS201"]
    assert semester["creditsCompleted"] == 7
    # (4.0 * 3 + 3.0 * 4) / 7
    assert semester["gpa"] == 3.4


def test_report_skips_ungraded_and_unfinished(client, admin_headers, student_headers, seed):
    client.put(
        f"/api/enrollments/{seed['enrollment']}",
        json={"status": "completed"},
        headers=admin_headers,
    )
    assert client.get("/student/grades", headers=student_headers).json() == {}


def test_report_is_for_students_only(client, instructor_headers):
    r = client.get("/student/grades", headers=instructor_headers)
    assert r.status_code == 403
    assert r.json() == {"error": "Access restricted to students"}


@pytest.mark.parametrize(
    "grade, points",
    [("A+", 4.0), ("A", 4.0), ("B+", 3.5), ("C", 2.0), ("D+", 1.5), ("E", 0.0), ("F+", 0.0)],
)
def test_grade_points(grade, points):
    assert grade_points(grade) == points
