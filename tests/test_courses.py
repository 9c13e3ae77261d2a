def course_payload(seed, **overrides):
    payload = {
        "name": "Operating Systems",
        "code": "CS301",
        "credits": 3,
        "department_id": seed["department"],
        "semester_id": seed["semester"],
    }
    payload.update(overrides)
    return payload


def test_course_listing_carries_department_name(client):
    r = client.get("/api/courses")
    assert r.status_code == 200
    rows = r.json()
    assert [c["code"] for c in rows] == ["CS101", "CS201"]
    assert all(c["department_name"] == "Computer Science" for c in rows)


def test_get_missing_course(client):
    r = client.get("/api/courses/99999")
    assert r.status_code == 404
    assert r.json() == {"error": "Course not found"}


def test_create_course(client, admin_headers, seed):
    r = client.post("/api/courses", json=course_payload(seed), headers=admin_headers)
    assert r.status_code == 201, r.text
    course = client.get(f"/api/courses/{r.json()['course_id']}").json()
    assert course["code"] == "CS301"
    assert course["semester_id"] == seed["semester"]


def test_create_course_requires_admin(client, instructor_headers, seed):
    r = client.post("/api/courses", json=course_payload(seed), headers=instructor_headers)
    assert r.status_code == 403


def test_create_course_rejections(client, admin_headers, seed):
    r = client.post("/api/courses", json=course_payload(seed, code="CS101"), headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Course code already exists"}

    r = client.post("/api/courses", json=course_payload(seed, credits=0), headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["errors"] == [
        {"field": "credits", "msg": "Credits must be a positive integer"}
    ]

    r = client.post(
        "/api/courses", json=course_payload(seed, semester_id=99999), headers=admin_headers
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid semester ID"}

    r = client.post(
        "/api/courses", json=course_payload(seed, department_id=99999), headers=admin_headers
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid department ID"}


def test_update_course(client, admin_headers, seed):
    url = f"/api/courses/{seed['course']}"
    r = client.put(url, json={"credits": 5}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["credits"] == 5
    assert r.json()["code"] == "CS101"

    r = client.put(url, json={"code": "CS201"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Course code already exists"}

    r = client.put(url, json={}, headers=admin_headers)
    assert r.status_code == 400

    r = client.put("/api/courses/99999", json={"credits": 2}, headers=admin_headers)
    assert r.status_code == 404


def test_delete_course_takes_enrollments_and_assignments(client, admin_headers, seed):
    r = client.delete(f"/api/courses/{seed['course']}", headers=admin_headers)
    assert r.status_code == 200

    assert client.get(f"/api/courses/{seed['course']}").status_code == 404
    r = client.get(f"/api/enrollments/{seed['enrollment']}", headers=admin_headers)
    assert r.status_code == 404
    assignments = client.get("/api/course-assignments", headers=admin_headers).json()
    assert assignments == []
