from university.models.enrollment import Enrollment


def test_public_user_listing_hides_passwords(client):
    r = client.get("/api/users")
    assert r.status_code == 200
    users = r.json()
    assert len(users) == 5
    assert all("hashed_password" not in u and "password" not in u for u in users)


def test_managed_listing_is_admin_only_and_skips_admins(client, admin_headers, student_headers):
    assert client.get("/api/users/list", headers=student_headers).status_code == 403

    r = client.get("/api/users/list", headers=admin_headers)
    assert r.status_code == 200
    roles = {u["role"] for u in r.json()}
    assert roles == {"student", "instructor"}


def test_me(client, student_headers):
    r = client.get("/api/users/me", headers=student_headers)
    assert r.status_code == 200
    assert r.json()["email"] == "student@uni.edu"
    assert r.json()["id_number"] == "ETS0001/24"


def test_update_me_changes_profile_and_password(client, student_headers):
    r = client.put(
        "/api/users/me",
        json={"first_name": "Samuel", "password": "newpass1"},
        headers=student_headers,
    )
    assert r.status_code == 200, r.text
    assert r.json()["first_name"] == "Samuel"

    r = client.post("/api/login", json={"email": "student@uni.edu", "password": "newpass1"})
    assert r.status_code == 200


def test_update_me_cannot_change_role(client, student_headers):
    r = client.put("/api/users/me", json={"role": "admin"}, headers=student_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "No fields to update"}
    assert client.get("/api/users/me", headers=student_headers).json()["role"] == "student"


def test_read_user_as_admin_and_missing(client, admin_headers, seed):
    r = client.get(f"/api/users/{seed['student']}", headers=admin_headers)
    assert r.status_code == 200
    r = client.get("/api/users/99999", headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}


def test_non_admin_cannot_probe_other_ids(client, student_headers):
    # ownership is checked before existence
    r = client.get("/api/users/99999", headers=student_headers)
    assert r.status_code == 403


def test_admin_update_user(client, admin_headers, seed):
    r = client.put(
        f"/api/users/{seed['other_student']}",
        json={"email": "sara@uni.edu", "phone": "+251 911 234567"},
        headers=admin_headers,
    )
    assert r.status_code == 200, r.text
    assert r.json()["email"] == "sara@uni.edu"
    assert r.json()["phone"] == "+251 911 234567"


def test_admin_update_user_conflicts(client, admin_headers, seed):
    url = f"/api/users/{seed['other_student']}"

    r = client.put(url, json={"email": "student@uni.edu"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Email already exists"}

    r = client.put(url, json={"department_id": 9999}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid department ID"}

    r = client.put(url, json={}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "No fields to update"}

    r = client.put(url, json={"first_name": None}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["errors"] == [{"field": "first_name", "msg": "first_name cannot be null"}]


def test_demoting_instructor_to_student_needs_id_number(client, admin_headers, seed):
    url = f"/api/users/{seed['other_instructor']}"
    r = client.put(url, json={"role": "student"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "id_number"

    r = client.put(url, json={"role": "student", "id_number": "ETS0099/24"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["role"] == "student"


def test_update_user_requires_admin(client, student_headers, seed):
    r = client.put(
        f"/api/users/{seed['student']}", json={"first_name": "X"}, headers=student_headers
    )
    assert r.status_code == 403


def test_update_missing_user(client, admin_headers):
    r = client.put("/api/users/99999", json={"first_name": "X"}, headers=admin_headers)
    assert r.status_code == 404


def test_delete_user_removes_enrollments(client, admin_headers, student_headers, seed, db_session):
    assert client.delete(f"/api/users/{seed['student']}", headers=student_headers).status_code == 403

    r = client.delete(f"/api/users/{seed['student']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "User deleted successfully"}

    assert client.get(f"/api/users/{seed['student']}", headers=admin_headers).status_code == 404
    assert db_session.get(Enrollment, seed["enrollment"]) is None


def test_leaving_the_student_role_drops_the_id_number(client, admin_headers, seed):
    r = client.put(
        f"/api/users/{seed['other_student']}", json={"role": "instructor"}, headers=admin_headers
    )
    assert r.status_code == 200, r.text
    assert r.json()["role"] == "instructor"
    assert r.json()["id_number"] is None


def test_staff_cannot_be_given_an_id_number(client, admin_headers, seed):
    r = client.put(
        f"/api/users/{seed['instructor']}", json={"id_number": "ETS0098/24"}, headers=admin_headers
    )
    assert r.status_code == 400
    assert r.json()["errors"] == [
        {"field": "id_number", "msg": "ID number is only allowed for students"}
    ]


def test_self_update_keeps_password_verbatim(client, student_headers):
    r = client.put("/api/users/me", json={"password": " pass word "}, headers=student_headers)
    assert r.status_code == 200
    r = client.post("/api/login", json={"email": "student@uni.edu", "password": " pass word "})
    assert r.status_code == 200
