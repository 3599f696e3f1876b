"""End-to-end tests through the HTTP surface and its response envelope."""


def _create(client, headers, payload):
    response = client.post("/students", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestStudentsEndpoints:

    def test_create_returns_201_envelope(self, client, auth_headers):
        response = client.post(
            "/students",
            json={"name": "Ana Lee", "email": "ana@x.com", "subject": "Math", "grade": 95},
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Student created successfully"
        assert "error" not in body

        student = body["data"]
        assert set(student) == {"id", "name", "email", "subject", "grade", "created_at"}
        assert student["email"] == "ana@x.com"

    def test_create_validation_lists_every_field(self, client, auth_headers):
        response = client.post(
            "/students",
            json={"name": "A", "email": "nope", "subject": "Art", "grade": 250},
            headers=auth_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert {e["field"] for e in body["data"]} == {"name", "email", "subject", "grade"}
        assert {e["field"]: e["message"] for e in body["data"]} == {
            "name": "Name must be at least 2 characters",
            "email": "Valid email is required",
            "subject": "Subject must be one of: Math, Science, English, History",
            "grade": "Grade must be between 0 and 100",
        }

    def test_create_rejects_boolean_grade(self, client, auth_headers, make_student):
        response = client.post("/students", json=make_student(grade=True), headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["data"] == [{"field": "grade", "message": "Grade must be between 0 and 100"}]
        assert client.get("/students", headers=auth_headers).json()["data"] == []

    def test_create_duplicate_email_returns_409(self, client, auth_headers, make_student):
        _create(client, auth_headers, make_student(email="ana@x.com"))

        response = client.post("/students", json=make_student(email="ana@x.com"), headers=auth_headers)
        assert response.status_code == 409
        assert response.json() == {"success": False, "error": "Email already exists"}

    def test_list_with_subject_filter(self, client, auth_headers, make_student):
        _create(client, auth_headers, make_student(subject="Math"))
        english = _create(client, auth_headers, make_student(subject="English"))

        response = client.get("/students", params={"subject": "English"}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == [english]
        assert body["message"] == "Retrieved 1 students"

    def test_list_rejects_unknown_subject(self, client, auth_headers):
        response = client.get("/students", params={"subject": "Art"}, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert body["data"][0]["field"] == "subject"

    def test_partial_update(self, client, auth_headers, make_student):
        created = _create(client, auth_headers, make_student(grade=60))

        response = client.put(f"/students/{created['id']}", json={"grade": 75}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Student updated successfully"
        assert body["data"] == dict(created, grade=75)

    def test_update_empty_body_returns_400(self, client, auth_headers, make_student):
        created = _create(client, auth_headers, make_student())

        response = client.put(f"/students/{created['id']}", json={}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_update_unknown_id_returns_404(self, client, auth_headers):
        response = client.put("/students/9999", json={"grade": 10}, headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Student not found"}

    def test_update_non_numeric_id_returns_400(self, client, auth_headers):
        response = client.put("/students/abc", json={"grade": 10}, headers=auth_headers)
        assert response.status_code == 400

    def test_update_email_collision_returns_409(self, client, auth_headers, make_student):
        _create(client, auth_headers, make_student(email="ana@x.com"))
        other = _create(client, auth_headers, make_student(email="bo@x.com"))

        response = client.put(f"/students/{other['id']}", json={"email": "ana@x.com"}, headers=auth_headers)
        assert response.status_code == 409

    def test_delete(self, client, auth_headers, make_student):
        created = _create(client, auth_headers, make_student())

        response = client.delete(f"/students/{created['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Student deleted successfully"}

        again = client.delete(f"/students/{created['id']}", headers=auth_headers)
        assert again.status_code == 404


class TestAnalyticsEndpoint:

    def test_empty(self, client, auth_headers):
        response = client.get("/analytics", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"totalStudents": 0, "averageGradeBySubject": {}, "recentAdditions": []},
            "message": "Analytics retrieved successfully",
        }

    def test_populated(self, client, auth_headers):
        _create(client, auth_headers, {"name": "Ana Lee", "email": "ana@x.com", "subject": "Math", "grade": 95})
        bo = _create(client, auth_headers, {"name": "Bo Kim", "email": "bo@x.com", "subject": "Math", "grade": 85})

        data = client.get("/analytics", headers=auth_headers).json()["data"]

        assert data["totalStudents"] == 2
        assert data["averageGradeBySubject"] == {"Math": 90.0}
        assert data["recentAdditions"][0] == bo


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected"}

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"

    def test_unknown_route_uses_envelope(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found"}
