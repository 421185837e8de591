from college_admin.db import Enrollment, Marks, Student


def test_create_and_fetch_student(client, staff_headers, student_headers):
    response = client.post(
        "/api/students/",
        json={
            "name": "Ada Lovelace",
            "email": "ADA@college.edu",
            "course": "Mathematics",
            "year": 2,
            "balance": 1500.0,
        },
        headers=staff_headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert created["email"] == "ada@college.edu"
    assert created["balance"] == 1500.0
    assert created["status"] == "active"

    fetched = client.get(f"/api/students/{created['id']}", headers=student_headers)
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Ada Lovelace"


def test_duplicate_student_email(client, staff_headers, make_student):
    existing = make_student()
    response = client.post(
        "/api/students/",
        json={"name": "Copy", "email": existing.email, "course": "Art", "year": 1},
        headers=staff_headers,
    )
    assert response.status_code == 409


def test_balance_is_not_editable(client, staff_headers, make_student):
    student = make_student(balance=100.0)
    response = client.put(
        f"/api/students/{student.id}",
        json={"balance": 0.0},
        headers=staff_headers,
    )
    assert response.status_code == 422


def test_student_ledger_view(client, staff_headers, make_student, make_fee):
    student = make_student(balance=500.0)
    make_fee(student, amount=500.0)

    response = client.get(f"/api/students/{student.id}/ledger", headers=staff_headers)

    assert response.status_code == 200
    assert response.json() == {
        "student_id": student.id,
        "balance": 500.0,
        "outstanding_fees": 500.0,
        "difference": 0.0,
    }


def test_student_with_fees_cannot_be_deleted(client, staff_headers, make_student, make_fee):
    student = make_student()
    make_fee(student)
    response = client.delete(f"/api/students/{student.id}", headers=staff_headers)
    assert response.status_code == 409


def test_missing_student_is_404(client, student_headers):
    assert client.get("/api/students/12345", headers=student_headers).status_code == 404


def test_list_requires_authentication(client):
    assert client.get("/api/students/").status_code == 401


def test_course_code_is_upper_cased_and_unique(client, staff_headers):
    payload = {"title": "Algorithms", "code": "cs301", "credits": 4, "department": "Computing"}
    first = client.post("/api/courses/", json=payload, headers=staff_headers)
    assert first.status_code == 201
    assert first.json()["code"] == "CS301"

    second = client.post("/api/courses/", json=payload, headers=staff_headers)
    assert second.status_code == 409


def test_create_faculty(client, staff_headers):
    response = client.post(
        "/api/faculty/",
        json={
            "name": "Dr. Grace Hopper",
            "email": "grace@college.edu",
            "department": "Computing",
            "designation": "Professor",
            "salary": 95000,
            "assigned_courses": ["CS301"],
        },
        headers=staff_headers,
    )
    assert response.status_code == 201
    assert response.json()["assigned_courses"] == ["CS301"]


def test_marks_derive_total_and_grade(client, staff_headers, make_student, make_course):
    student = make_student()
    course = make_course()

    response = client.post(
        "/api/marks/",
        json={
            "student_id": student.id,
            "course_id": course.id,
            "semester": 1,
            "internal_marks": 38,
            "external_marks": 45,
        },
        headers=staff_headers,
    )
    assert response.status_code == 201
    assert response.json()["total_marks"] == 83
    assert response.json()["grade"] == "B"

    updated = client.put(
        f"/api/marks/{response.json()['id']}",
        json={"external_marks": 55},
        headers=staff_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["total_marks"] == 93
    assert updated.json()["grade"] == "A"


def test_marks_reject_client_supplied_grade(client, staff_headers, make_student, make_course):
    response = client.post(
        "/api/marks/",
        json={
            "student_id": make_student().id,
            "course_id": make_course().id,
            "semester": 1,
            "internal_marks": 10,
            "external_marks": 10,
            "grade": "A",
        },
        headers=staff_headers,
    )
    assert response.status_code == 422


def test_attendance_allows_repeated_sessions(client, staff_headers, make_student, make_course):
    payload = {
        "student_id": make_student().id,
        "course_id": make_course().id,
        "date": "2024-03-04",
        "status": "present",
        "session": "morning",
    }
    assert client.post("/api/attendance/", json=payload, headers=staff_headers).status_code == 201
    assert client.post("/api/attendance/", json=payload, headers=staff_headers).status_code == 201


def test_enrollment_updates_course_count_and_rejects_duplicates(
    client, staff_headers, db, make_student, make_course
):
    student = make_student()
    course = make_course()
    payload = {"student_id": student.id, "course_id": course.id}

    first = client.post("/api/enrollments/", json=payload, headers=staff_headers)
    assert first.status_code == 201

    detail = client.get(f"/api/courses/{course.id}", headers=staff_headers).json()
    assert detail["enrolled_count"] == 1
    assert detail["active_enrollments"] == 1

    second = client.post("/api/enrollments/", json=payload, headers=staff_headers)
    assert second.status_code == 409
    assert db.query(Enrollment).count() == 1

    blocked = client.delete(f"/api/courses/{course.id}", headers=staff_headers)
    assert blocked.status_code == 409

    dropped = client.put(
        f"/api/enrollments/{first.json()['id']}",
        json={"status": "dropped"},
        headers=staff_headers,
    )
    assert dropped.status_code == 200
    assert client.get(f"/api/courses/{course.id}", headers=staff_headers).json()["enrolled_count"] == 0


def test_dashboard_is_staff_only_and_camel_cased(client, staff_headers, student_headers, make_student):
    make_student()

    assert client.get("/api/dashboard/stats", headers=student_headers).status_code == 403

    response = client.get("/api/dashboard/stats", headers=staff_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["overview"]["totalStudents"] == 1
    assert len(body["feeStatistics"]["monthlyTrend"]) == 6
    assert body["attendanceStats"]["overallPercentage"] == 0


def test_student_email_must_be_well_formed(client, staff_headers):
    response = client.post(
        "/api/students/",
        json={"name": "Ann", "email": "ann@college..edu", "course": "Art", "year": 1},
        headers=staff_headers,
    )
    assert response.status_code == 422


def test_blank_student_name_is_rejected(client, staff_headers, db, make_student):
    student = make_student(name="Kept Name")

    response = client.put(f"/api/students/{student.id}", json={"name": "   "}, headers=staff_headers)

    assert response.status_code == 422
    db.expire_all()
    assert db.get(Student, student.id).name == "Kept Name"


def test_null_clears_optional_student_fields_only(client, staff_headers, make_student):
    student = make_student(phone="555-0100")

    cleared = client.put(f"/api/students/{student.id}", json={"phone": None}, headers=staff_headers)
    assert cleared.status_code == 200
    assert cleared.json()["phone"] is None

    rejected = client.put(f"/api/students/{student.id}", json={"course": None}, headers=staff_headers)
    assert rejected.status_code == 422


def test_null_marks_are_rejected(client, staff_headers, db, make_student, make_course):
    record = Marks(
        student_id=make_student().id,
        course_id=make_course().id,
        semester=1,
        internal_marks=40,
        external_marks=40,
        total_marks=80,
        grade="B",
    )
    db.add(record)
    db.commit()

    response = client.put(f"/api/marks/{record.id}", json={"internal_marks": None}, headers=staff_headers)

    assert response.status_code == 422
    db.expire_all()
    assert db.get(Marks, record.id).internal_marks == 40


def test_null_enrollment_student_is_rejected(client, staff_headers, make_student, make_course):
    created = client.post(
        "/api/enrollments/",
        json={"student_id": make_student().id, "course_id": make_course().id},
        headers=staff_headers,
    )

    response = client.put(
        f"/api/enrollments/{created.json()['id']}",
        json={"student_id": None},
        headers=staff_headers,
    )
    assert response.status_code == 422


def test_course_syllabus_can_be_cleared(client, staff_headers, make_course):
    course = make_course(syllabus="Week 1: vectors")

    response = client.put(f"/api/courses/{course.id}", json={"syllabus": None}, headers=staff_headers)

    assert response.status_code == 200
    assert response.json()["syllabus"] is None
