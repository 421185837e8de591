import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from college_admin.api.deps import get_db
from college_admin.core.security import Actor, create_access_token, get_password_hash
from college_admin.db import Base, Course, Fee, Student, User
from college_admin.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(db, email, role):
    user = User(
        email=email,
        hashed_password=get_password_hash("secret123"),
        full_name=email.split("@")[0],
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    return _make_user(db, "admin@college.edu", "admin")


@pytest.fixture
def student_user(db):
    return _make_user(db, "learner@college.edu", "student")


@pytest.fixture
def actor(admin_user):
    return Actor(id=admin_user.id, role=admin_user.role, email=admin_user.email)


@pytest.fixture
def staff_headers(admin_user):
    token = create_access_token({"sub": admin_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(student_user):
    token = create_access_token({"sub": student_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_student(db):
    counter = {"n": 0}

    def _make(**kwargs):
        counter["n"] += 1
        values = {
            "name": f"Student {counter['n']}",
            "email": f"student{counter['n']}@college.edu",
            "course": "Computer Science",
            "year": 1,
            "balance": 0.0,
            "status": "active",
        }
        values.update(kwargs)
        student = Student(**values)
        db.add(student)
        db.commit()
        db.refresh(student)
        return student

    return _make


@pytest.fixture
def make_course(db):
    counter = {"n": 0}

    def _make(**kwargs):
        counter["n"] += 1
        values = {
            "title": f"Course {counter['n']}",
            "code": f"CS{100 + counter['n']}",
            "credits": 4,
            "department": "Computing",
        }
        values.update(kwargs)
        course = Course(**values)
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make


@pytest.fixture
def make_fee(db):
    def _make(student, **kwargs):
        values = {
            "student_id": student.id if student is not None else None,
            "amount": 500.0,
            "due_date": date.today() + timedelta(days=30),
            "type": "tuition",
            "status": "pending",
        }
        values.update(kwargs)
        fee = Fee(**values)
        db.add(fee)
        db.commit()
        db.refresh(fee)
        return fee

    return _make
