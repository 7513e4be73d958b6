"""
Shared test fixtures.

Provides: in-memory SQLite engine, DB session, TestClient with ``get_db``
overridden, users with bearer tokens, a course factory.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import academy.models.db  # noqa: F401
from academy.app import app
from academy.database import Base, get_db
from academy.models.db import Course, CourseContent, Enrollment, UserRole
from academy.services.auth_service import create_user, start_session


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
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


def _make_user(db, username: str, role: UserRole = UserRole.USER):
    user = create_user(db, username, f"{username}@example.com", "secret123", role=role)
    token = start_session(db, user)
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def instructor(db):
    return _make_user(db, "instructor", UserRole.INSTRUCTOR)


@pytest.fixture
def student(db):
    return _make_user(db, "student")


@pytest.fixture
def outsider(db):
    return _make_user(db, "outsider")


@pytest.fixture
def admin(db):
    return _make_user(db, "admin", UserRole.ADMIN)


@pytest.fixture
def course(db, instructor):
    user, _ = instructor
    course = Course(title="Intro to Python", description="Programming", instructor_id=user.id)
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@pytest.fixture
def enrolled_student(db, course, student):
    user, _ = student
    db.add(Enrollment(user_id=user.id, course_id=course.id))
    db.commit()
    return student


@pytest.fixture
def make_node(db, course):
    """Insert a content node directly, bypassing the API."""

    def _make(title: str, order: int, parent=None, type: str = "TEXT", content: str = ""):
        node = CourseContent(
            course_id=course.id,
            parent_id=parent.id if parent is not None else None,
            title=title,
            type=type,
            content=content,
            order=order,
        )
        db.add(node)
        db.commit()
        db.refresh(node)
        return node

    return _make
