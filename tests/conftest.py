# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from campus_commons.core.security import create_access_token  # noqa: E402
from campus_commons.db.session import Base, enable_sqlite_savepoints  # noqa: E402
from campus_commons.db.session import get_db as app_get_session  # noqa: E402
from campus_commons.main import app as fastapi_app  # noqa: E402
from campus_commons.models import (  # noqa: E402
    Course,
    CourseReview,
    Resource,
    ResourceComment,
    ResourceCourseLink,
    ReviewComment,
    User,
)
from campus_commons.models.enums import UserRole  # noqa: E402

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits land in a SAVEPOINT of an outer, rolled-back transaction."""
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with unique emails."""

    def _make_user(nickname: str | None = None, role: UserRole = UserRole.USER) -> User:
        number = next(_USER_COUNTER)
        user = User(
            email=f"user{number}@campus.test",
            nickname=nickname or f"user{number}",
            student_id=f"S{number:06d}",
            role=role,
        )
        db_session.add(user)
        db_session.flush()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """The user filing reports in most tests."""
    return make_user("reporter")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("second reporter")


@pytest.fixture()
def owner(make_user: Callable[..., User]) -> User:
    """Author of the content fixtures."""
    return make_user("owner")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("admin", role=UserRole.ADMIN)


def _bearer(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a helper building authorization headers for any user."""
    return _bearer


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    return _bearer(other_user)


@pytest.fixture()
def owner_auth_token(owner: User) -> dict[str, str]:
    return _bearer(owner)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    return _bearer(admin_user)


@pytest.fixture()
def course(db_session: Session) -> Course:
    course = Course(code="CS101", name="Introduction to Programming")
    db_session.add(course)
    db_session.flush()
    return course


@pytest.fixture()
def resource(db_session: Session, owner: User, course: Course) -> Resource:
    """A public resource linked to ``course``."""
    resource = Resource(
        uploader_id=owner.id,
        type="link",
        title="Lecture notes week 1",
        description="Scanned notes",
        url_or_path="https://notes.campus.test/week1",
        visibility="public",
        tags=["notes"],
    )
    db_session.add(resource)
    db_session.flush()
    db_session.add(ResourceCourseLink(resource_id=resource.id, course_id=course.id))
    db_session.flush()
    db_session.refresh(resource)
    return resource


@pytest.fixture()
def review(db_session: Session, owner: User, course: Course) -> CourseReview:
    review = CourseReview(
        author_id=owner.id,
        course_id=course.id,
        rating_overall=8,
        title="Solid intro course",
        content="Clear lectures, heavy homework.",
    )
    db_session.add(review)
    db_session.flush()
    db_session.refresh(review)
    return review


@pytest.fixture()
def resource_comment(db_session: Session, owner: User, resource: Resource) -> ResourceComment:
    comment = ResourceComment(resource_id=resource.id, user_id=owner.id, content="Thanks!")
    db_session.add(comment)
    db_session.flush()
    db_session.refresh(comment)
    return comment


@pytest.fixture()
def review_comment(db_session: Session, owner: User, review: CourseReview) -> ReviewComment:
    comment = ReviewComment(review_id=review.id, user_id=owner.id, content="Agreed.")
    db_session.add(comment)
    db_session.flush()
    db_session.refresh(comment)
    return comment
