"""Shared fixtures: in-memory database, identities, a sample quiz and API clients."""
import os

# Keep the app's module-level engine off disk while tests import it
os.environ.setdefault("DATABASE_URL", "sqlite://")

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quizapp.core.config import settings
from quizapp.core.security import Identity
from quizapp.db.base import Base
from quizapp.db.session import get_db
from quizapp.main import app
from quizapp.schemas.quiz import QuizCreate
from quizapp.services import quiz_service

TEST_DATABASE_URL = "sqlite://"

# mc (key 1, 5 pts), true-false (key 0, 2 pts), essay (max 10 pts)
SAMPLE_QUESTIONS = [
    {
        "type": "multiple-choice",
        "question": "Which planet is known as the red planet?",
        "options": ["Venus", "Mars", "Jupiter", "Saturn"],
        "correct_answer": 1,
        "points": 5,
    },
    {
        "type": "true-false",
        "question": "Water boils at 100 degrees Celsius at sea level.",
        "correct_answer": 0,
        "points": 2,
    },
    {
        "type": "essay",
        "question": "Explain how the water cycle works.",
        "points": 10,
    },
]


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def teacher():
    return Identity(subject_id="teacher-1", role="teacher")


@pytest.fixture
def other_teacher():
    return Identity(subject_id="teacher-2", role="teacher")


@pytest.fixture
def student():
    return Identity(subject_id="student-1", role="student")


@pytest.fixture
def quiz(db_session, teacher):
    return quiz_service.create_quiz(
        db_session,
        owner=teacher,
        obj_in=QuizCreate(
            name="Science basics",
            subject="Science",
            description="Planets, water and heat",
            timer=1,
            questions=SAMPLE_QUESTIONS,
        ),
    )


def make_token(identity: Identity) -> str:
    return jwt.encode(
        {"sub": identity.subject_id, "role": identity.role},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


@pytest.fixture
def client_for(session_factory):
    """Build a TestClient rooted at the v1 API, optionally authenticated."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    clients = []

    def _make(identity: Identity | None = None) -> TestClient:
        c = TestClient(app, base_url=f"http://testserver{settings.API_V1_PREFIX}")
        if identity is not None:
            c.headers["Authorization"] = f"Bearer {make_token(identity)}"
        clients.append(c)
        return c

    yield _make

    for c in clients:
        c.close()
    app.dependency_overrides.clear()
