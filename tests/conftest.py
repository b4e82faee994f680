"""
Shared fixtures: an in-memory SQLite store, a scripted text generator and a
TestClient wired to both.
"""

import json
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from interview_coach.api.deps import get_generator
from interview_coach.core.database import Base, get_db
from interview_coach.main import create_app
from interview_coach.models import user, session, question, response, feedback  # noqa: F401
from interview_coach.schemas.session import SessionCreate
from interview_coach.services.session_service import create_session
from interview_coach.services.user_service import get_or_create_user
from interview_coach.utils.enums import InterviewType, Difficulty

USER_HEADERS = {"X-User-Id": "user_alice"}
OTHER_USER_HEADERS = {"X-User-Id": "user_bob"}


def question_payload(count=3):
    return {
        "questions": [
            {
                "questionText": f"Question {i + 1}?",
                "category": "Technical" if i % 2 == 0 else "Behavioral",
                "difficulty": "Medium",
                "keyPoints": [f"point {i + 1}a", f"point {i + 1}b"],
                "evaluationCriteria": {
                    "clarity": "Clear structure",
                    "depth": "Concrete examples",
                    "relevance": "Tied to the role",
                },
            }
            for i in range(count)
        ]
    }


def feedback_payload():
    return {
        "overallScore": 7.5,
        "overallSummary": "Solid answers with room to go deeper.",
        "technicalScore": 8,
        "behavioralScore": None,
        "communicationScore": 7,
        "strengths": ["Clear structure", "Good examples"],
        "improvements": ["Quantify impact"],
        "recommendations": ["Practice system design"],
        "questionAnalysis": [
            {
                "questionIndex": 0,
                "score": 8,
                "feedback": "Well reasoned.",
                "keyPointsCovered": ["point 1a"],
            }
        ],
        "metricsData": {
            "categoryScores": {"Technical": 8, "Behavioral": 6, "Situational": 7},
            "skillsAssessed": ["python"],
        },
    }


def fenced(data) -> str:
    return "Sure! Here is the JSON you asked for:\n```json\n" + json.dumps(data, indent=2) + "\n```\nGood luck!"


def fail_commits(monkeypatch, target):
    """Make every commit on ``target`` (a session or the Session class) lose its connection."""

    def commit(*args):
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(target, "commit", commit)


class FakeGenerator:
    """Returns scripted replies in order and records every prompt."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    def queue(self, *replies):
        self.replies.extend(replies)

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


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
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def alice(db):
    return get_or_create_user(db, "user_alice")


@pytest.fixture
def bob(db):
    return get_or_create_user(db, "user_bob")


@pytest.fixture
def interview(db, alice):
    return create_session(
        db,
        alice,
        SessionCreate(
            job_role="Backend Engineer",
            job_description="Build and operate Python APIs.",
            interview_type=InterviewType.TECHNICAL,
            difficulty=Difficulty.MEDIUM,
        ),
    )


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def client(session_factory, generator):
    app = create_app(create_tables=False)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_generator] = lambda: generator

    with TestClient(app) as test_client:
        yield test_client
