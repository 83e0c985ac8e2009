import asyncio
import os
import tempfile
from pathlib import Path

import pytest

# Settings are cached on first import, so the environment must be ready first
_tmpdir = tempfile.mkdtemp(prefix="luno-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_tmpdir) / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.pop("OPENAI_API_KEY", None)

from fastapi.testclient import TestClient  # noqa: E402

from luno.db.base import Base  # noqa: E402
from luno.db.session import AsyncSessionLocal, engine  # noqa: E402
from luno.main import app  # noqa: E402
from luno.services.ai import AIServiceError, get_tutor  # noqa: E402
from luno.services.seeding import seed_lessons  # noqa: E402


class FakeTutor:
    """Stands in for AITutor; records calls and returns canned answers."""

    def __init__(self):
        self.calls = []
        self.fail = False
        self.quiz = {
            "questions": [
                {
                    "question": f"Question {i}?",
                    "options": {"a": "A", "b": "B", "c": "C", "d": "D"},
                    "correctAnswer": "b",
                    "explanation": f"Because {i}",
                }
                for i in range(1, 6)
            ]
        }
        self.review = {
            "score": 72,
            "summary": "Nice start!",
            "suggestions": [
                {
                    "type": "accessibility",
                    "priority": "high",
                    "startLine": 1,
                    "endLine": 1,
                    "message": "Add alt text",
                    "oldCode": '<img src="a.png">',
                    "newCode": '<img src="a.png" alt="A">',
                }
            ],
        }

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.fail:
            raise AIServiceError(f"Failed to {name}: Invalid API key")

    async def explain_line(self, code_line, context=""):
        self._record("explain_line", code_line, context)
        return f"Explains: {code_line.strip()}"

    async def generate_quiz(self, lesson_content, lesson_title):
        self._record("generate_quiz", lesson_title)
        return self.quiz

    async def chat(self, message, history=None):
        self._record("chat", message, history)
        return f"Echo: {message}"

    async def debug_code(self, code, error_message=""):
        self._record("debug_code", code, error_message)
        return "Close your <p> tag."

    async def review_code(self, code, language="html"):
        self._record("review_code", code, language)
        return self.review

    async def suggest_fixes(self, code, issue, language="html"):
        self._record("suggest_fixes", code, issue, language)
        return self.review["suggestions"]


async def _reset_database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as db:
        await seed_lessons(db)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_tutor():
    return FakeTutor()


@pytest.fixture
def client(fake_tutor):
    asyncio.run(_reset_database())
    app.dependency_overrides[get_tutor] = lambda: fake_tutor
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def db(anyio_backend):
    await _reset_database()
    async with AsyncSessionLocal() as session:
        yield session


def signup(client, username="alice", email="alice@example.com", password="secret123"):
    res = client.post("/api/auth/signup", json={"username": username, "email": email, "password": password})
    assert res.status_code == 201, res.text
    return res.json()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(client):
    data = signup(client)
    return {"id": data["user"]["id"], "token": data["token"], "headers": auth_headers(data["token"])}
