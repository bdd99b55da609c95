"""
LearnHub Platform - Test Configuration
Pytest fixtures and configuration for testing
"""
import uuid
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

import learnhub.models  # noqa: F401  (registers tables on Base.metadata)
from learnhub.core.database import Base, get_db
from learnhub.main import app
from learnhub.models.content import Lesson, Quiz
from learnhub.models.progress import ProgressRecord


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """SQLite database file private to one test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client; each request gets its own session, like production."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def student_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def student_headers(student_id) -> dict[str, str]:
    return {"X-Actor-Id": str(student_id), "X-Actor-Role": "student"}


@pytest.fixture
def teacher_headers() -> dict[str, str]:
    return {"X-Actor-Id": str(uuid.uuid4()), "X-Actor-Role": "teacher"}


@pytest.fixture
def sample_questions() -> list[dict[str, Any]]:
    """Two one-point questions answered "A" and "B"."""
    return [
        {
            "prompt": "What is two plus two?",
            "type": "multiple-choice",
            "options": ["A", "B", "C", "D"],
            "correct_answer": "A",
            "points": 1,
            "difficulty": "Easy",
        },
        {
            "prompt": "Which planet is largest?",
            "type": "multiple-choice",
            "options": ["A", "B", "C", "D"],
            "correct_answer": "B",
            "points": 1,
            "difficulty": "Medium",
        },
    ]


@pytest_asyncio.fixture
async def quiz(db_session: AsyncSession, sample_questions) -> Quiz:
    quiz = Quiz(
        title="Warm-up",
        subject="Mathematics",
        grade=9,
        questions=sample_questions,
        passing_score=50,
    )
    db_session.add(quiz)
    await db_session.commit()
    return quiz


@pytest_asyncio.fixture
async def empty_quiz(db_session: AsyncSession) -> Quiz:
    quiz = Quiz(title="Empty", subject="Mathematics", grade=9, questions=[], passing_score=50)
    db_session.add(quiz)
    await db_session.commit()
    return quiz


@pytest_asyncio.fixture
async def zero_weight_quiz(db_session: AsyncSession) -> Quiz:
    """Has questions, but none of them is worth a point."""
    quiz = Quiz(
        title="Ungraded",
        subject="Mathematics",
        grade=9,
        questions=[{"prompt": "Is it?", "correct_answer": "A", "points": 0}],
        passing_score=50,
    )
    db_session.add(quiz)
    await db_session.commit()
    return quiz


@pytest_asyncio.fixture
async def lesson(db_session: AsyncSession) -> Lesson:
    lesson = Lesson(
        title="Fractions",
        subject="Mathematics",
        grade=9,
        chapter="1",
        content="Halves and quarters",
    )
    db_session.add(lesson)
    await db_session.commit()
    return lesson


@pytest.fixture
def record() -> ProgressRecord:
    """Unsaved, zero-valued progress record."""
    return ProgressRecord(student_id=uuid.uuid4(), subject="Mathematics")
