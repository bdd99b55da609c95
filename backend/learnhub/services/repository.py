"""
LearnHub Platform - Repositories
Async SQLAlchemy access to progress records and course content
"""
import logging
import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from learnhub.core.exceptions import ConflictError, NotFoundError
from learnhub.engine.aggregator import ProgressAggregator, progress_aggregator
from learnhub.models.content import Lesson, Quiz, QuizAttempt
from learnhub.models.progress import ProgressRecord

logger = logging.getLogger(__name__)


class ProgressRepository:
    """
    Loads and stores ProgressRecords.

    ``save`` always runs ``finalize`` first, whichever code path mutated the
    record, and turns optimistic-lock failures into ConflictError.
    """

    def __init__(self, db: AsyncSession, aggregator: ProgressAggregator = progress_aggregator):
        self.db = db
        self.aggregator = aggregator

    def _select(self):
        return (
            select(ProgressRecord)
            .options(
                selectinload(ProgressRecord.lessons_completed),
                selectinload(ProgressRecord.quizzes_completed),
                selectinload(ProgressRecord.strengths),
                selectinload(ProgressRecord.weaknesses),
                selectinload(ProgressRecord.badges),
            )
            # Reload state even if the record is already in the identity map
            .execution_options(populate_existing=True)
        )

    async def get(self, student_id: uuid.UUID, subject: str) -> ProgressRecord | None:
        result = await self.db.execute(
            self._select().where(
                ProgressRecord.student_id == student_id,
                ProgressRecord.subject == subject,
            )
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, student_id: uuid.UUID, subject: str) -> ProgressRecord:
        """Load the record, or start a zero-valued one (not yet written)."""
        record = await self.get(student_id, subject)
        if record is None:
            logger.info("Creating progress record for student %s in %s", student_id, subject)
            record = ProgressRecord(student_id=student_id, subject=subject)
            self.db.add(record)
        return record

    async def list_for_student(self, student_id: uuid.UUID) -> list[ProgressRecord]:
        result = await self.db.execute(
            self._select()
            .where(ProgressRecord.student_id == student_id)
            .order_by(ProgressRecord.subject)
        )
        return list(result.scalars().all())

    async def save(self, record: ProgressRecord, now: datetime | None = None) -> ProgressRecord:
        """
        Finalize and commit the record. ``now`` is the mutation time; it
        becomes ``last_activity``.

        Raises:
            ConflictError: If another writer updated (or created) it first
        """
        self.aggregator.finalize(record, now)
        self.db.add(record)
        # Rollback expires the record, so read these first
        student_id, subject = record.student_id, record.subject
        try:
            await self.db.commit()
        except (StaleDataError, IntegrityError) as e:
            await self.db.rollback()
            raise ConflictError(
                f"Progress for student {student_id} in {subject} was modified concurrently"
            ) from e
        return record


class ContentRepository:
    """Read access to lessons and quizzes, plus the quiz attempt log."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_quiz(self, quiz_id: uuid.UUID) -> Quiz:
        quiz = await self.db.get(Quiz, quiz_id)
        if quiz is None or not quiz.is_active:
            raise NotFoundError("Quiz not found")
        return quiz

    async def get_lesson(self, lesson_id: uuid.UUID) -> Lesson:
        lesson = await self.db.get(Lesson, lesson_id)
        if lesson is None:
            raise NotFoundError("Lesson not found")
        return lesson

    async def list_quizzes(self, subject: str, grade: int) -> list[Quiz]:
        """Active quizzes for a subject and grade, newest first."""
        result = await self.db.execute(
            select(Quiz)
            .where(Quiz.subject == subject, Quiz.grade == grade, Quiz.is_active.is_(True))
            .order_by(Quiz.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_lessons_for_grade(self, subject: str, grade: int) -> list[Lesson]:
        """Lessons for a subject and grade, newest first."""
        result = await self.db.execute(
            select(Lesson)
            .where(Lesson.subject == subject, Lesson.grade == grade)
            .order_by(Lesson.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_lessons(self, subject: str) -> list[Lesson]:
        result = await self.db.execute(
            select(Lesson)
            .where(Lesson.subject == subject)
            .order_by(Lesson.grade, Lesson.chapter, Lesson.created_at)
        )
        return list(result.scalars().all())

    def add_attempt(self, attempt: QuizAttempt) -> None:
        """Stage an attempt; it is committed together with the progress record."""
        self.db.add(attempt)
