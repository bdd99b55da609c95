"""
LearnHub Platform - Progress Service
Runs submissions end to end: score -> aggregate -> mastery -> save
"""
import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.core.config import settings
from learnhub.core.exceptions import ConfigurationError, ConflictError, ValidationError
from learnhub.engine.aggregator import ProgressAggregator, progress_aggregator
from learnhub.engine.analytics import AnalyticsReporter, analytics_reporter
from learnhub.engine.mastery import MasteryTracker, mastery_tracker
from learnhub.engine.scoring import ScoreCalculator, round_half_up, score_calculator
from learnhub.models.content import Quiz, QuizAttempt
from learnhub.models.progress import ProgressRecord, as_utc, utcnow
from learnhub.schemas.analytics import AnalyticsReport, ProgressSummary
from learnhub.schemas.progress import (
    LessonDashboardItem,
    LessonDashboardResponse,
    ProgressResponse,
    QuizCompletionResponse,
    QuizResultsResponse,
    TopicConfidenceResponse,
    TopicDifficultyResponse,
)
from learnhub.schemas.quiz import QuizDefinition, QuizSubmitRequest, QuizSubmitResult
from learnhub.services.locks import KeyedLock, progress_locks
from learnhub.services.repository import ContentRepository, ProgressRepository

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Request-scoped orchestration around the progress engine.

    Writes to one (student, subject) record are serialized by ``locks`` within
    this process. Across processes the record's version check detects lost
    updates; the whole load-apply-save sequence is then replayed against a
    fresh copy, up to ``max_retries`` times.
    """

    def __init__(
        self,
        db: AsyncSession,
        locks: KeyedLock = progress_locks,
        max_retries: int | None = None,
        calculator: ScoreCalculator = score_calculator,
        aggregator: ProgressAggregator = progress_aggregator,
        tracker: MasteryTracker = mastery_tracker,
        reporter: AnalyticsReporter = analytics_reporter,
    ):
        self.db = db
        self.locks = locks
        self.max_retries = (
            settings.PROGRESS_SAVE_MAX_RETRIES if max_retries is None else max_retries
        )
        self.calculator = calculator
        self.aggregator = aggregator
        self.tracker = tracker
        self.reporter = reporter
        self.content = ContentRepository(db)
        self.progress = ProgressRepository(db, aggregator)

    async def load_quiz(self, quiz_id: uuid.UUID) -> tuple[Quiz, QuizDefinition]:
        """
        Fetch an active quiz and parse its stored questions.

        Raises:
            NotFoundError: Unknown or inactive quiz
            ConfigurationError: Stored questions don't form a valid definition
        """
        quiz = await self.content.get_quiz(quiz_id)
        try:
            definition = QuizDefinition.model_validate(quiz)
        except SchemaValidationError as e:
            logger.error("Quiz %s has a malformed definition: %s", quiz_id, e)
            raise ConfigurationError(f"Quiz {quiz_id} is misconfigured") from e
        return quiz, definition

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def submit_quiz(
        self,
        student_id: uuid.UUID,
        quiz_id: uuid.UUID,
        request: QuizSubmitRequest,
        now: datetime | None = None,
    ) -> tuple[QuizSubmitResult, ProgressRecord]:
        """
        Score a submission and merge it into the student's progress.

        Raises:
            NotFoundError: Unknown or inactive quiz
            ConfigurationError: Quiz worth zero points, or a malformed definition
            ValidationError: Malformed submission
            ConflictError: Concurrent writers kept winning
        """
        _, definition = await self.load_quiz(quiz_id)

        # Validation and scoring happen before anything is written
        outcomes = self.calculator.grade(definition, request.answers)
        score = self.calculator.summarize(outcomes)

        completed_at = now or utcnow()
        started_at = as_utc(request.started_at)
        if started_at > completed_at:
            raise ValidationError("started_at is after the submission time")
        time_spent = round_half_up((completed_at - started_at).total_seconds() / 60)
        passed = score.score >= definition.passing_score

        def apply(record: ProgressRecord) -> None:
            self.aggregator.record_quiz_completion(
                record, quiz_id, score, time_spent, now=completed_at
            )
            for outcome in outcomes:
                self.tracker.update(record, outcome.prompt, outcome.is_correct, now=completed_at)

            # Attempt history lives on the quiz; commit it with the progress write
            self.content.add_attempt(QuizAttempt(
                quiz_id=quiz_id,
                student_id=student_id,
                answers=[
                    {
                        "question_index": o.question_index,
                        "answer": o.student_answer,
                        "is_correct": o.is_correct,
                        "time_spent": o.time_spent,
                    }
                    for o in outcomes
                ],
                score=score.score,
                passed=passed,
                started_at=started_at,
                completed_at=completed_at,
            ))

        record = await self._mutate(student_id, definition.subject, apply, completed_at)
        logger.info(
            "Student %s scored %s%% on quiz %s (%s)",
            student_id, score.score, quiz_id, "passed" if passed else "failed",
        )

        result = QuizSubmitResult(
            **score.model_dump(),
            passed=passed,
            time_spent=time_spent,
            details=outcomes,
        )
        return result, record

    async def complete_lesson(
        self,
        student_id: uuid.UUID,
        lesson_id: uuid.UUID,
        time_spent: int | None = None,
        score: int | None = None,
        now: datetime | None = None,
    ) -> ProgressRecord:
        lesson = await self.content.get_lesson(lesson_id)
        completed_at = now or utcnow()

        def apply(record: ProgressRecord) -> None:
            self.aggregator.record_lesson_completion(
                record, lesson_id, time_spent, score, now=completed_at
            )

        record = await self._mutate(student_id, lesson.subject, apply, completed_at)
        logger.info("Student %s completed lesson %s", student_id, lesson_id)
        return record

    async def _mutate(
        self,
        student_id: uuid.UUID,
        subject: str,
        apply: Callable[[ProgressRecord], None],
        now: datetime,
    ) -> ProgressRecord:
        """Load, apply and save one record under its key lock, retrying on conflict."""
        async with self.locks.hold((student_id, subject)):
            for attempt in range(1, self.max_retries + 1):
                record = await self.progress.get_or_create(student_id, subject)
                apply(record)
                try:
                    return await self.progress.save(record, now)
                except ConflictError:
                    if attempt == self.max_retries:
                        logger.error(
                            "Giving up on progress for %s/%s after %d conflicts",
                            student_id, subject, attempt,
                        )
                        raise
                    logger.warning(
                        "Progress conflict for %s/%s, retrying (%d/%d)",
                        student_id, subject, attempt, self.max_retries,
                    )
        raise ConflictError("No attempts were made")  # max_retries < 1

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_analytics(
        self,
        student_id: uuid.UUID,
        days: int,
        now: datetime | None = None,
    ) -> AnalyticsReport:
        records = await self.progress.list_for_student(student_id)
        return self.reporter.build_report(records, days, now=now)

    async def get_summary(self, student_id: uuid.UUID) -> ProgressSummary:
        records = await self.progress.list_for_student(student_id)
        return self.reporter.summarize(records)

    async def get_quiz_results(self, student_id: uuid.UUID, subject: str) -> QuizResultsResponse:
        record = await self.progress.get(student_id, subject)
        if record is None:
            return QuizResultsResponse()

        return QuizResultsResponse(
            quizzes_completed=[QuizCompletionResponse.model_validate(q) for q in record.quizzes_completed],
            overall_progress=record.overall_progress,
            strengths=[TopicConfidenceResponse.model_validate(s) for s in record.strengths],
            weaknesses=[TopicDifficultyResponse.model_validate(w) for w in record.weaknesses],
        )

    async def get_lesson_dashboard(self, student_id: uuid.UUID, subject: str) -> LessonDashboardResponse:
        """Lessons of a subject, each marked with the student's completion."""
        lessons = await self.content.list_lessons(subject)
        record = await self.progress.get(student_id, subject)
        completions = {lc.lesson_id: lc for lc in record.lessons_completed} if record else {}

        items = []
        for lesson in lessons:
            completion = completions.get(lesson.id)
            items.append(LessonDashboardItem(
                id=lesson.id,
                title=lesson.title,
                chapter=lesson.chapter,
                grade=lesson.grade,
                difficulty=lesson.difficulty,
                estimated_time=lesson.estimated_time,
                completed=completion is not None,
                score=completion.score if completion else None,
                time_spent=completion.time_spent if completion else None,
                completed_at=completion.completed_at if completion else None,
            ))

        return LessonDashboardResponse(
            subject=subject,
            lessons=items,
            progress=ProgressResponse.model_validate(record) if record else None,
        )
