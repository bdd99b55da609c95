"""
LearnHub Platform - Progress Aggregator
Merges lesson and quiz completions into a subject progress record
"""
import logging
import uuid
from datetime import datetime, timezone

from learnhub.core.exceptions import ValidationError
from learnhub.engine.milestones import Milestones, milestones
from learnhub.engine.scoring import round_half_up
from learnhub.models.progress import LessonCompletion, ProgressRecord, QuizCompletion
from learnhub.schemas.quiz import ScoreResult

logger = logging.getLogger(__name__)


class ProgressAggregator:
    """
    Appends completions, accumulates study time and keeps the record's
    aggregates in sync through ``finalize``.

    ``finalize`` is the single place aggregates are derived. It runs at the end
    of every mutation here and again on every save (see ProgressRepository),
    so a record is never persisted with a stale ``overall_progress``.
    """

    def __init__(self, milestones: Milestones = milestones):
        self.milestones = milestones

    def record_lesson_completion(
        self,
        progress: ProgressRecord,
        lesson_id: uuid.UUID,
        time_spent: int | None = None,
        score: int | None = None,
        now: datetime | None = None,
    ) -> ProgressRecord:
        """Record a finished lesson; a repeat overwrites the earlier entry."""
        self._check_time_spent(time_spent)
        if score is not None and not 0 <= score <= 100:
            raise ValidationError(f"Lesson score must be between 0 and 100, got {score}")
        now = now or datetime.now(timezone.utc)

        existing = next(
            (lc for lc in progress.lessons_completed if lc.lesson_id == lesson_id),
            None,
        )
        if existing is not None:
            existing.time_spent = time_spent
            existing.score = score
            existing.completed_at = now
        else:
            progress.lessons_completed.append(LessonCompletion(
                lesson_id=lesson_id,
                time_spent=time_spent,
                score=score,
                completed_at=now,
            ))

        progress.total_study_time += time_spent or 0

        self.milestones.update_streak(progress, now)
        self.milestones.award_badges(progress, now)
        return self.finalize(progress, now)

    def record_quiz_completion(
        self,
        progress: ProgressRecord,
        quiz_id: uuid.UUID,
        score_result: ScoreResult,
        time_spent: int | None = None,
        now: datetime | None = None,
    ) -> ProgressRecord:
        """Record a quiz attempt. Attempts are history: never deduplicated."""
        self._check_time_spent(time_spent)
        now = now or datetime.now(timezone.utc)

        progress.quizzes_completed.append(QuizCompletion(
            quiz_id=quiz_id,
            score=score_result.score,
            earned_points=score_result.earned_points,
            total_points=score_result.total_points,
            correct_answers=score_result.correct_answers,
            total_questions=score_result.total_questions,
            time_spent=time_spent or 0,
            completed_at=now,
        ))

        progress.total_study_time += time_spent or 0

        self.milestones.update_streak(progress, now)
        self.milestones.award_badges(progress, now, quiz_score=score_result.score)
        return self.finalize(progress, now)

    def finalize(self, progress: ProgressRecord, now: datetime | None = None) -> ProgressRecord:
        """Recompute derived fields. Call before every write."""
        progress.overall_progress = self.calculate_overall_progress(progress)
        progress.last_activity = now or datetime.now(timezone.utc)
        return progress

    @staticmethod
    def calculate_overall_progress(progress: ProgressRecord) -> int:
        """
        Unweighted mean of every scored lesson and every quiz, 0 if none.

        A lesson scored 0 is scored and counts toward the mean. Only lessons
        with no score at all are left out. Older clients skipped zero scores
        as if they were missing.
        """
        scores = [lc.score for lc in progress.lessons_completed if lc.score is not None]
        scores.extend(qc.score for qc in progress.quizzes_completed)

        if not scores:
            return 0
        return round_half_up(sum(scores) / len(scores))

    @staticmethod
    def _check_time_spent(time_spent: int | None) -> None:
        if time_spent is not None and time_spent < 0:
            raise ValidationError(f"Time spent cannot be negative, got {time_spent}")


progress_aggregator = ProgressAggregator()
