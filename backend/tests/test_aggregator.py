"""
LearnHub Platform - Progress Aggregator & Milestones Tests
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from learnhub.core.exceptions import ValidationError
from learnhub.engine.aggregator import ProgressAggregator
from learnhub.schemas.quiz import ScoreResult

NOW = datetime(2026, 3, 10, 15, 30, tzinfo=timezone.utc)


def score_of(score: int) -> ScoreResult:
    return ScoreResult(
        earned_points=score,
        total_points=100,
        correct_answers=score // 10,
        total_questions=10,
        score=score,
    )


@pytest.fixture
def aggregator() -> ProgressAggregator:
    return ProgressAggregator()


# ============================================================================
# Lessons
# ============================================================================

def test_same_lesson_twice_overwrites(aggregator, record):
    lesson_id = uuid.uuid4()
    later = NOW + timedelta(hours=2)

    aggregator.record_lesson_completion(record, lesson_id, time_spent=20, score=60, now=NOW)
    aggregator.record_lesson_completion(record, lesson_id, time_spent=10, score=90, now=later)

    assert len(record.lessons_completed) == 1
    completion = record.lessons_completed[0]
    assert completion.time_spent == 10
    assert completion.score == 90
    assert completion.completed_at == later
    # Study time accumulates across repeats
    assert record.total_study_time == 30


def test_different_lessons_append(aggregator, record):
    aggregator.record_lesson_completion(record, uuid.uuid4(), time_spent=5, score=70, now=NOW)
    aggregator.record_lesson_completion(record, uuid.uuid4(), time_spent=5, score=90, now=NOW)

    assert len(record.lessons_completed) == 2
    assert record.total_study_time == 10
    assert record.overall_progress == 80


def test_missing_time_spent_counts_as_zero(aggregator, record):
    aggregator.record_lesson_completion(record, uuid.uuid4(), time_spent=None, score=None, now=NOW)

    assert record.total_study_time == 0
    assert record.lessons_completed[0].time_spent is None


def test_negative_time_spent_is_rejected(aggregator, record):
    with pytest.raises(ValidationError):
        aggregator.record_lesson_completion(record, uuid.uuid4(), time_spent=-5, score=80)
    with pytest.raises(ValidationError):
        aggregator.record_quiz_completion(record, uuid.uuid4(), score_of(80), time_spent=-1)

    assert record.lessons_completed == []
    assert record.quizzes_completed == []
    assert record.total_study_time == 0


def test_lesson_score_out_of_range(aggregator, record):
    with pytest.raises(ValidationError):
        aggregator.record_lesson_completion(record, uuid.uuid4(), time_spent=5, score=101)


# ============================================================================
# Quizzes
# ============================================================================

def test_every_quiz_attempt_is_kept(aggregator, record):
    quiz_id = uuid.uuid4()
    for score in (40, 60, 80):
        aggregator.record_quiz_completion(record, quiz_id, score_of(score), time_spent=10, now=NOW)

    assert len(record.quizzes_completed) == 3
    assert [q.score for q in record.quizzes_completed] == [40, 60, 80]
    assert [q.position for q in record.quizzes_completed] == [0, 1, 2]
    assert record.total_study_time == 30


def test_quiz_completion_copies_score_fields(aggregator, record):
    result = ScoreResult(earned_points=3, total_points=4, correct_answers=2, total_questions=3, score=75)
    aggregator.record_quiz_completion(record, uuid.uuid4(), result, time_spent=12, now=NOW)

    completion = record.quizzes_completed[0]
    assert (completion.earned_points, completion.total_points) == (3, 4)
    assert (completion.correct_answers, completion.total_questions) == (2, 3)
    assert completion.score == 75
    assert completion.time_spent == 12
    assert completion.completed_at == NOW


# ============================================================================
# Overall progress (finalize)
# ============================================================================

def test_finalize_with_no_completions_is_zero(aggregator, record):
    aggregator.finalize(record, NOW)

    assert record.overall_progress == 0
    assert record.last_activity == NOW


def test_overall_progress_is_unweighted_mean(aggregator, record):
    aggregator.record_lesson_completion(record, uuid.uuid4(), time_spent=5, score=80, now=NOW)
    aggregator.record_quiz_completion(record, uuid.uuid4(), score_of(60), time_spent=5, now=NOW)
    aggregator.record_quiz_completion(record, uuid.uuid4(), score_of(100), time_spent=5, now=NOW)

    assert record.overall_progress == 80


def test_unscored_lessons_are_left_out(aggregator, record):
    aggregator.record_lesson_completion(record, uuid.uuid4(), time_spent=5, score=None, now=NOW)
    assert record.overall_progress == 0

    aggregator.record_lesson_completion(record, uuid.uuid4(), time_spent=5, score=0, now=NOW)
    aggregator.record_quiz_completion(record, uuid.uuid4(), score_of(90), time_spent=5, now=NOW)
    assert record.overall_progress == 45


def test_finalize_recomputes_after_direct_edits(aggregator, record):
    aggregator.record_quiz_completion(record, uuid.uuid4(), score_of(40), time_spent=5, now=NOW)
    record.quizzes_completed[0].score = 90

    aggregator.finalize(record, NOW)
    assert record.overall_progress == 90


# ============================================================================
# Streaks & badges
# ============================================================================

def test_streak_grows_on_consecutive_days(aggregator, record):
    for day in range(3):
        aggregator.record_lesson_completion(
            record, uuid.uuid4(), time_spent=5, score=80, now=NOW + timedelta(days=day)
        )
    assert record.study_streak == 3

    # Same day again: unchanged
    aggregator.record_lesson_completion(
        record, uuid.uuid4(), time_spent=5, score=80, now=NOW + timedelta(days=2, hours=1)
    )
    assert record.study_streak == 3

    # Skipped a day: restart
    aggregator.record_lesson_completion(
        record, uuid.uuid4(), time_spent=5, score=80, now=NOW + timedelta(days=4)
    )
    assert record.study_streak == 1


def test_badges_are_awarded_once(aggregator, record):
    quiz_id = uuid.uuid4()
    aggregator.record_quiz_completion(record, quiz_id, score_of(100), time_spent=5, now=NOW)
    aggregator.record_quiz_completion(record, quiz_id, score_of(100), time_spent=5, now=NOW)

    assert [b.name for b in record.badges] == ["First Steps", "Perfect Score"]


def test_week_streak_and_dedicated_badges(aggregator, record):
    for day in range(7):
        aggregator.record_lesson_completion(
            record, uuid.uuid4(), time_spent=90, score=70, now=NOW + timedelta(days=day)
        )

    names = [b.name for b in record.badges]
    assert "Week Streak" in names
    assert "Dedicated Learner" in names
    assert "Perfect Score" not in names
