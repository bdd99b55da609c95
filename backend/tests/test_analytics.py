"""
LearnHub Platform - Analytics Reporter Tests
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from learnhub.engine.aggregator import ProgressAggregator
from learnhub.engine.analytics import AnalyticsReporter
from learnhub.engine.mastery import MasteryTracker
from learnhub.models.progress import ProgressRecord
from learnhub.schemas.quiz import ScoreResult

NOW = datetime(2026, 5, 20, 12, 0, tzinfo=timezone.utc)


def score_of(score: int) -> ScoreResult:
    return ScoreResult(
        earned_points=score, total_points=100, correct_answers=1, total_questions=1, score=score
    )


@pytest.fixture
def records() -> list[ProgressRecord]:
    """Two subjects with activity spread over the last few weeks."""
    aggregator = ProgressAggregator()
    tracker = MasteryTracker()
    student_id = uuid.uuid4()

    math = ProgressRecord(student_id=student_id, subject="Mathematics")
    aggregator.record_lesson_completion(math, uuid.uuid4(), 20, 90, now=NOW - timedelta(days=40))
    aggregator.record_quiz_completion(math, uuid.uuid4(), score_of(50), 10, now=NOW - timedelta(days=40))
    aggregator.record_quiz_completion(math, uuid.uuid4(), score_of(70), 15, now=NOW - timedelta(days=2))
    tracker.update(math, "What is two plus two?", True)

    science = ProgressRecord(student_id=student_id, subject="Science")
    aggregator.record_lesson_completion(science, uuid.uuid4(), 30, None, now=NOW - timedelta(days=2))
    aggregator.record_quiz_completion(science, uuid.uuid4(), score_of(100), 5, now=NOW - timedelta(days=1))
    tracker.update(science, "Which planet is largest?", False)
    tracker.update(science, "What is two plus two?", True)

    return [math, science]


@pytest.fixture
def reporter() -> AnalyticsReporter:
    return AnalyticsReporter()


def test_study_time_by_subject(reporter, records):
    report = reporter.build_report(records, days=30, now=NOW)
    assert report.study_time_by_subject == {"Mathematics": 45, "Science": 35}


def test_quiz_performance_respects_window(reporter, records):
    report = reporter.build_report(records, days=30, now=NOW)

    points = [(p.subject, p.score) for p in report.quiz_performance_over_time]
    assert points == [("Mathematics", 70), ("Science", 100)]
    assert report.window_days == 30


def test_wider_window_includes_older_quizzes(reporter, records):
    report = reporter.build_report(records, days=60, now=NOW)
    assert [p.score for p in report.quiz_performance_over_time] == [50, 70, 100]


def test_strengths_and_weaknesses_are_concatenated(reporter, records):
    report = reporter.build_report(records, days=30, now=NOW)

    strengths = report.strengths_and_weaknesses.strengths
    weaknesses = report.strengths_and_weaknesses.weaknesses
    # Same topic in two subjects stays as two entries
    assert [s.topic for s in strengths] == ["What is two", "What is two"]
    assert [w.topic for w in weaknesses] == ["Which planet is"]


def test_daily_activity_buckets(reporter, records):
    report = reporter.build_report(records, days=30, now=NOW)
    daily = report.daily_activity

    old_day = (NOW - timedelta(days=40)).date().isoformat()
    two_days_ago = (NOW - timedelta(days=2)).date().isoformat()
    yesterday = (NOW - timedelta(days=1)).date().isoformat()

    assert set(daily) == {old_day, two_days_ago, yesterday}
    assert (daily[old_day].lessons, daily[old_day].quizzes, daily[old_day].study_time) == (1, 1, 30)
    assert (daily[two_days_ago].lessons, daily[two_days_ago].quizzes) == (1, 1)
    assert daily[two_days_ago].study_time == 45
    assert (daily[yesterday].lessons, daily[yesterday].quizzes) == (0, 1)


def test_naive_timestamps_are_treated_as_utc(reporter, records):
    for quiz in records[0].quizzes_completed:
        quiz.completed_at = quiz.completed_at.replace(tzinfo=None)

    report = reporter.build_report(records, days=30, now=NOW)
    assert [p.score for p in report.quiz_performance_over_time] == [70, 100]


def test_empty_report(reporter):
    report = reporter.build_report([], days=7, now=NOW)

    assert report.study_time_by_subject == {}
    assert report.quiz_performance_over_time == []
    assert report.daily_activity == {}


def test_summary(reporter, records):
    summary = reporter.summarize(records)

    assert summary.total_lessons == 2
    assert summary.total_quizzes == 3
    assert summary.total_study_time == 80
    assert summary.overall_score == 73  # (50 + 70 + 100) / 3

    math = summary.subject_progress["Mathematics"]
    assert math.lessons_completed == 1
    assert math.quizzes_completed == 2
    assert math.average_score == 60
    assert math.overall_progress == 70  # (90 + 50 + 70) / 3
    assert math.study_time == 45

    science = summary.subject_progress["Science"]
    assert science.average_score == 100
    assert [b.name for b in science.badges] == ["First Steps", "Perfect Score"]


def test_summary_without_records(reporter):
    summary = reporter.summarize([])
    assert summary.overall_score == 0
    assert summary.subject_progress == {}
