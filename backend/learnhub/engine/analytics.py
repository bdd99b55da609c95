"""
LearnHub Platform - Analytics Reporter
Dashboard views derived from a student's progress records
"""
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from learnhub.engine.scoring import round_half_up
from learnhub.models.progress import LessonCompletion, ProgressRecord, as_utc
from learnhub.schemas.analytics import (
    AnalyticsReport,
    DailyActivity,
    ProgressSummary,
    QuizPerformancePoint,
    StrengthsAndWeaknesses,
    SubjectProgress,
)
from learnhub.schemas.progress import (
    BadgeResponse,
    TopicConfidenceResponse,
    TopicDifficultyResponse,
)


class AnalyticsReporter:
    """Read-only aggregation over progress records. Holds no state."""

    def build_report(
        self,
        records: Iterable[ProgressRecord],
        days: int,
        now: datetime | None = None,
    ) -> AnalyticsReport:
        """
        Build the analytics view for a lookback window of ``days``.

        Only quiz performance is windowed; study time, mastery signals and
        daily activity cover the full history.
        """
        now = now or datetime.now(timezone.utc)
        window_start = now - timedelta(days=days)
        report = AnalyticsReport(window_days=days)

        for record in records:
            report.study_time_by_subject[record.subject] = record.total_study_time

            for quiz in record.quizzes_completed:
                completed_at = as_utc(quiz.completed_at)
                if completed_at >= window_start:
                    report.quiz_performance_over_time.append(QuizPerformancePoint(
                        date=completed_at,
                        subject=record.subject,
                        score=quiz.score,
                    ))

            report.strengths_and_weaknesses.strengths.extend(
                TopicConfidenceResponse.model_validate(s) for s in record.strengths
            )
            report.strengths_and_weaknesses.weaknesses.extend(
                TopicDifficultyResponse.model_validate(w) for w in record.weaknesses
            )

            for activity in [*record.lessons_completed, *record.quizzes_completed]:
                day = as_utc(activity.completed_at).date().isoformat()
                bucket = report.daily_activity.setdefault(day, DailyActivity())
                if isinstance(activity, LessonCompletion):
                    bucket.lessons += 1
                else:
                    bucket.quizzes += 1
                bucket.study_time += activity.time_spent or 0

        return report

    def summarize(self, records: Iterable[ProgressRecord]) -> ProgressSummary:
        """Profile statistics: totals plus a per-subject breakdown."""
        summary = ProgressSummary()
        all_quiz_scores = []

        for record in records:
            quiz_scores = [q.score for q in record.quizzes_completed]
            all_quiz_scores.extend(quiz_scores)

            summary.total_lessons += len(record.lessons_completed)
            summary.total_quizzes += len(record.quizzes_completed)
            summary.total_study_time += record.total_study_time

            summary.subject_progress[record.subject] = SubjectProgress(
                lessons_completed=len(record.lessons_completed),
                quizzes_completed=len(record.quizzes_completed),
                average_score=self._mean(quiz_scores),
                overall_progress=record.overall_progress,
                study_time=record.total_study_time,
                study_streak=record.study_streak,
                strengths=[TopicConfidenceResponse.model_validate(s) for s in record.strengths],
                weaknesses=[TopicDifficultyResponse.model_validate(w) for w in record.weaknesses],
                badges=[BadgeResponse.model_validate(b) for b in record.badges],
            )

        summary.overall_score = self._mean(all_quiz_scores)
        return summary

    @staticmethod
    def _mean(scores: list[int]) -> int:
        if not scores:
            return 0
        return round_half_up(sum(scores) / len(scores))


analytics_reporter = AnalyticsReporter()
