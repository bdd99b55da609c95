"""
LearnHub Platform - Milestones
Study streaks and badges earned within a subject
"""
import logging
from datetime import datetime, timedelta

from learnhub.models.progress import Badge, ProgressRecord, as_utc

logger = logging.getLogger(__name__)


# Badge name -> description. Each badge is earned at most once per subject.
BADGES = {
    "First Steps": "Completed a first lesson or quiz in this subject",
    "Perfect Score": "Scored 100% on a quiz",
    "Week Streak": "Studied this subject 7 days in a row",
    "Dedicated Learner": "Spent 10 hours studying this subject",
}


class Milestones:
    """
    Streak and badge bookkeeping.

    Must run before ``last_activity`` is refreshed, since the streak is
    derived from the gap between the previous activity and now.
    """

    WEEK_STREAK_DAYS = 7
    DEDICATED_MINUTES = 600

    def update_streak(self, progress: ProgressRecord, now: datetime) -> int:
        """Extend, keep or restart the daily streak. Returns the new streak."""
        today = now.date()
        last_activity = as_utc(progress.last_activity)

        if last_activity is None:
            progress.study_streak = 1
        elif last_activity.date() == today:
            progress.study_streak = max(progress.study_streak, 1)
        elif last_activity.date() == today - timedelta(days=1):
            progress.study_streak += 1
        else:
            progress.study_streak = 1

        return progress.study_streak

    def award_badges(
        self,
        progress: ProgressRecord,
        now: datetime,
        quiz_score: int | None = None,
    ) -> list[Badge]:
        """Award every badge whose condition now holds. Returns the new ones."""
        earned = {badge.name for badge in progress.badges}
        qualifying = []

        if progress.lessons_completed or progress.quizzes_completed:
            qualifying.append("First Steps")
        if quiz_score == 100:
            qualifying.append("Perfect Score")
        if progress.study_streak >= self.WEEK_STREAK_DAYS:
            qualifying.append("Week Streak")
        if progress.total_study_time >= self.DEDICATED_MINUTES:
            qualifying.append("Dedicated Learner")

        new_badges = []
        for name in qualifying:
            if name in earned:
                continue
            badge = Badge(name=name, description=BADGES[name], earned_at=now)
            progress.badges.append(badge)
            new_badges.append(badge)
            logger.info("Badge %r earned on %s", name, progress)

        return new_badges


milestones = Milestones()
