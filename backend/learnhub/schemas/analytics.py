"""
LearnHub Platform - Analytics Schemas
Pydantic schemas for study analytics and profile statistics
"""
from datetime import datetime

from pydantic import BaseModel, Field

from learnhub.schemas.progress import (
    BadgeResponse,
    TopicConfidenceResponse,
    TopicDifficultyResponse,
)


# ============================================================================
# Analytics (time-windowed)
# ============================================================================

class QuizPerformancePoint(BaseModel):
    """One quiz completion inside the lookback window."""
    date: datetime
    subject: str
    score: int


class DailyActivity(BaseModel):
    """Activity bucket for one calendar day."""
    lessons: int = 0
    quizzes: int = 0
    study_time: int = 0  # minutes


class StrengthsAndWeaknesses(BaseModel):
    strengths: list[TopicConfidenceResponse] = Field(default_factory=list)
    weaknesses: list[TopicDifficultyResponse] = Field(default_factory=list)


class AnalyticsReport(BaseModel):
    """Dashboard analytics across all of a student's subjects."""
    window_days: int
    study_time_by_subject: dict[str, int] = Field(default_factory=dict)
    quiz_performance_over_time: list[QuizPerformancePoint] = Field(default_factory=list)
    strengths_and_weaknesses: StrengthsAndWeaknesses = Field(default_factory=StrengthsAndWeaknesses)
    daily_activity: dict[str, DailyActivity] = Field(default_factory=dict)  # ISO date -> bucket


# ============================================================================
# Profile statistics
# ============================================================================

class SubjectProgress(BaseModel):
    """Per-subject breakdown for the profile view."""
    lessons_completed: int = 0
    quizzes_completed: int = 0
    average_score: int = 0  # mean quiz score
    overall_progress: int = 0
    study_time: int = 0
    study_streak: int = 0
    strengths: list[TopicConfidenceResponse] = Field(default_factory=list)
    weaknesses: list[TopicDifficultyResponse] = Field(default_factory=list)
    badges: list[BadgeResponse] = Field(default_factory=list)


class ProgressSummary(BaseModel):
    """Totals across every subject a student has activity in."""
    total_lessons: int = 0
    total_quizzes: int = 0
    total_study_time: int = 0
    overall_score: int = 0  # mean of every quiz score
    subject_progress: dict[str, SubjectProgress] = Field(default_factory=dict)
