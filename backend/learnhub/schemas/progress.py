"""
LearnHub Platform - Progress Schemas
Pydantic schemas for progress records, lesson completion and quiz results
"""
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LessonCompletionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lesson_id: uuid.UUID
    time_spent: int | None = None
    score: int | None = None
    completed_at: datetime


class QuizCompletionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quiz_id: uuid.UUID
    score: int
    earned_points: int
    total_points: int
    correct_answers: int
    total_questions: int
    time_spent: int
    completed_at: datetime


class TopicConfidenceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    topic: str
    confidence: int
    last_assessed: datetime


class TopicDifficultyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    topic: str
    difficulty: int
    last_assessed: datetime
    improvement_suggestions: list[str] = Field(default_factory=list)


class BadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    description: str
    earned_at: datetime


class ProgressResponse(BaseModel):
    """Full progress record for one subject."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    student_id: uuid.UUID
    subject: str
    overall_progress: int
    total_study_time: int
    study_streak: int
    last_activity: datetime | None = None
    lessons_completed: list[LessonCompletionResponse] = Field(default_factory=list)
    quizzes_completed: list[QuizCompletionResponse] = Field(default_factory=list)
    strengths: list[TopicConfidenceResponse] = Field(default_factory=list)
    weaknesses: list[TopicDifficultyResponse] = Field(default_factory=list)
    badges: list[BadgeResponse] = Field(default_factory=list)


class LessonCompleteRequest(BaseModel):
    """Request to mark a lesson as completed."""
    time_spent: int | None = Field(default=None, ge=0)  # minutes
    score: int | None = Field(default=None, ge=0, le=100)


class LessonCompleteResponse(BaseModel):
    message: str = "Lesson marked as completed"
    progress: ProgressResponse


class QuizResultsResponse(BaseModel):
    """Quiz history and mastery signals for one subject."""
    quizzes_completed: list[QuizCompletionResponse] = Field(default_factory=list)
    overall_progress: int = 0
    strengths: list[TopicConfidenceResponse] = Field(default_factory=list)
    weaknesses: list[TopicDifficultyResponse] = Field(default_factory=list)


class LessonDashboardItem(BaseModel):
    """A lesson and whether the student has completed it."""
    id: uuid.UUID
    title: str
    chapter: str
    grade: int
    difficulty: str
    estimated_time: int
    completed: bool = False
    score: int | None = None
    time_spent: int | None = None
    completed_at: datetime | None = None


class LessonDashboardResponse(BaseModel):
    subject: str
    lessons: list[LessonDashboardItem]
    progress: ProgressResponse | None = None
