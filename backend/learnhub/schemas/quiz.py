"""
LearnHub Platform - Quiz Schemas
Pydantic schemas for quiz definitions, submissions and score results
"""
import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from learnhub.schemas.progress import ProgressResponse


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"
    ESSAY = "essay"


class QuestionDifficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class QuestionDefinition(BaseModel):
    """A single question, including its answer key."""
    prompt: str
    type: QuestionType = QuestionType.MULTIPLE_CHOICE
    options: list[str] | None = None
    correct_answer: str
    points: int = Field(default=1, ge=0)  # zero-weight questions are allowed
    difficulty: QuestionDifficulty = QuestionDifficulty.MEDIUM


class QuizDefinition(BaseModel):
    """What the scoring engine needs to know about a quiz."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID | None = None
    subject: str = ""
    passing_score: int = Field(default=60, ge=0, le=100)
    questions: list[QuestionDefinition] = Field(default_factory=list)


class SubmittedAnswer(BaseModel):
    """Student's answer to one question. Positional unless question_index is given."""
    answer: str
    time_spent: float = Field(default=0, ge=0)
    question_index: int | None = None


class QuestionOutcome(BaseModel):
    """Grading of one question."""
    question_index: int
    prompt: str
    student_answer: str
    correct_answer: str
    is_correct: bool
    points: int
    time_spent: float = 0


class ScoreResult(BaseModel):
    """Score breakdown for one submission."""
    earned_points: int
    total_points: int
    correct_answers: int
    total_questions: int
    score: int  # 0 to 100


class QuizSubmitRequest(BaseModel):
    """Request to submit quiz answers."""
    answers: list[SubmittedAnswer]
    started_at: datetime


class QuizSubmitResult(ScoreResult):
    """Score plus the caller-derived pass flag and time spent."""
    passed: bool
    time_spent: int  # minutes
    details: list[QuestionOutcome] = Field(default_factory=list)


class QuizSubmitResponse(BaseModel):
    message: str = "Quiz submitted successfully"
    result: QuizSubmitResult
    progress: ProgressResponse


class QuizQuestionView(BaseModel):
    """Question as shown to a student (no answer key)."""
    prompt: str
    type: QuestionType
    options: list[str] | None = None
    points: int
    difficulty: QuestionDifficulty


class QuizSummaryResponse(BaseModel):
    """A quiz as listed for a subject and grade (no questions)."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    subject: str
    grade: int
    lesson_id: uuid.UUID | None = None
    time_limit: int | None = None
    passing_score: int
    question_count: int
    created_at: datetime


class QuizDetailResponse(BaseModel):
    """Quiz detail. ``questions`` carries answer keys only for teachers."""
    id: uuid.UUID
    title: str
    subject: str
    grade: int
    lesson_id: uuid.UUID | None = None
    time_limit: int | None = None
    passing_score: int
    questions: list[QuestionDefinition] | list[QuizQuestionView]
