"""
LearnHub Platform - Content Models
SQLAlchemy models for lessons, quizzes and quiz attempt history
"""
import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnhub.core.database import Base, JSONType
from learnhub.models.progress import utcnow


class SubjectName(str, Enum):
    """Subjects a lesson, quiz or progress record can belong to."""
    MATHEMATICS = "Mathematics"
    SCIENCE = "Science"
    ENGLISH = "English"
    HISTORY = "History"
    GEOGRAPHY = "Geography"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    BIOLOGY = "Biology"
    LITERATURE = "Literature"
    COMPUTER_SCIENCE = "Computer Science"


class Lesson(Base):
    """Lesson content. Read-only for the progress engine."""

    __tablename__ = "lessons"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255))
    subject: Mapped[str] = mapped_column(String(100), index=True)
    grade: Mapped[int] = mapped_column(Integer)
    chapter: Mapped[str] = mapped_column(String(255), default="")
    content: Mapped[str] = mapped_column(Text, default="")
    difficulty: Mapped[str] = mapped_column(String(50), default="Intermediate")
    estimated_time: Mapped[int] = mapped_column(Integer, default=30)  # minutes

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Quiz(Base):
    """A quiz definition plus the attempts made against it."""

    __tablename__ = "quizzes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255))
    subject: Mapped[str] = mapped_column(String(100), index=True)
    grade: Mapped[int] = mapped_column(Integer)
    lesson_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("lessons.id", ondelete="SET NULL"),
        nullable=True
    )

    # Stores ordered list of {prompt, type, options, correct_answer, points, difficulty}
    questions: Mapped[list] = mapped_column(JSONType, default=list)

    time_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    passing_score: Mapped[int] = mapped_column(Integer, default=60)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    attempts: Mapped[list["QuizAttempt"]] = relationship(
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="QuizAttempt.completed_at",
    )

    @property
    def question_count(self) -> int:
        return len(self.questions or [])


class QuizAttempt(Base):
    """History entry appended on every submission."""

    __tablename__ = "quiz_attempts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    quiz_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("quizzes.id", ondelete="CASCADE"),
        index=True
    )
    student_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True)

    # Stores list of {question_index, answer, is_correct, time_spent}
    answers: Mapped[list] = mapped_column(JSONType, default=list)
    score: Mapped[int] = mapped_column(Integer)
    passed: Mapped[bool] = mapped_column(Boolean, default=False)

    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    quiz: Mapped["Quiz"] = relationship(back_populates="attempts")
