"""
LearnHub Platform - Progress Models
SQLAlchemy models for per-student, per-subject progress and mastery signals
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from learnhub.core.database import Base, JSONType


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps (SQLite drops tzinfo on the way back)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ProgressRecord(Base):
    """
    Aggregate of completions and mastery signals for one (student, subject).

    ``version_id`` is an optimistic-concurrency counter: a write based on a
    stale load raises ``StaleDataError`` at flush time.
    """

    __tablename__ = "progress_records"
    __table_args__ = (
        UniqueConstraint("student_id", "subject", name="uq_progress_student_subject"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True)
    subject: Mapped[str] = mapped_column(String(100))

    # Aggregates
    overall_progress: Mapped[int] = mapped_column(Integer, default=0)  # 0 to 100
    total_study_time: Mapped[int] = mapped_column(Integer, default=0)  # minutes
    study_streak: Mapped[int] = mapped_column(Integer, default=0)  # consecutive days
    last_activity: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    version_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Relationships
    lessons_completed: Mapped[list["LessonCompletion"]] = relationship(
        back_populates="progress",
        cascade="all, delete-orphan",
        order_by="LessonCompletion.position",
        collection_class=ordering_list("position"),
    )
    quizzes_completed: Mapped[list["QuizCompletion"]] = relationship(
        back_populates="progress",
        cascade="all, delete-orphan",
        order_by="QuizCompletion.position",
        collection_class=ordering_list("position"),
    )
    strengths: Mapped[list["TopicConfidence"]] = relationship(
        back_populates="progress",
        cascade="all, delete-orphan",
        order_by="TopicConfidence.position",
        collection_class=ordering_list("position"),
    )
    weaknesses: Mapped[list["TopicDifficulty"]] = relationship(
        back_populates="progress",
        cascade="all, delete-orphan",
        order_by="TopicDifficulty.position",
        collection_class=ordering_list("position"),
    )
    badges: Mapped[list["Badge"]] = relationship(
        back_populates="progress",
        cascade="all, delete-orphan",
        order_by="Badge.position",
        collection_class=ordering_list("position"),
    )

    __mapper_args__ = {"version_id_col": version_id}

    def __init__(self, **kwargs):
        # Column defaults only apply at INSERT; the engine reads these before that.
        kwargs.setdefault("overall_progress", 0)
        kwargs.setdefault("total_study_time", 0)
        kwargs.setdefault("study_streak", 0)
        # Start with loaded, empty collections so nothing lazy-loads after the first commit
        for collection in ("lessons_completed", "quizzes_completed", "strengths", "weaknesses", "badges"):
            kwargs.setdefault(collection, [])
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<ProgressRecord student={self.student_id} subject={self.subject!r}>"


class LessonCompletion(Base):
    """A finished lesson. One row per (progress record, lesson)."""

    __tablename__ = "lesson_completions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    progress_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("progress_records.id", ondelete="CASCADE"),
        index=True
    )
    lesson_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True)
    position: Mapped[int] = mapped_column(Integer)

    time_spent: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)  # percentage
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    progress: Mapped["ProgressRecord"] = relationship(back_populates="lessons_completed")


class QuizCompletion(Base):
    """One quiz attempt merged into progress. Repeated attempts each get a row."""

    __tablename__ = "quiz_completions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    progress_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("progress_records.id", ondelete="CASCADE"),
        index=True
    )
    quiz_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True)
    position: Mapped[int] = mapped_column(Integer)

    # Score details
    score: Mapped[int] = mapped_column(Integer)
    earned_points: Mapped[int] = mapped_column(Integer)
    total_points: Mapped[int] = mapped_column(Integer)
    correct_answers: Mapped[int] = mapped_column(Integer)
    total_questions: Mapped[int] = mapped_column(Integer)

    time_spent: Mapped[int] = mapped_column(Integer, default=0)  # minutes
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    progress: Mapped["ProgressRecord"] = relationship(back_populates="quizzes_completed")


class TopicConfidence(Base):
    """A strength: how confident we are the student knows a topic."""

    __tablename__ = "topic_strengths"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    progress_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("progress_records.id", ondelete="CASCADE"),
        index=True
    )
    position: Mapped[int] = mapped_column(Integer)

    topic: Mapped[str] = mapped_column(String(255))
    confidence: Mapped[int] = mapped_column(Integer)  # 0 to 100
    last_assessed: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    progress: Mapped["ProgressRecord"] = relationship(back_populates="strengths")


class TopicDifficulty(Base):
    """A weakness: how much the student struggles with a topic."""

    __tablename__ = "topic_weaknesses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    progress_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("progress_records.id", ondelete="CASCADE"),
        index=True
    )
    position: Mapped[int] = mapped_column(Integer)

    topic: Mapped[str] = mapped_column(String(255))
    difficulty: Mapped[int] = mapped_column(Integer)  # 0 to 100
    last_assessed: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Stores list of suggestion strings, in display order
    improvement_suggestions: Mapped[list] = mapped_column(JSONType, default=list)

    progress: Mapped["ProgressRecord"] = relationship(back_populates="weaknesses")


class Badge(Base):
    """A milestone earned within one subject."""

    __tablename__ = "badges"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    progress_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("progress_records.id", ondelete="CASCADE"),
        index=True
    )
    position: Mapped[int] = mapped_column(Integer)

    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(String(255))
    earned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    progress: Mapped["ProgressRecord"] = relationship(back_populates="badges")
