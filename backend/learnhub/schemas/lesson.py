"""
LearnHub Platform - Lesson Schemas
Pydantic schemas for browsing lesson content
"""
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class LessonSummaryResponse(BaseModel):
    """A lesson as listed for a subject and grade (no body)."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    subject: str
    grade: int
    chapter: str
    difficulty: str
    estimated_time: int  # minutes
    created_at: datetime


class LessonResponse(LessonSummaryResponse):
    """Full lesson, including its content."""
    content: str
