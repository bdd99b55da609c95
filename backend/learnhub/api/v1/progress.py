"""
LearnHub Platform - Progress API
Endpoints for quiz results, profile statistics and study analytics
"""
import uuid
from typing import Annotated

from fastapi import APIRouter, Query

from learnhub.api.deps import CurrentActor, ProgressServiceDep
from learnhub.core.config import settings
from learnhub.models.content import SubjectName
from learnhub.schemas.analytics import AnalyticsReport, ProgressSummary
from learnhub.schemas.progress import QuizResultsResponse

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get("/summary", response_model=ProgressSummary)
async def get_summary(
    actor: CurrentActor,
    service: ProgressServiceDep,
    student_id: uuid.UUID | None = None,
):
    """
    Profile statistics across every subject.

    Query Parameters:
    - student_id: Optional. Teachers may look at any student.
    """
    return await service.get_summary(actor.resolve_student(student_id))


@router.get("/analytics", response_model=AnalyticsReport)
async def get_analytics(
    actor: CurrentActor,
    service: ProgressServiceDep,
    days: Annotated[
        int, Query(ge=1, le=settings.ANALYTICS_MAX_WINDOW_DAYS)
    ] = settings.ANALYTICS_DEFAULT_WINDOW_DAYS,
):
    """Study analytics for the current student over the last ``days`` days."""
    return await service.get_analytics(actor.id, days)


@router.get("/{subject}/quiz-results", response_model=QuizResultsResponse)
async def get_quiz_results(
    subject: SubjectName,
    actor: CurrentActor,
    service: ProgressServiceDep,
    student_id: uuid.UUID | None = None,
):
    """Quiz history, overall progress and mastery signals for one subject."""
    return await service.get_quiz_results(actor.resolve_student(student_id), subject.value)
