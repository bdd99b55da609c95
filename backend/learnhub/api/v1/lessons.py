"""
LearnHub Platform - Lesson API
Endpoints for browsing lessons, lesson completion and the per-subject dashboard
"""
import uuid

from fastapi import APIRouter

from learnhub.api.deps import CurrentActor, ProgressServiceDep
from learnhub.models.content import SubjectName
from learnhub.schemas.lesson import LessonResponse, LessonSummaryResponse
from learnhub.schemas.progress import (
    LessonCompleteRequest,
    LessonCompleteResponse,
    LessonDashboardResponse,
    ProgressResponse,
)

router = APIRouter(prefix="/lessons", tags=["Lessons"])


@router.post("/{lesson_id}/complete", response_model=LessonCompleteResponse)
async def complete_lesson(
    lesson_id: uuid.UUID,
    request: LessonCompleteRequest,
    actor: CurrentActor,
    service: ProgressServiceDep,
):
    """
    Mark a lesson as completed.
    Completing the same lesson again replaces the earlier time and score.
    """
    record = await service.complete_lesson(
        actor.id,
        lesson_id,
        time_spent=request.time_spent,
        score=request.score,
    )
    return LessonCompleteResponse(progress=ProgressResponse.model_validate(record))


@router.get("/dashboard/{subject}", response_model=LessonDashboardResponse)
async def lesson_dashboard(
    subject: SubjectName,
    actor: CurrentActor,
    service: ProgressServiceDep,
):
    """Lessons of a subject with the current student's completion status."""
    return await service.get_lesson_dashboard(actor.id, subject.value)


@router.get("/detail/{lesson_id}", response_model=LessonResponse)
async def get_lesson(
    lesson_id: uuid.UUID,
    actor: CurrentActor,
    service: ProgressServiceDep,
):
    """Get a lesson with its content."""
    return await service.content.get_lesson(lesson_id)


@router.get("/{subject}/{grade}", response_model=list[LessonSummaryResponse])
async def list_lessons(
    subject: SubjectName,
    grade: int,
    actor: CurrentActor,
    service: ProgressServiceDep,
):
    """Lessons for a subject and grade, newest first."""
    return await service.content.list_lessons_for_grade(subject.value, grade)
