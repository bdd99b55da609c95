"""
LearnHub Platform - Quiz API
Endpoints for browsing quizzes, reading them and submitting answers
"""
import uuid

from fastapi import APIRouter

from learnhub.api.deps import ActorRole, CurrentActor, ProgressServiceDep
from learnhub.models.content import SubjectName
from learnhub.schemas.progress import ProgressResponse
from learnhub.schemas.quiz import (
    QuizDetailResponse,
    QuizQuestionView,
    QuizSubmitRequest,
    QuizSubmitResponse,
    QuizSummaryResponse,
)

router = APIRouter(prefix="/quizzes", tags=["Quizzes"])


@router.get("/{quiz_id}", response_model=QuizDetailResponse)
async def get_quiz(
    quiz_id: uuid.UUID,
    actor: CurrentActor,
    service: ProgressServiceDep,
):
    """
    Get a quiz.
    Students never see the answer key.
    """
    quiz, definition = await service.load_quiz(quiz_id)

    if actor.role == ActorRole.STUDENT:
        questions = [
            QuizQuestionView(
                prompt=q.prompt,
                type=q.type,
                options=q.options,
                points=q.points,
                difficulty=q.difficulty,
            )
            for q in definition.questions
        ]
    else:
        questions = definition.questions

    return QuizDetailResponse(
        id=quiz.id,
        title=quiz.title,
        subject=quiz.subject,
        grade=quiz.grade,
        lesson_id=quiz.lesson_id,
        time_limit=quiz.time_limit,
        passing_score=quiz.passing_score,
        questions=questions,
    )


@router.post("/{quiz_id}/submit", response_model=QuizSubmitResponse)
async def submit_quiz(
    quiz_id: uuid.UUID,
    request: QuizSubmitRequest,
    actor: CurrentActor,
    service: ProgressServiceDep,
):
    """
    Submit quiz answers.
    Grades the attempt, records it and updates the student's mastery signals.
    """
    result, record = await service.submit_quiz(actor.id, quiz_id, request)
    return QuizSubmitResponse(
        result=result,
        progress=ProgressResponse.model_validate(record),
    )


@router.get("/{subject}/{grade}", response_model=list[QuizSummaryResponse])
async def list_quizzes(
    subject: SubjectName,
    grade: int,
    actor: CurrentActor,
    service: ProgressServiceDep,
):
    """Active quizzes for a subject and grade, newest first."""
    return await service.content.list_quizzes(subject.value, grade)
