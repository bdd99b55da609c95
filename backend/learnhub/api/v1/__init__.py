"""LearnHub Platform - API v1 Router."""
from fastapi import APIRouter

from learnhub.api.v1.quizzes import router as quizzes_router
from learnhub.api.v1.lessons import router as lessons_router
from learnhub.api.v1.progress import router as progress_router

api_router = APIRouter()

api_router.include_router(quizzes_router)
api_router.include_router(lessons_router)
api_router.include_router(progress_router)
