"""LearnHub Platform - Services initialization."""
from learnhub.services.locks import KeyedLock, progress_locks
from learnhub.services.repository import ContentRepository, ProgressRepository
from learnhub.services.progress import ProgressService

__all__ = [
    "KeyedLock",
    "progress_locks",
    "ContentRepository",
    "ProgressRepository",
    "ProgressService",
]
