"""LearnHub Platform - Models initialization."""
from learnhub.models.progress import (
    ProgressRecord,
    LessonCompletion,
    QuizCompletion,
    TopicConfidence,
    TopicDifficulty,
    Badge,
)
from learnhub.models.content import (
    Lesson,
    Quiz,
    QuizAttempt,
    SubjectName,
)


__all__ = [
    # Progress models
    "ProgressRecord",
    "LessonCompletion",
    "QuizCompletion",
    "TopicConfidence",
    "TopicDifficulty",
    "Badge",
    # Content models
    "Lesson",
    "Quiz",
    "QuizAttempt",
    "SubjectName",
]
