"""
LearnHub Platform - Score Calculator
Turns a quiz definition plus submitted answers into a score breakdown
"""
import logging
import math
from collections.abc import Sequence

from learnhub.core.exceptions import ConfigurationError, ValidationError
from learnhub.schemas.quiz import (
    QuestionDefinition,
    QuestionOutcome,
    QuizDefinition,
    ScoreResult,
    SubmittedAnswer,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


class ScoreCalculator:
    """
    Grades a submission by exact string match.

    No partial credit and no per-type comparison: essay and short-answer
    questions are matched exactly like multiple choice. Pass/fail is left to
    the caller (``score >= quiz.passing_score``).
    """

    @staticmethod
    def is_correct(question: QuestionDefinition, answer: SubmittedAnswer) -> bool:
        return answer.answer == question.correct_answer

    def grade(
        self,
        quiz: QuizDefinition,
        answers: Sequence[SubmittedAnswer],
    ) -> list[QuestionOutcome]:
        """
        Grade every question.

        Raises:
            ConfigurationError: If the quiz is worth zero points
            ValidationError: If answers don't line up with the questions
        """
        total_points = sum(q.points for q in quiz.questions)
        if total_points == 0:
            raise ConfigurationError("Quiz has no points to award")

        aligned = self._align_answers(quiz, answers)

        return [
            QuestionOutcome(
                question_index=index,
                prompt=question.prompt,
                student_answer=answer.answer,
                correct_answer=question.correct_answer,
                is_correct=self.is_correct(question, answer),
                points=question.points,
                time_spent=answer.time_spent,
            )
            for index, (question, answer) in enumerate(zip(quiz.questions, aligned))
        ]

    def summarize(self, outcomes: Sequence[QuestionOutcome]) -> ScoreResult:
        """Collapse graded outcomes into a ScoreResult."""
        total_points = sum(o.points for o in outcomes)
        if total_points == 0:
            raise ConfigurationError("Quiz has no points to award")

        earned_points = sum(o.points for o in outcomes if o.is_correct)
        return ScoreResult(
            earned_points=earned_points,
            total_points=total_points,
            correct_answers=sum(1 for o in outcomes if o.is_correct),
            total_questions=len(outcomes),
            score=round_half_up(earned_points / total_points * 100),
        )

    def score(
        self,
        quiz: QuizDefinition,
        answers: Sequence[SubmittedAnswer],
    ) -> ScoreResult:
        result = self.summarize(self.grade(quiz, answers))
        logger.debug(
            "Scored quiz %s: %s/%s points (%s%%)",
            quiz.id, result.earned_points, result.total_points, result.score,
        )
        return result

    def _align_answers(
        self,
        quiz: QuizDefinition,
        answers: Sequence[SubmittedAnswer],
    ) -> list[SubmittedAnswer]:
        """Order answers by question index; positional when no index is given."""
        question_count = len(quiz.questions)
        if len(answers) != question_count:
            raise ValidationError(
                f"Expected {question_count} answers, got {len(answers)}"
            )

        indexed = [a for a in answers if a.question_index is not None]
        if not indexed:
            return list(answers)
        if len(indexed) != len(answers):
            raise ValidationError("Either every answer carries a question_index or none do")

        aligned: list[SubmittedAnswer | None] = [None] * question_count
        for answer in answers:
            index = answer.question_index
            if not 0 <= index < question_count:
                raise ValidationError(f"Question index {index} is out of range")
            if aligned[index] is not None:
                raise ValidationError(f"Question {index} answered more than once")
            aligned[index] = answer
        return aligned


score_calculator = ScoreCalculator()
