"""
LearnHub Platform - Mastery Tracker
Per-topic strength/weakness reinforcement from graded questions
"""
import logging
from datetime import datetime, timezone

from learnhub.engine.topics import TopicClassifier, topic_classifier
from learnhub.models.progress import ProgressRecord, TopicConfidence, TopicDifficulty

logger = logging.getLogger(__name__)


class MasteryTracker:
    """
    Bounded reinforcement counters per topic.

    A correct answer raises the topic's confidence, an incorrect one raises its
    difficulty. Values only move up toward 100: nothing decays and the two
    lists never cancel each other out, so a topic may sit in both.
    """

    # Strengths
    INITIAL_CONFIDENCE = 70
    CONFIDENCE_STEP = 10

    # Weaknesses
    INITIAL_DIFFICULTY = 80
    DIFFICULTY_STEP = 15

    CEILING = 100

    IMPROVEMENT_SUGGESTIONS = (
        "review lesson material",
        "practice more questions",
        "ask teacher for clarification",
    )

    def __init__(self, classifier: TopicClassifier = topic_classifier):
        self.classifier = classifier

    def update(
        self,
        progress: ProgressRecord,
        question_text: str,
        is_correct: bool,
        now: datetime | None = None,
    ) -> ProgressRecord:
        """Apply one graded question to ``progress`` in place and return it."""
        now = now or datetime.now(timezone.utc)
        topic = self.classifier.classify(question_text)

        if is_correct:
            self._reinforce_strength(progress, topic, now)
        else:
            self._reinforce_weakness(progress, topic, now)
        return progress

    def _reinforce_strength(self, progress: ProgressRecord, topic: str, now: datetime) -> None:
        strength = next((s for s in progress.strengths if s.topic == topic), None)
        if strength is not None:
            strength.confidence = min(self.CEILING, strength.confidence + self.CONFIDENCE_STEP)
            strength.last_assessed = now
            return

        logger.debug("New strength %r for %s", topic, progress)
        progress.strengths.append(TopicConfidence(
            topic=topic,
            confidence=self.INITIAL_CONFIDENCE,
            last_assessed=now,
        ))

    def _reinforce_weakness(self, progress: ProgressRecord, topic: str, now: datetime) -> None:
        weakness = next((w for w in progress.weaknesses if w.topic == topic), None)
        if weakness is not None:
            weakness.difficulty = min(self.CEILING, weakness.difficulty + self.DIFFICULTY_STEP)
            weakness.last_assessed = now
            return

        logger.debug("New weakness %r for %s", topic, progress)
        progress.weaknesses.append(TopicDifficulty(
            topic=topic,
            difficulty=self.INITIAL_DIFFICULTY,
            last_assessed=now,
            improvement_suggestions=list(self.IMPROVEMENT_SUGGESTIONS),
        ))


mastery_tracker = MasteryTracker()
