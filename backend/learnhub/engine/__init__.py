"""
LearnHub Platform - Progress Engine
Pure scoring, mastery and aggregation rules. No I/O happens in this package.
"""
from learnhub.engine.scoring import ScoreCalculator, score_calculator, round_half_up
from learnhub.engine.topics import TopicClassifier, topic_classifier
from learnhub.engine.mastery import MasteryTracker, mastery_tracker
from learnhub.engine.milestones import Milestones, milestones, BADGES
from learnhub.engine.aggregator import ProgressAggregator, progress_aggregator
from learnhub.engine.analytics import AnalyticsReporter, analytics_reporter

__all__ = [
    "ScoreCalculator",
    "score_calculator",
    "round_half_up",
    "TopicClassifier",
    "topic_classifier",
    "MasteryTracker",
    "mastery_tracker",
    "Milestones",
    "milestones",
    "BADGES",
    "ProgressAggregator",
    "progress_aggregator",
    "AnalyticsReporter",
    "analytics_reporter",
]
