"""
LearnHub Platform - Topic Classifier
Buckets questions by their leading words
"""


class TopicClassifier:
    """
    Coarse topic key: the first three whitespace-delimited words of the
    question. Questions sharing those words share a bucket even when they
    are about different things.
    """

    TOPIC_WORDS = 3

    def classify(self, question_text: str) -> str:
        return " ".join(question_text.split()[:self.TOPIC_WORDS])


topic_classifier = TopicClassifier()
