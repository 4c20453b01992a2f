"""Database models."""
from dotest.models.db.feedback import Feedback, FeedbackStatus
from dotest.models.db.question import Question
from dotest.models.db.saved_test import SavedTest
from dotest.models.db.test_result import TestResult
from dotest.models.db.textbook import Chapter, ChapterItem, Textbook

__all__ = [
    "Chapter",
    "ChapterItem",
    "Feedback",
    "FeedbackStatus",
    "Question",
    "SavedTest",
    "TestResult",
    "Textbook",
]
