"""Pydantic models."""
from dotest.models.content import ChapterCreate, QuestionCreate, TextbookCreate
from dotest.models.feedback import FeedbackCreate, FeedbackStatusUpdate
from dotest.models.saved_tests import SavedTestCreate
from dotest.models.sessions import AnswerRequest, SessionStartRequest

__all__ = [
    "AnswerRequest",
    "ChapterCreate",
    "FeedbackCreate",
    "FeedbackStatusUpdate",
    "QuestionCreate",
    "SavedTestCreate",
    "SessionStartRequest",
    "TextbookCreate",
]
