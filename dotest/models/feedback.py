"""Feedback Pydantic models."""
from pydantic import BaseModel, Field

from dotest.models.db.feedback import FeedbackStatus


class FeedbackCreate(BaseModel):
    """Model for submitting feedback."""

    feedbackType: str = Field(..., min_length=1, max_length=50)
    feedbackCategories: list[str] = Field(default_factory=list)
    feedbackContent: str | None = None
    bookId: str | None = None
    chapterId: str | None = None
    questionId: str | None = None
    clientId: str | None = None


class FeedbackStatusUpdate(BaseModel):
    """Model for changing the review status of feedback."""

    status: FeedbackStatus
