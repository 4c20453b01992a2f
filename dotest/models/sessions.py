"""Test-session Pydantic models."""
from pydantic import BaseModel, Field


class SessionStartRequest(BaseModel):
    """Model for starting a test session."""

    bookId: str = Field(..., min_length=1)
    chapterId: str = Field(..., min_length=1)
    setId: str | None = None
    clientId: str | None = None


class AnswerRequest(BaseModel):
    """Model for answering one question. `selected` is option text or label."""

    questionId: str = Field(..., min_length=1)
    selected: str = Field(..., min_length=1)
