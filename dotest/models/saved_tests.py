"""Saved test Pydantic models."""
from pydantic import BaseModel, Field


class SavedTestCreate(BaseModel):
    """Model for saving a test built from selected questions."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    bookIds: list[str] = Field(..., min_length=1)
    chapterIds: list[str] = Field(..., min_length=1)
    questionIds: list[str] = Field(..., min_length=1)
    creatorId: str | None = None
    studentNameField: bool = True
    classField: bool = True
    dateField: bool = True
    scoreField: bool = True
    shuffleQuestions: bool = False
    shuffleOptions: bool = False
    showAnswers: bool = False
