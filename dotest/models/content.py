"""Content-related Pydantic models."""
from pydantic import BaseModel, Field, field_validator


class TextbookCreate(BaseModel):
    """Model for creating a textbook."""

    bookId: str = Field(..., min_length=1, max_length=64)
    title: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    publisher: str = Field(..., min_length=1)
    chapterCount: int = Field(0, ge=0)
    questionCount: int = Field(0, ge=0)


class ChapterCreate(BaseModel):
    """Model for creating a chapter."""

    chapterId: str = Field(..., min_length=1, max_length=64)
    bookId: str = Field(..., min_length=1, max_length=64)
    title: str = Field(..., min_length=1)
    order: int = 0
    questionCount: int = Field(0, ge=0)
    description: str | None = None


class QuestionCreate(BaseModel):
    """Model for creating a question. All four options are required."""

    questionId: str = Field(..., min_length=1, max_length=64)
    bookId: str = Field(..., min_length=1, max_length=64)
    chapterId: str = Field(..., min_length=1, max_length=64)
    setId: str | None = None
    questionText: str = Field(..., min_length=1)
    optionA: str = Field(..., min_length=1)
    optionB: str = Field(..., min_length=1)
    optionC: str = Field(..., min_length=1)
    optionD: str = Field(..., min_length=1)
    correctAnswer: str
    explanation: str | None = None
    difficulty: int = Field(1, ge=1)
    questionType: str = "multiple_choice"

    @field_validator("correctAnswer")
    @classmethod
    def _check_label(cls, value: str) -> str:
        label = value.strip().upper()
        if label not in {"A", "B", "C", "D"}:
            raise ValueError("correctAnswer must be one of A, B, C, D")
        return label
