"""Question endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DbSession

from dotest.database import get_db
from dotest.dependencies import get_repository, get_rng
from dotest.models import QuestionCreate
from dotest.serialization import serialize_question_row, serialize_shuffled_question
from dotest.services import content_service, session_service
from dotest.services.content_service import SqlContentRepository
from dotest.services.shuffler import RandomSource
from dotest.utils import split_id_list, validate_id

router = APIRouter(prefix="/api", tags=["questions"])


@router.get("/questions")
def list_questions(
    db: Annotated[DbSession, Depends(get_db)],
    chapterIds: str | None = None,
    setId: str | None = None,
) -> list[dict[str, object]]:
    """Questions of the given chapters (all when omitted), optionally one set."""
    chapter_ids = split_id_list("chapterIds", chapterIds)
    rows = content_service.get_question_rows(db, chapter_ids, setId or None)
    return [serialize_question_row(row) for row in rows]


@router.post("/questions", status_code=201)
def create_question(
    payload: QuestionCreate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Add a question to an existing chapter."""
    question_id = validate_id("questionId", payload.questionId)
    chapter = content_service.get_chapter(db, validate_id("chapterId", payload.chapterId))
    if chapter is None:
        raise HTTPException(status_code=404, detail="Chapter not found")
    if chapter.book_id != payload.bookId:
        raise HTTPException(status_code=400, detail="Chapter belongs to another book")
    if content_service.get_question_row(db, question_id) is not None:
        raise HTTPException(status_code=400, detail="Question already exists")
    row = content_service.create_question(
        db,
        question_id=question_id,
        book_id=payload.bookId,
        chapter_id=payload.chapterId,
        set_id=payload.setId or None,
        question_text=payload.questionText,
        option_a=payload.optionA,
        option_b=payload.optionB,
        option_c=payload.optionC,
        option_d=payload.optionD,
        correct_answer=payload.correctAnswer,
        explanation=payload.explanation,
        difficulty=payload.difficulty,
        question_type=payload.questionType,
    )
    return serialize_question_row(row)


@router.get("/test-questions")
def get_test_questions(
    repository: Annotated[SqlContentRepository, Depends(get_repository)],
    rng: Annotated[RandomSource, Depends(get_rng)],
    bookId: str | None = None,
    chapterId: str | None = None,
    setId: str | None = None,
) -> list[dict[str, object]]:
    """A sampled, option-shuffled question set including its answer key."""
    book_id = validate_id("bookId", bookId)
    chapter_id = validate_id("chapterId", chapterId)
    session_questions = session_service.sample_question_set(
        repository, rng, book_id, chapter_id, setId or None
    )
    return [serialize_shuffled_question(sq) for sq in session_questions]
