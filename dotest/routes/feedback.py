"""Feedback endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from dotest.database import get_db
from dotest.models import FeedbackCreate
from dotest.services import feedback_service

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


@router.post("")
def submit_feedback(
    payload: FeedbackCreate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Store anonymous feedback about a question or chapter."""
    entry = feedback_service.create_feedback(
        db,
        feedback_type=payload.feedbackType.strip(),
        categories=payload.feedbackCategories,
        content=payload.feedbackContent,
        book_id=payload.bookId,
        chapter_id=payload.chapterId,
        question_id=payload.questionId,
        client_id=payload.clientId,
    )
    return {"success": True, "feedbackId": entry.id}
