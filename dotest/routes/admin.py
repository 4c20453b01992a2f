"""Administrative endpoints: content maintenance and feedback review."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session as DbSession

from dotest.database import get_db
from dotest.dependencies import get_content_cache
from dotest.models import FeedbackStatusUpdate
from dotest.models.db import FeedbackStatus
from dotest.serialization import serialize_feedback
from dotest.services import content_service, feedback_service, set_id_service
from dotest.services.cache_service import ContentCache
from dotest.utils import validate_id

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.delete("/textbooks/{book_id}")
def delete_textbook(
    book_id: str,
    db: Annotated[DbSession, Depends(get_db)],
    cache: Annotated[ContentCache, Depends(get_content_cache)],
) -> dict[str, object]:
    """Delete a textbook and everything that belongs to it."""
    return content_service.delete_textbook(db, cache, validate_id("bookId", book_id))


@router.post("/update-set-ids")
def update_set_ids(
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Derive every question's set id from its question id."""
    return {"summary": set_id_service.update_set_ids(db)}


@router.get("/feedback")
def list_feedback(
    db: Annotated[DbSession, Depends(get_db)],
    status: FeedbackStatus | None = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> list[dict[str, object]]:
    entries = feedback_service.list_feedback(db, status, limit, offset)
    return [serialize_feedback(entry) for entry in entries]


@router.patch("/feedback/{feedback_id}")
def update_feedback(
    feedback_id: int,
    payload: FeedbackStatusUpdate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    entry = feedback_service.update_feedback_status(db, feedback_id, payload.status)
    return serialize_feedback(entry)
