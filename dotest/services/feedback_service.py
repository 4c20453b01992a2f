"""Service layer for user feedback."""
from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from dotest.errors import NotFoundError
from dotest.models.db import Feedback, FeedbackStatus


def create_feedback(
    db: DbSession,
    feedback_type: str,
    categories: list[str] | None = None,
    content: str | None = None,
    book_id: str | None = None,
    chapter_id: str | None = None,
    question_id: str | None = None,
    client_id: str | None = None,
) -> Feedback:
    entry = Feedback(
        feedback_type=feedback_type,
        feedback_content=content or None,
        book_id=book_id or None,
        chapter_id=chapter_id or None,
        question_id=question_id or None,
        client_id=client_id or None,
        status=FeedbackStatus.PENDING.value,
    )
    entry.feedback_categories = categories or []
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_feedback(
    db: DbSession,
    status: FeedbackStatus | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[Feedback]:
    query = select(Feedback)
    if status:
        query = query.where(Feedback.status == status.value)
    query = query.order_by(Feedback.created_at.desc(), Feedback.id.desc())
    return list(db.execute(query.limit(limit).offset(offset)).scalars().all())


def update_feedback_status(
    db: DbSession, feedback_id: int, status: FeedbackStatus
) -> Feedback:
    entry = db.get(Feedback, feedback_id)
    if entry is None:
        raise NotFoundError(f"Feedback not found: {feedback_id}")
    entry.status = status.value
    db.commit()
    db.refresh(entry)
    return entry
