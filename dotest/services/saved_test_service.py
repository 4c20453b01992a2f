"""Service layer for saved test definitions."""
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from dotest.errors import NotFoundError
from dotest.models.db import Question, SavedTest

logger = logging.getLogger(__name__)

DEFAULT_CREATOR = "anonymous"


def _new_test_id() -> str:
    return f"test_{uuid.uuid4().hex[:8]}"


def get_questions_in_order(db: DbSession, question_ids: list[str]) -> list[Question]:
    """Stored questions for the ids, in the given order. Unknown ids are skipped."""
    if not question_ids:
        return []
    rows = db.execute(
        select(Question).where(Question.question_id.in_(question_ids))
    ).scalars().all()
    by_id = {row.question_id: row for row in rows}
    return [by_id[qid] for qid in question_ids if qid in by_id]


def create_saved_test(
    db: DbSession,
    title: str,
    book_ids: list[str],
    chapter_ids: list[str],
    question_ids: list[str],
    description: str | None = None,
    creator_id: str | None = None,
    **layout: bool,
) -> SavedTest:
    """Store a test definition.

    Raises:
        ValueError: no question ids, or one that does not exist.
    """
    ordered_ids = list(dict.fromkeys(qid.strip() for qid in question_ids if qid.strip()))
    if not ordered_ids:
        raise ValueError("At least one question id is required")
    known = {row.question_id for row in get_questions_in_order(db, ordered_ids)}
    missing = [qid for qid in ordered_ids if qid not in known]
    if missing:
        raise ValueError(f"Unknown question ids: {', '.join(missing)}")

    saved = SavedTest(
        test_id=_new_test_id(),
        creator_id=creator_id or DEFAULT_CREATOR,
        title=title,
        description=description or None,
        **layout,
    )
    saved.book_ids = book_ids
    saved.chapter_ids = chapter_ids
    saved.question_ids = ordered_ids
    db.add(saved)
    db.commit()
    db.refresh(saved)
    logger.info(
        "Saved test %s with %d questions (creator=%s)",
        saved.test_id,
        len(ordered_ids),
        saved.creator_id,
    )
    return saved


def list_saved_tests(
    db: DbSession,
    creator_id: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[SavedTest]:
    query = select(SavedTest)
    if creator_id:
        query = query.where(SavedTest.creator_id == creator_id)
    query = query.order_by(SavedTest.created_at.desc(), SavedTest.id.desc())
    return list(db.execute(query.limit(limit).offset(offset)).scalars().all())


def get_saved_test(db: DbSession, test_id: str) -> SavedTest:
    saved = db.execute(
        select(SavedTest).where(SavedTest.test_id == test_id)
    ).scalar_one_or_none()
    if saved is None:
        raise NotFoundError(f"Test not found: {test_id}")
    return saved
