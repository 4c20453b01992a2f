"""Service layer for study content (textbooks, chapters, items, questions)."""
import logging
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session as DbSession

from dotest.errors import NotFoundError
from dotest.models.db import Chapter, ChapterItem, Textbook
from dotest.models.db import Question as QuestionRow
from dotest.models.domain import Question
from dotest.serialization import serialize_chapter, serialize_textbook
from dotest.services.cache_service import ContentCache
from dotest.utils.question_ids import matches_set

logger = logging.getLogger(__name__)


def to_domain_question(row: QuestionRow) -> Question:
    """Convert a stored row into the immutable in-memory record."""
    return Question(
        question_id=row.question_id,
        book_id=row.book_id,
        chapter_id=row.chapter_id,
        question_text=row.question_text,
        option_a=row.option_a or "",
        option_b=row.option_b or "",
        option_c=row.option_c or "",
        option_d=row.option_d or "",
        correct_answer=row.correct_answer or "",
        explanation=row.explanation,
        difficulty=row.difficulty,
        set_id=row.set_id,
        question_type=row.question_type,
    )


class SqlContentRepository:
    """Content repository backed by the relational store."""

    def __init__(self, db: DbSession):
        self.db = db

    def get_questions_by_chapter(self, chapter_id: str) -> list[Question]:
        rows = get_question_rows_by_chapters(self.db, [chapter_id])
        if not rows:
            raise NotFoundError(
                f"No questions in chapter {chapter_id}; select a different chapter"
            )
        return [to_domain_question(row) for row in rows]


# -- textbooks ---------------------------------------------------------------


def get_textbooks(db: DbSession, subject: str | None = None) -> list[Textbook]:
    query = select(Textbook)
    if subject:
        query = query.where(Textbook.subject == subject)
    return list(db.execute(query.order_by(Textbook.book_id)).scalars().all())


def get_textbook(db: DbSession, book_id: str) -> Textbook | None:
    return db.execute(
        select(Textbook).where(Textbook.book_id == book_id)
    ).scalar_one_or_none()


def list_textbooks_cached(
    db: DbSession, cache: ContentCache, subject: str | None = None
) -> list[dict[str, Any]]:
    """Serialized textbook listing, cached per subject."""
    key = f"textbooks:subject_{subject}" if subject else "textbooks:all"
    return cache.get_or_load(
        key, lambda: [serialize_textbook(t) for t in get_textbooks(db, subject)]
    )


def create_textbook(db: DbSession, cache: ContentCache, **fields: Any) -> Textbook:
    textbook = Textbook(**fields)
    db.add(textbook)
    db.commit()
    db.refresh(textbook)
    cache.invalidate("textbooks:")
    return textbook


# -- chapters ----------------------------------------------------------------


def get_chapters_by_textbooks(db: DbSession, book_ids: list[str]) -> list[Chapter]:
    query = select(Chapter)
    if book_ids:
        query = query.where(Chapter.book_id.in_(book_ids))
    return list(
        db.execute(query.order_by(Chapter.book_id, Chapter.order)).scalars().all()
    )


def get_chapter(db: DbSession, chapter_id: str) -> Chapter | None:
    return db.execute(
        select(Chapter).where(Chapter.chapter_id == chapter_id)
    ).scalar_one_or_none()


def list_chapters_cached(
    db: DbSession, cache: ContentCache, book_ids: list[str]
) -> list[dict[str, Any]]:
    """Serialized chapter listing. Only single-book listings are cached."""
    if len(book_ids) != 1:
        return [serialize_chapter(c) for c in get_chapters_by_textbooks(db, book_ids)]
    key = f"chapters:book_{book_ids[0]}"
    return cache.get_or_load(
        key,
        lambda: [serialize_chapter(c) for c in get_chapters_by_textbooks(db, book_ids)],
    )


def create_chapter(db: DbSession, cache: ContentCache, **fields: Any) -> Chapter:
    chapter = Chapter(**fields)
    db.add(chapter)
    db.commit()
    db.refresh(chapter)
    cache.invalidate(f"chapters:book_{chapter.book_id}")
    return chapter


# -- chapter items -----------------------------------------------------------


def get_chapter_items(db: DbSession, chapter_id: str | None = None) -> list[ChapterItem]:
    query = select(ChapterItem)
    if chapter_id:
        query = query.where(ChapterItem.chapter_id == chapter_id)
    return list(db.execute(query.order_by(ChapterItem.order)).scalars().all())


def get_chapter_item(db: DbSession, item_id: str) -> ChapterItem | None:
    return db.execute(
        select(ChapterItem).where(ChapterItem.item_id == item_id)
    ).scalar_one_or_none()


# -- questions ---------------------------------------------------------------


def get_question_rows_by_chapters(
    db: DbSession, chapter_ids: list[str]
) -> list[QuestionRow]:
    query = select(QuestionRow)
    if chapter_ids:
        query = query.where(QuestionRow.chapter_id.in_(chapter_ids))
    return list(db.execute(query.order_by(QuestionRow.question_id)).scalars().all())


def get_question_rows(
    db: DbSession, chapter_ids: list[str], set_id: str | None = None
) -> list[QuestionRow]:
    """Questions of the given chapters (all when empty), optionally one set."""
    rows = get_question_rows_by_chapters(db, chapter_ids)
    if set_id:
        rows = [r for r in rows if matches_set(r.question_id, r.set_id, set_id)]
    return rows


def get_question_row(db: DbSession, question_id: str) -> QuestionRow | None:
    return db.execute(
        select(QuestionRow).where(QuestionRow.question_id == question_id)
    ).scalar_one_or_none()


def create_question(db: DbSession, **fields: Any) -> QuestionRow:
    row = QuestionRow(**fields)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


# -- subjects ----------------------------------------------------------------


def get_subjects(db: DbSession) -> list[dict[str, Any]]:
    """Subjects that have at least one textbook, with textbook counts."""
    rows = db.execute(
        select(Textbook.subject, func.count(Textbook.id))
        .group_by(Textbook.subject)
        .order_by(Textbook.subject)
    ).all()
    return [{"id": subject, "name": subject, "textbookCount": count} for subject, count in rows]


def get_subject_dashboard(db: DbSession, subject: str) -> dict[str, Any]:
    textbooks = get_textbooks(db, subject)
    if not textbooks:
        raise NotFoundError(f"Subject not found: {subject}")

    chapters = get_chapters_by_textbooks(db, [t.book_id for t in textbooks])
    chapter_ids = [c.chapter_id for c in chapters]
    question_count = 0
    if chapter_ids:
        question_count = db.execute(
            select(func.count(QuestionRow.id)).where(
                QuestionRow.chapter_id.in_(chapter_ids)
            )
        ).scalar() or 0

    return {
        "subject": subject,
        "textbooks": [serialize_textbook(t) for t in textbooks],
        "chapters": [serialize_chapter(c) for c in chapters],
        "stats": {
            "textbookCount": len(textbooks),
            "chapterCount": len(chapters),
            "questionCount": question_count,
        },
    }


# -- admin -------------------------------------------------------------------


def delete_textbook(db: DbSession, cache: ContentCache, book_id: str) -> dict[str, Any]:
    """Delete a textbook with its chapters, chapter items and questions."""
    textbook = get_textbook(db, book_id)
    if textbook is None:
        raise NotFoundError(f"Textbook not found: {book_id}")

    deleted_textbook = serialize_textbook(textbook)
    items = db.execute(delete(ChapterItem).where(ChapterItem.book_id == book_id))
    questions = db.execute(delete(QuestionRow).where(QuestionRow.book_id == book_id))
    chapters = db.execute(delete(Chapter).where(Chapter.book_id == book_id))
    db.delete(textbook)
    db.commit()

    cache.invalidate("textbooks:")
    cache.invalidate(f"chapters:book_{book_id}")
    logger.info(
        "Deleted textbook %s (%d chapters, %d items, %d questions)",
        book_id,
        chapters.rowcount,
        items.rowcount,
        questions.rowcount,
    )
    return {
        "deletedTextbook": deleted_textbook,
        "chaptersDeleted": chapters.rowcount,
        "itemsDeleted": items.rowcount,
        "questionsDeleted": questions.rowcount,
    }
