"""Textbook endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DbSession

from dotest.database import get_db
from dotest.dependencies import get_content_cache
from dotest.models import TextbookCreate
from dotest.serialization import serialize_textbook
from dotest.services import content_service
from dotest.services.cache_service import ContentCache
from dotest.utils import validate_id

router = APIRouter(prefix="/api/textbooks", tags=["textbooks"])


@router.get("")
def list_textbooks(
    db: Annotated[DbSession, Depends(get_db)],
    cache: Annotated[ContentCache, Depends(get_content_cache)],
    subject: str | None = None,
) -> list[dict[str, object]]:
    """List textbooks, optionally for one subject."""
    return content_service.list_textbooks_cached(db, cache, subject or None)


@router.get("/{book_id}")
def get_textbook(
    book_id: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    textbook = content_service.get_textbook(db, validate_id("bookId", book_id))
    if textbook is None:
        raise HTTPException(status_code=404, detail="Textbook not found")
    return serialize_textbook(textbook)


@router.post("", status_code=201)
def create_textbook(
    payload: TextbookCreate,
    db: Annotated[DbSession, Depends(get_db)],
    cache: Annotated[ContentCache, Depends(get_content_cache)],
) -> dict[str, object]:
    """Add a textbook."""
    book_id = validate_id("bookId", payload.bookId)
    if content_service.get_textbook(db, book_id) is not None:
        raise HTTPException(status_code=400, detail="Textbook already exists")
    textbook = content_service.create_textbook(
        db,
        cache,
        book_id=book_id,
        title=payload.title.strip(),
        subject=payload.subject.strip(),
        publisher=payload.publisher.strip(),
        chapter_count=payload.chapterCount,
        question_count=payload.questionCount,
    )
    return serialize_textbook(textbook)
