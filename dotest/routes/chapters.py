"""Chapter endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DbSession

from dotest.database import get_db
from dotest.dependencies import get_content_cache
from dotest.models import ChapterCreate
from dotest.serialization import serialize_chapter
from dotest.services import content_service
from dotest.services.cache_service import ContentCache
from dotest.utils import split_id_list, validate_id

router = APIRouter(prefix="/api/chapters", tags=["chapters"])


@router.get("")
def list_chapters(
    db: Annotated[DbSession, Depends(get_db)],
    cache: Annotated[ContentCache, Depends(get_content_cache)],
    textbookIds: str | None = None,
) -> list[dict[str, object]]:
    """List chapters of the given comma-separated textbook ids."""
    book_ids = split_id_list("textbookIds", textbookIds)
    return content_service.list_chapters_cached(db, cache, book_ids)


@router.post("", status_code=201)
def create_chapter(
    payload: ChapterCreate,
    db: Annotated[DbSession, Depends(get_db)],
    cache: Annotated[ContentCache, Depends(get_content_cache)],
) -> dict[str, object]:
    """Add a chapter to an existing textbook."""
    chapter_id = validate_id("chapterId", payload.chapterId)
    book_id = validate_id("bookId", payload.bookId)
    if content_service.get_textbook(db, book_id) is None:
        raise HTTPException(status_code=404, detail="Textbook not found")
    if content_service.get_chapter(db, chapter_id) is not None:
        raise HTTPException(status_code=400, detail="Chapter already exists")
    chapter = content_service.create_chapter(
        db,
        cache,
        chapter_id=chapter_id,
        book_id=book_id,
        title=payload.title.strip(),
        order=payload.order,
        question_count=payload.questionCount,
        description=payload.description,
    )
    return serialize_chapter(chapter)
