"""Chapter item and textbook page endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DbSession

from dotest.database import get_db
from dotest.serialization import serialize_chapter_item
from dotest.services import content_service, page_service

router = APIRouter(prefix="/api", tags=["chapter-items"])


@router.get("/chapter-items")
def list_chapter_items(
    db: Annotated[DbSession, Depends(get_db)],
    chapterId: str | None = None,
) -> list[dict[str, object]]:
    items = content_service.get_chapter_items(db, chapterId or None)
    return [serialize_chapter_item(item) for item in items]


@router.get("/chapter-items/{item_id}")
def get_chapter_item(
    item_id: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    item = content_service.get_chapter_item(db, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Chapter item not found")
    return serialize_chapter_item(item)


@router.get("/textbook-pages")
def get_textbook_pages(
    db: Annotated[DbSession, Depends(get_db)],
    pageRef: str | None = None,
    bookId: str | None = None,
) -> dict[str, object]:
    """Chapter items covering the pages of a reference like "P16-P18"."""
    if not pageRef or not pageRef.strip():
        raise HTTPException(status_code=400, detail="pageRef is required")
    try:
        return page_service.lookup_pages(db, pageRef.strip(), bookId or None)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
