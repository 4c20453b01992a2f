"""Lookup of textbook pages referenced from explanations."""
import logging
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.orm import Session as DbSession

from dotest.models.db import ChapterItem
from dotest.serialization import serialize_chapter_item
from dotest.utils.page_refs import page_numbers

logger = logging.getLogger(__name__)


def _scoped(query, book_id: str | None):
    if book_id:
        return query.where(ChapterItem.book_id == book_id)
    return query


def find_item_for_page(
    db: DbSession, number: str, book_id: str | None = None
) -> ChapterItem | None:
    """Chapter item covering page `number`.

    An exact "P<n>" reference wins; otherwise comma lists and ranges that
    start or end at the page are considered.
    """
    exact = db.execute(
        _scoped(select(ChapterItem), book_id)
        .where(ChapterItem.page_reference == f"P{number}")
        .limit(1)
    ).scalar_one_or_none()
    if exact is not None:
        return exact

    return db.execute(
        _scoped(select(ChapterItem), book_id)
        .where(
            or_(
                ChapterItem.page_reference.like(f"P{number},%"),
                ChapterItem.page_reference.like(f"%, P{number}"),
                ChapterItem.page_reference.like(f"P{number}-P%"),
                ChapterItem.page_reference.like(f"P%-P{number}"),
            )
        )
        .order_by(ChapterItem.order)
        .limit(1)
    ).scalar_one_or_none()


def lookup_pages(
    db: DbSession, page_ref: str, book_id: str | None = None
) -> dict[str, Any]:
    """Resolve a page reference such as "P16-P18" to chapter items.

    Raises:
        ValueError: the reference contains no page numbers.
    """
    numbers = page_numbers(page_ref)
    if not numbers:
        raise ValueError(f"No page numbers in {page_ref!r}")

    found: dict[str, ChapterItem] = {}
    for number in numbers:
        item = find_item_for_page(db, number, book_id)
        if item is None:
            logger.debug("Page P%s not found", number)
            continue
        found.setdefault(item.item_id, item)

    items = sorted(found.values(), key=lambda item: item.order)
    return {
        "title": f"Textbook page {page_ref}",
        "pageReference": page_ref,
        "items": [serialize_chapter_item(item) for item in items],
    }
