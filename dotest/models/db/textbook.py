"""
Textbook, Chapter and ChapterItem models for study content.
"""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dotest.database import Base


class Textbook(Base):
    """A study book belonging to one subject."""

    __tablename__ = "textbooks"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    book_id: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    publisher: Mapped[str] = mapped_column(String(255), nullable=False)
    chapter_count: Mapped[int] = mapped_column(default=0, nullable=False)
    question_count: Mapped[int] = mapped_column(default=0, nullable=False)


class Chapter(Base):
    """A chapter of a textbook. Chapter ids are unique across all books."""

    __tablename__ = "chapters"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    chapter_id: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    book_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    order: Mapped[int] = mapped_column(default=0, nullable=False)
    question_count: Mapped[int] = mapped_column(default=0, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class ChapterItem(Base):
    """
    A page-level study item within a chapter.
    `page_reference` holds "P12", "P12, P13" or "P12-P14".
    """

    __tablename__ = "chapter_items"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    item_id: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    chapter_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    book_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    order: Mapped[int] = mapped_column(default=0, nullable=False)
    key_points: Mapped[str | None] = mapped_column(Text, nullable=True)
    full_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    page_reference: Mapped[str | None] = mapped_column(
        String(64), index=True, nullable=True
    )
