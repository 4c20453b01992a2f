"""
Question model: one multiple-choice item with four labelled options.
"""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dotest.database import Base


class Question(Base):
    """
    Stored question row.
    `question_id` follows {subject}{book}-C{chapter}-{set}-{sequence},
    e.g. E01-C00-01-002.
    """

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    question_id: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    book_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    chapter_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    set_id: Mapped[str | None] = mapped_column(String(64), index=True, nullable=True)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    option_a: Mapped[str] = mapped_column(Text, nullable=False)
    option_b: Mapped[str] = mapped_column(Text, nullable=False)
    option_c: Mapped[str] = mapped_column(Text, nullable=False)
    option_d: Mapped[str] = mapped_column(Text, nullable=False)
    correct_answer: Mapped[str] = mapped_column(String(4), nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty: Mapped[int] = mapped_column(default=1, nullable=False)
    question_type: Mapped[str] = mapped_column(
        String(32), default="multiple_choice", nullable=False
    )
