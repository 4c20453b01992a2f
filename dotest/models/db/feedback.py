"""
Feedback model: user reports about questions or content.
"""

from __future__ import annotations

import enum
import json
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dotest.database import Base


class FeedbackStatus(str, enum.Enum):
    """Review status of a feedback entry."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class Feedback(Base):
    """Anonymous feedback, optionally tied to a book, chapter or question."""

    __tablename__ = "feedback"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    client_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    book_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    chapter_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    question_id: Mapped[str | None] = mapped_column(
        String(64), index=True, nullable=True
    )
    feedback_type: Mapped[str] = mapped_column(String(50), nullable=False)
    feedback_categories_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    feedback_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=FeedbackStatus.PENDING.value, index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def feedback_categories(self) -> list[str]:
        """Parse categories from JSON."""
        if not self.feedback_categories_json:
            return []
        try:
            return json.loads(self.feedback_categories_json)
        except (json.JSONDecodeError, TypeError):
            return []

    @feedback_categories.setter
    def feedback_categories(self, value: list[str] | None) -> None:
        """Serialize categories to JSON."""
        self.feedback_categories_json = (
            json.dumps(value, ensure_ascii=False) if value else None
        )
