"""Question set sampling for test sessions."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from dotest.config import SESSION_QUESTION_LIMIT
from dotest.errors import NotFoundError
from dotest.models.domain import Question
from dotest.services.shuffler import RandomSource
from dotest.utils.question_ids import matches_set, set_key_for

logger = logging.getLogger(__name__)


class ContentRepository(Protocol):
    """Read access to stored questions."""

    def get_questions_by_chapter(self, chapter_id: str) -> list[Question]:
        """All questions of a chapter. Raises NotFoundError when there are none."""
        ...


def distinct_set_keys(questions: list[Question]) -> list[str]:
    """Sorted set keys present among the questions."""
    keys = {set_key_for(q.question_id, q.set_id) for q in questions}
    return sorted(key for key in keys if key)


def filter_by_set(questions: list[Question], set_id: str) -> list[Question]:
    return [q for q in questions if matches_set(q.question_id, q.set_id, set_id)]


class QuestionSetSampler:
    """Resolves the bounded question pool for one test session.

    Set keys are sorted before the random pick, so a seeded rng gives the
    same set whatever order the repository returns rows in.
    Questions rejected by `accept` never enter the pool.
    """

    def __init__(
        self,
        repository: ContentRepository,
        rng: RandomSource,
        limit: int = SESSION_QUESTION_LIMIT,
        accept: Optional[Callable[[Question], bool]] = None,
    ):
        if limit < 1:
            raise ValueError("limit must be positive")
        self.repository = repository
        self.rng = rng
        self.limit = limit
        self.accept = accept

    def sample(
        self, book_id: str, chapter_id: str, set_id: str | None = None
    ) -> list[Question]:
        if not book_id or not book_id.strip():
            raise ValueError("book_id is required")
        if not chapter_id or not chapter_id.strip():
            raise ValueError("chapter_id is required")

        questions = self.repository.get_questions_by_chapter(chapter_id)
        if not questions:
            raise NotFoundError(
                f"No questions in chapter {chapter_id}; select a different chapter"
            )
        if self.accept is not None:
            questions = [q for q in questions if self.accept(q)]
            if not questions:
                raise NotFoundError(
                    f"No usable questions in chapter {chapter_id}; "
                    "select a different chapter"
                )

        pool = self._resolve_pool(questions, chapter_id, set_id)

        if len(pool) > self.limit:
            selected = self.rng.sample(pool, self.limit)
        else:
            selected = list(pool)
        logger.info(
            "Sampled %d of %d questions (book=%s, chapter=%s, set=%s)",
            len(selected),
            len(pool),
            book_id,
            chapter_id,
            set_id or "random",
        )
        return selected

    def _resolve_pool(
        self, questions: list[Question], chapter_id: str, set_id: str | None
    ) -> list[Question]:
        if set_id:
            pool = filter_by_set(questions, set_id)
            if not pool:
                raise NotFoundError(
                    f"No questions for set {set_id} in chapter {chapter_id}; "
                    "select a different chapter or set"
                )
            return pool

        keys = distinct_set_keys(questions)
        if not keys:
            return list(questions)
        chosen = self.rng.choice(keys)
        logger.debug("Randomly chose set %s from %s", chosen, keys)
        return [q for q in questions if set_key_for(q.question_id, q.set_id) == chosen]
