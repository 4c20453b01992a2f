"""
Test session service: builds sessions from sampled and shuffled questions
and keeps active sessions in memory.

Sessions are not persisted. Every session has its own lock, so concurrent
requests against one session are applied one at a time, while different
sessions proceed independently.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterator, Optional, Sequence

from dotest.config import MALFORMED_ANSWER_POLICY, SESSION_QUESTION_LIMIT
from dotest.errors import DataIntegrityError, NotFoundError, SessionNotFoundError
from dotest.models.domain import AnswerFeedback, Question, ScoreReport, SessionQuestion
from dotest.services.grader import TestSession
from dotest.services.sampler import ContentRepository, QuestionSetSampler
from dotest.services.shuffler import (
    RandomSource,
    is_well_formed,
    shuffle_options,
    shuffle_options_with_fallback,
)
from dotest.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory registry of active test sessions keyed by session id."""

    def __init__(self) -> None:
        self._sessions: dict[str, TestSession] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def add(self, session: TestSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session
            self._locks[session.session_id] = threading.Lock()

    def get(self, session_id: str) -> TestSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    @contextmanager
    def locked(self, session_id: str) -> Iterator[TestSession]:
        """Hold the session's own lock for the duration of the block."""
        with self._lock:
            session = self._sessions.get(session_id)
            session_lock = self._locks.get(session_id)
        if session is None or session_lock is None:
            raise SessionNotFoundError(session_id)
        with session_lock:
            yield session

    def remove(self, session_id: str) -> bool:
        with self._lock:
            self._locks.pop(session_id, None)
            return self._sessions.pop(session_id, None) is not None

    def evict_idle(
        self, max_idle: timedelta, now: Optional[datetime] = None
    ) -> list[str]:
        """Drop sessions without activity for longer than max_idle."""
        cutoff = (now or utc_now()) - max_idle
        with self._lock:
            stale = [
                session_id
                for session_id, session in self._sessions.items()
                if session.last_activity_at < cutoff
            ]
            for session_id in stale:
                self._sessions.pop(session_id, None)
                self._locks.pop(session_id, None)
        return stale

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions


session_store = SessionStore()


@dataclass(frozen=True)
class AdvanceResult:
    completed: bool
    question: Optional[SessionQuestion] = None
    index: Optional[int] = None
    report: Optional[ScoreReport] = None


def build_session_questions(
    questions: Sequence[Question],
    rng: RandomSource,
    policy: str = MALFORMED_ANSWER_POLICY,
) -> list[SessionQuestion]:
    """Shuffle the options of every question.

    With policy "skip" questions whose answer key is malformed are logged
    and left out; with "first_option" their first option counts as correct.
    """
    session_questions = []
    for question in questions:
        if policy == "first_option":
            session_questions.append(shuffle_options_with_fallback(question, rng))
            continue
        try:
            session_questions.append(shuffle_options(question, rng))
        except DataIntegrityError as exc:
            logger.warning("Skipping question: %s", exc)
    return session_questions


def sample_question_set(
    repository: ContentRepository,
    rng: RandomSource,
    book_id: str,
    chapter_id: str,
    set_id: Optional[str] = None,
    limit: int = SESSION_QUESTION_LIMIT,
    policy: str = MALFORMED_ANSWER_POLICY,
) -> list[SessionQuestion]:
    """Sample and shuffle a question set without registering a session."""
    accept = is_well_formed if policy == "skip" else None
    sampler = QuestionSetSampler(repository, rng, limit=limit, accept=accept)
    questions = sampler.sample(book_id, chapter_id, set_id)
    session_questions = build_session_questions(questions, rng, policy)
    if not session_questions:
        raise NotFoundError(
            f"No usable questions in chapter {chapter_id}; "
            "select a different chapter or set"
        )
    return session_questions


def start_session(
    store: SessionStore,
    repository: ContentRepository,
    rng: RandomSource,
    book_id: str,
    chapter_id: str,
    set_id: Optional[str] = None,
    client_id: Optional[str] = None,
    limit: int = SESSION_QUESTION_LIMIT,
    policy: str = MALFORMED_ANSWER_POLICY,
) -> TestSession:
    session_questions = sample_question_set(
        repository, rng, book_id, chapter_id, set_id, limit=limit, policy=policy
    )
    session = TestSession(
        book_id=book_id,
        chapter_id=chapter_id,
        set_id=set_id,
        client_id=client_id,
    )
    session.start(session_questions)
    store.add(session)
    logger.info(
        "Started session %s with %d questions (chapter=%s)",
        session.session_id,
        session.total,
        chapter_id,
    )
    return session


def answer_question(
    store: SessionStore, session_id: str, question_id: str, selected: str
) -> AnswerFeedback:
    with store.locked(session_id) as session:
        return session.answer_question(question_id, selected)


def advance(store: SessionStore, session_id: str) -> AdvanceResult:
    with store.locked(session_id) as session:
        question = session.advance()
        if question is None:
            logger.info("Session %s completed", session_id)
            return AdvanceResult(completed=True, report=session.report)
        return AdvanceResult(
            completed=False, question=question, index=session.current_index
        )


def toggle_flag(store: SessionStore, session_id: str, question_id: str) -> bool:
    with store.locked(session_id) as session:
        return session.toggle_flag(question_id)


def finalize(store: SessionStore, session_id: str) -> ScoreReport:
    """Force completion, e.g. when the time limit runs out."""
    with store.locked(session_id) as session:
        return session.finalize()


def get_report(store: SessionStore, session_id: str) -> ScoreReport:
    with store.locked(session_id) as session:
        return session.report


def abandon(store: SessionStore, session_id: str) -> None:
    """Discard a session without grading it."""
    if not store.remove(session_id):
        raise SessionNotFoundError(session_id)
    logger.info("Session %s abandoned", session_id)
